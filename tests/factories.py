# tests/factories.py
"""In-memory record builders for engine unit tests."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from itertools import count

from article_feeds.services.records import (
    ArticleWithAuthorExpanded,
    ArticleWithAuthorRef,
    AuthorSummary,
)

_IDS = count(1)
BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)
TEST_PASSWORD = "correct-horse-battery"


def at(hours: int) -> datetime:
    """Return a timestamp `hours` after the base time."""
    return BASE_TIME + timedelta(hours=hours)


def make_record(
    *,
    author_id: int = 100,
    category: str = "technology",
    created_at: datetime | None = None,
    likes: set[int] | frozenset[int] = frozenset(),
    dislikes: set[int] | frozenset[int] = frozenset(),
    blocks: set[int] | frozenset[int] = frozenset(),
    title: str | None = None,
) -> ArticleWithAuthorExpanded:
    article_id = next(_IDS)
    created = created_at or BASE_TIME
    return ArticleWithAuthorExpanded(
        id=article_id,
        title=title or f"Article {article_id}",
        description="description",
        content="content",
        category=category,
        tags=("tag",),
        likes=frozenset(likes),
        dislikes=frozenset(dislikes),
        blocks=frozenset(blocks),
        created_at=created,
        updated_at=created,
        author=AuthorSummary(id=author_id, first_name="Author", email="author@example.com"),
    )


def make_ref_record(*, author_id: int, created_at: datetime | None = None) -> ArticleWithAuthorRef:
    article_id = next(_IDS)
    created = created_at or BASE_TIME
    return ArticleWithAuthorRef(
        id=article_id,
        title=f"Article {article_id}",
        description="description",
        content="content",
        category="health",
        created_at=created,
        updated_at=created,
        author_id=author_id,
    )
