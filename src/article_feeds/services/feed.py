"""Feed projection: preference filtering, recency ordering and annotation."""
from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import TypeVar

from article_feeds.services.errors import ViewerRequired
from article_feeds.services.records import (
    AnnotatedArticle,
    ArticleRecord,
    ArticleWithAuthorExpanded,
    ArticleWithAuthorRef,
)

RecordT = TypeVar("RecordT", bound=ArticleRecord)
AuthoredT = TypeVar("AuthoredT", ArticleWithAuthorRef, ArticleWithAuthorExpanded)


def _newest_first(articles: Iterable[RecordT]) -> list[RecordT]:
    # sorted() is stable, so equal timestamps keep their input order.
    return sorted(articles, key=lambda article: article.created_at, reverse=True)


def annotate(article: ArticleRecord, viewer_id: int) -> AnnotatedArticle:
    """Compute the viewer-relative flags and counts for one article."""
    return AnnotatedArticle(
        article=article,
        is_liked=viewer_id in article.likes,
        is_disliked=viewer_id in article.dislikes,
        is_blocked=viewer_id in article.blocks,
        likes_count=len(article.likes),
        dislikes_count=len(article.dislikes),
        blocks_count=len(article.blocks),
    )


def project_feed(
    articles: Iterable[ArticleWithAuthorExpanded],
    viewer_id: int | None,
    preferred_categories: Collection[str],
) -> list[AnnotatedArticle]:
    """Build the personalised feed for `viewer_id`.

    Articles are kept when `preferred_categories` is empty or contains the
    article's category (exact, case-sensitive match), ordered newest first,
    and annotated for the viewer. Source records are not modified.

    Raises:
        ViewerRequired: If `viewer_id` is missing.
    """
    if viewer_id is None or viewer_id == "":
        raise ViewerRequired("A viewer id is required to build a feed")

    wanted = frozenset(preferred_categories)
    if wanted:
        articles = [article for article in articles if article.category in wanted]
    return [annotate(article, viewer_id) for article in _newest_first(articles)]


def project_authored_articles(
    articles: Iterable[AuthoredT],
    author_id: int,
) -> list[AuthoredT]:
    """Return the articles written by `author_id`, newest first, unannotated."""
    return _newest_first(article for article in articles if article.author_id == author_id)
