"""Data access helpers for working with articles."""
from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, selectinload

from article_feeds.db.time import ensure_utc, utcnow
from article_feeds.models.article import Article
from article_feeds.models.reaction import (
    REACTION_BLOCK,
    REACTION_DISLIKE,
    REACTION_LIKE,
    ArticleReaction,
)
from article_feeds.services.records import (
    ArticleRecord,
    ArticleWithAuthorExpanded,
    ArticleWithAuthorRef,
    AuthorSummary,
)

__all__ = ["ArticleRepository", "to_author_ref_record", "to_expanded_record"]

_SET_KINDS = (
    ("likes", REACTION_LIKE),
    ("dislikes", REACTION_DISLIKE),
    ("blocks", REACTION_BLOCK),
)


def _record_fields(article: Article) -> dict[str, object]:
    members: dict[str, set[int]] = {kind: set() for _, kind in _SET_KINDS}
    for reaction in article.reactions:
        members[reaction.kind].add(reaction.user_id)
    return {
        "id": article.id,
        "title": article.title,
        "description": article.description,
        "content": article.content,
        "category": article.category,
        "tags": tuple(article.tags),
        "image_url": article.image_url,
        "likes": frozenset(members[REACTION_LIKE]),
        "dislikes": frozenset(members[REACTION_DISLIKE]),
        "blocks": frozenset(members[REACTION_BLOCK]),
        "created_at": ensure_utc(article.created_at),
        "updated_at": ensure_utc(article.updated_at),
    }


def to_author_ref_record(article: Article) -> ArticleWithAuthorRef:
    """Convert an ORM article into a record carrying only the author id."""
    return ArticleWithAuthorRef(author_id=article.author_id, **_record_fields(article))


def to_expanded_record(article: Article) -> ArticleWithAuthorExpanded:
    """Convert an ORM article into a record with its author summary joined in."""
    author = AuthorSummary(
        id=article.author.id,
        first_name=article.author.first_name,
        email=article.author.email,
    )
    return ArticleWithAuthorExpanded(author=author, **_record_fields(article))


class ArticleRepository:
    """Thin wrapper around database access for article entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _select(self) -> Select[tuple[Article]]:
        return select(Article).options(
            selectinload(Article.reactions),
            selectinload(Article.tag_rows),
        )

    def get_by_id(self, article_id: int) -> Article | None:
        """Return an article by identifier."""
        result = self.session.execute(self._select().where(Article.id == article_id))
        return result.unique().scalars().first()

    def list_for_categories(self, categories: Collection[str] | None = None) -> list[Article]:
        """Return articles newest first, optionally restricted to `categories`."""
        stmt = self._select()
        if categories:
            stmt = stmt.where(Article.category.in_(list(categories)))
        stmt = stmt.order_by(Article.created_at.desc(), Article.id.desc())
        return list(self.session.execute(stmt).unique().scalars())

    def list_by_author(self, author_id: int) -> list[Article]:
        """Return the articles written by `author_id`, newest first."""
        stmt = (
            self._select()
            .where(Article.author_id == author_id)
            .order_by(Article.created_at.desc(), Article.id.desc())
        )
        return list(self.session.execute(stmt).unique().scalars())

    def create(
        self,
        *,
        author_id: int,
        title: str,
        description: str,
        content: str,
        category: str,
        tags: list[str],
        image_url: str | None,
        created_at: datetime | None = None,
    ) -> Article:
        """Insert a new article and return the persisted ORM instance."""
        now = created_at or utcnow()
        article = Article(
            author_id=author_id,
            title=title,
            description=description,
            content=content,
            category=category,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        article.tags = tags
        self.session.add(article)
        self.session.flush()
        return article

    def update_content(self, article: Article, changes: dict[str, object]) -> Article:
        """Apply content changes and bump `updated_at`."""
        for key, value in changes.items():
            setattr(article, key, value)
        article.updated_at = utcnow()
        self.session.flush()
        return article

    def delete(self, article: Article) -> None:
        """Remove an article together with its tags and reactions."""
        self.session.delete(article)
        self.session.flush()

    def store_reaction_state(self, article: Article, record: ArticleRecord) -> Article:
        """Make the stored reaction rows match the sets in `record`.

        The article row is updated alongside the reaction rows, so the flush
        raises `StaleDataError` if another writer bumped the version since
        `article` was loaded.
        """
        wanted = {
            (user_id, kind)
            for field, kind in _SET_KINDS
            for user_id in getattr(record, field)
        }
        for reaction in list(article.reactions):
            key = (reaction.user_id, reaction.kind)
            if key in wanted:
                wanted.discard(key)
            else:
                article.reactions.remove(reaction)
        for user_id, kind in sorted(wanted):
            article.reactions.append(ArticleReaction(user_id=user_id, kind=kind))

        article.updated_at = record.updated_at
        self.session.flush()
        return article
