# src/article_feeds/models/article.py
"""SQLAlchemy models for articles and their ordered tags."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from article_feeds.db.session import Base
from article_feeds.db.time import utcnow
from article_feeds.models.reaction import ArticleReaction
from article_feeds.models.user import User


class Article(Base):
    """Primary content entity written by a single author."""

    __tablename__ = "article"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Optimistic concurrency counter; every UPDATE is conditional on it.
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    author: Mapped[User] = relationship("User", lazy="joined")
    tag_rows: Mapped[list[ArticleTag]] = relationship(
        "ArticleTag",
        cascade="all, delete-orphan",
        order_by="ArticleTag.position",
    )
    reactions: Mapped[list[ArticleReaction]] = relationship(
        ArticleReaction,
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def tags(self) -> list[str]:
        """Return tag values in their authored order."""
        return [row.value for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        self.tag_rows = [
            ArticleTag(position=position, value=value)
            for position, value in enumerate(values)
        ]


class ArticleTag(Base):
    """Free-text tag attached to an article at a fixed position."""

    __tablename__ = "article_tag"

    article_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("article.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
