# src/article_feeds/schemas/article.py
"""Article-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from article_feeds.services.records import (
    AnnotatedArticle,
    ArticleRecord,
    ArticleWithAuthorExpanded,
    ArticleWithAuthorRef,
)


class AuthorOut(BaseModel):
    """Public author details embedded in article responses."""

    id: int
    first_name: str
    email: str


class _ArticleBase(BaseModel):
    id: int
    title: str
    description: str
    content: str
    category: str
    tags: list[str]
    image_url: str | None = None
    likes: list[int] = Field(default_factory=list)
    dislikes: list[int] = Field(default_factory=list)
    blocks: list[int] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def _base_fields(record: ArticleRecord) -> dict[str, object]:
        return {
            "id": record.id,
            "title": record.title,
            "description": record.description,
            "content": record.content,
            "category": record.category,
            "tags": list(record.tags),
            "image_url": record.image_url,
            "likes": sorted(record.likes),
            "dislikes": sorted(record.dislikes),
            "blocks": sorted(record.blocks),
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }


class ArticleOut(_ArticleBase):
    """Article with its author expanded."""

    author: AuthorOut

    @classmethod
    def from_record(cls, record: ArticleWithAuthorExpanded) -> ArticleOut:
        author = AuthorOut(
            id=record.author.id,
            first_name=record.author.first_name,
            email=record.author.email,
        )
        return cls(author=author, **cls._base_fields(record))


class OwnArticleOut(_ArticleBase):
    """Article listed in its author's own editing view."""

    author_id: int

    @classmethod
    def from_record(cls, record: ArticleWithAuthorRef) -> OwnArticleOut:
        return cls(author_id=record.author_id, **cls._base_fields(record))


class AnnotatedArticleOut(ArticleOut):
    """Article with flags and counts relative to the requesting user."""

    is_liked: bool
    is_disliked: bool
    is_blocked: bool
    likes_count: int
    dislikes_count: int
    blocks_count: int

    @classmethod
    def from_annotated(cls, annotated: AnnotatedArticle) -> AnnotatedArticleOut:
        base = ArticleOut.from_record(annotated.article)  # type: ignore[arg-type]
        return cls(
            **base.model_dump(),
            is_liked=annotated.is_liked,
            is_disliked=annotated.is_disliked,
            is_blocked=annotated.is_blocked,
            likes_count=annotated.likes_count,
            dislikes_count=annotated.dislikes_count,
            blocks_count=annotated.blocks_count,
        )
