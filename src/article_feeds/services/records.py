"""Plain in-memory article records consumed by the reaction and feed engine.

The engine never sees ORM instances. Each query produces exactly one record
shape: `ArticleWithAuthorRef` when the author is a bare id, or
`ArticleWithAuthorExpanded` when the author has been joined in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Final

CATEGORIES: Final[tuple[str, ...]] = (
    "sports",
    "politics",
    "space",
    "technology",
    "health",
    "entertainment",
)


class ReactionAction(str, Enum):
    """Reactions a user can toggle on an article."""

    LIKE = "like"
    DISLIKE = "dislike"
    BLOCK = "block"


@dataclass(frozen=True)
class AuthorSummary:
    """Public subset of an author's account shown alongside articles."""

    id: int
    first_name: str
    email: str


@dataclass(frozen=True, kw_only=True)
class ArticleRecord:
    """Article content plus its three reaction sets."""

    id: int
    title: str
    description: str
    content: str
    category: str
    tags: tuple[str, ...] = ()
    image_url: str | None = None
    likes: frozenset[int] = frozenset()
    dislikes: frozenset[int] = frozenset()
    blocks: frozenset[int] = frozenset()
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, kw_only=True)
class ArticleWithAuthorRef(ArticleRecord):
    """Article whose author is referenced by id only."""

    author_id: int


@dataclass(frozen=True, kw_only=True)
class ArticleWithAuthorExpanded(ArticleRecord):
    """Article with its author summary joined in."""

    author: AuthorSummary

    @property
    def author_id(self) -> int:
        return self.author.id


@dataclass(frozen=True)
class AnnotatedArticle:
    """An article decorated with flags and counts relative to one viewer."""

    article: ArticleRecord
    is_liked: bool
    is_disliked: bool
    is_blocked: bool
    likes_count: int
    dislikes_count: int
    blocks_count: int
