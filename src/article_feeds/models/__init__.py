# src/article_feeds/models/__init__.py
"""SQLAlchemy models for the Article Feeds application."""

from .article import Article, ArticleTag
from .reaction import ArticleReaction
from .user import User, UserPreference

__all__ = [
    "Article", "ArticleTag",
    "ArticleReaction",
    "User", "UserPreference",
]
