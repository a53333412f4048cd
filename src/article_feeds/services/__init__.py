# src/article_feeds/services/__init__.py
"""Business logic services for the Article Feeds application."""

from .feed import annotate, project_authored_articles, project_feed
from .image_store import ImageStore, LocalImageStore
from .reactions import apply_reaction

__all__ = [
    "annotate",
    "apply_reaction",
    "project_authored_articles",
    "project_feed",
    "ImageStore",
    "LocalImageStore",
]
