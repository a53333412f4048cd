# src/article_feeds/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import articles_router, auth_router, users_router

__all__ = [
    "articles_router",
    "auth_router",
    "users_router",
]
