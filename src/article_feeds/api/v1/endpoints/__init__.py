"""API endpoint modules for version 1."""

from .articles import router as articles_router
from .auth import router as auth_router
from .users import router as users_router

__all__ = [
    "articles_router",
    "auth_router",
    "users_router",
]
