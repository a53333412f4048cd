"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .article import AnnotatedArticleOut, ArticleOut, AuthorOut, OwnArticleOut
from .reaction import ReactionRequest
from .user import (
    AuthResponse,
    LoginRequest,
    PasswordChangeRequest,
    PreferencesUpdate,
    ProfileUpdateRequest,
    RegisterRequest,
    UserOut,
)

__all__ = [
    "AnnotatedArticleOut", "ArticleOut", "AuthorOut", "OwnArticleOut",
    "ReactionRequest",
    "AuthResponse", "LoginRequest", "PasswordChangeRequest", "PreferencesUpdate",
    "ProfileUpdateRequest", "RegisterRequest", "UserOut",
]
