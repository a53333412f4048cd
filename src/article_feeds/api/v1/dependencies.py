"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from article_feeds.core.settings import settings
from article_feeds.db.session import get_db
from article_feeds.models import User
from article_feeds.repositories.article_repo import ArticleRepository
from article_feeds.services.image_store import ImageStore

# HTTP Bearer scheme for JWT authentication; missing headers are reported as 401 below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If the token is missing or invalid, or the user is gone
    """
    if credentials is None:
        raise _credentials_error("Authentication required")
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise _credentials_error("Invalid token") from err

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as err:
        raise _credentials_error() from err

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_article_repository(db: SessionDep) -> ArticleRepository:
    """Return an article repository bound to the request session."""
    return ArticleRepository(db)


def get_image_store(request: Request) -> ImageStore:
    """Return the image store configured on the application at start-up."""
    return request.app.state.image_store


# Type aliases for dependencies shared across routers
CurrentUserDep = Annotated[User, Depends(get_current_user)]
ArticleRepoDep = Annotated[ArticleRepository, Depends(get_article_repository)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]
