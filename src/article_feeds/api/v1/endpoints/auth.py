# src/article_feeds/api/v1/endpoints/auth.py
"""Authentication endpoints for the Article Feeds API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from article_feeds.api.v1.dependencies import SessionDep
from article_feeds.core.security import create_access_token
from article_feeds.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserOut
from article_feeds.services import user_service
from article_feeds.services.errors import InvalidCredentials, UserAlreadyExists

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(user) -> AuthResponse:
    return AuthResponse(
        user=UserOut.model_validate(user),
        access_token=create_access_token(user.id, {"email": user.email}),
        token_type="bearer",
    )


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
async def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return it with a bearer token."""
    try:
        user = user_service.register_user(
            db,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            phone=payload.phone,
            dob=payload.dob,
            password=payload.password,
            preferences=payload.preferences,
        )
    except UserAlreadyExists as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    return _auth_response(user)


@router.post(
    "/login",
    summary="Authenticate with email or phone and password",
    response_model=AuthResponse,
)
async def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Verify credentials and issue a bearer token."""
    try:
        user = user_service.authenticate(db, payload.email_or_phone, payload.password)
    except InvalidCredentials as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err
    return _auth_response(user)


@router.post("/logout", summary="End the client session")
async def logout() -> dict[str, str]:
    """Tokens are stateless; clients discard them on logout."""
    return {"message": "Logged out successfully"}
