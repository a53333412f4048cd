# src/article_feeds/api/v1/endpoints/users.py
"""Account and preference endpoints for the current user."""

from fastapi import APIRouter, HTTPException, status

from article_feeds.api.v1.dependencies import CurrentUserDep, SessionDep
from article_feeds.schemas.user import (
    PasswordChangeRequest,
    PreferencesUpdate,
    ProfileUpdateRequest,
    UserOut,
)
from article_feeds.services import user_service
from article_feeds.services.errors import (
    InvalidCredentials,
    UserAlreadyExists,
    ValidationFailed,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserOut)
async def get_me(current_user: CurrentUserDep) -> UserOut:
    """Return the authenticated user's profile."""
    return UserOut.model_validate(current_user)


@router.put("/me/profile", response_model=UserOut)
async def update_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserOut:
    """Update name and phone number."""
    try:
        user = user_service.update_profile(
            db,
            current_user,
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
        )
    except UserAlreadyExists as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    return UserOut.model_validate(user)


@router.put("/me/password")
async def change_password(
    payload: PasswordChangeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Change the account password."""
    try:
        user_service.change_password(
            db,
            current_user,
            current_password=payload.current_password,
            new_password=payload.new_password,
            confirm_password=payload.confirm_password,
        )
    except ValidationFailed as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    except InvalidCredentials as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err
    return {"message": "Password updated successfully."}


@router.put("/me/preferences", response_model=UserOut)
async def update_preferences(
    payload: PreferencesUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserOut:
    """Replace the categories that filter the user's feed."""
    user = user_service.set_preferences(db, current_user, payload.preferences)
    return UserOut.model_validate(user)
