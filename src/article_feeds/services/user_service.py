"""CRUD-style helpers for managing user accounts and feed preferences."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from article_feeds.core import security
from article_feeds.models.user import User, UserPreference
from article_feeds.services.errors import (
    InvalidCredentials,
    UserAlreadyExists,
    ValidationFailed,
)

__all__ = [
    "get_user",
    "register_user",
    "authenticate",
    "update_profile",
    "change_password",
    "set_preferences",
]

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _preference_rows(preferences: Iterable[str]) -> list[UserPreference]:
    # Set semantics, first occurrence wins.
    unique = dict.fromkeys(p for p in preferences if p)
    return [
        UserPreference(category=category, position=position)
        for position, category in enumerate(unique)
    ]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def register_user(
    db: Session,
    *,
    first_name: str,
    last_name: str,
    email: str,
    phone: str,
    dob: date,
    password: str,
    preferences: Iterable[str] = (),
) -> User:
    """Persist a new user with a hashed password.

    Raises:
        UserAlreadyExists: If the email or phone is already registered.
    """
    existing = db.query(User).filter(or_(User.email == email, User.phone == phone)).first()
    if existing is not None:
        raise UserAlreadyExists("User already exists")

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        dob=dob,
        password_hash=security.hash_password(password),
    )
    user.preference_rows = _preference_rows(preferences)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, email_or_phone: str, password: str) -> User:
    """Return the user matching the credentials or raise `InvalidCredentials`."""
    user = (
        db.query(User)
        .filter(or_(User.email == email_or_phone, User.phone == email_or_phone))
        .first()
    )
    if user is None or not security.verify_password(password, user.password_hash):
        logger.warning("Failed login attempt")
        raise InvalidCredentials("Invalid credentials")
    return user


def update_profile(
    db: Session,
    db_user: User,
    *,
    first_name: str,
    last_name: str,
    phone: str,
) -> User:
    """Update a user's name and phone number."""
    clash = db.query(User).filter(User.phone == phone, User.id != db_user.id).first()
    if clash is not None:
        raise UserAlreadyExists("Phone number is already in use")

    db_user.first_name = first_name
    db_user.last_name = last_name
    db_user.phone = phone
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def change_password(
    db: Session,
    db_user: User,
    *,
    current_password: str,
    new_password: str,
    confirm_password: str,
) -> None:
    """Replace a user's password after checking the current one.

    Raises:
        ValidationFailed: If the new password is too short or unconfirmed.
        InvalidCredentials: If `current_password` is wrong.
    """
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )
    if new_password != confirm_password:
        raise ValidationFailed("New passwords do not match.")
    if not security.verify_password(current_password, db_user.password_hash):
        raise InvalidCredentials("Current password is incorrect.")

    db_user.password_hash = security.hash_password(new_password)
    db.add(db_user)
    db.commit()
    logger.info("User %s changed their password", db_user.id)


def set_preferences(db: Session, db_user: User, preferences: Iterable[str]) -> User:
    """Replace the categories used to filter a user's feed.

    Values are stored as given; categories no article uses simply never match.
    """
    db_user.preference_rows = _preference_rows(preferences)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
