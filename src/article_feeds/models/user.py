# src/article_feeds/models/user.py
"""SQLAlchemy models for registered users and their feed preferences."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from article_feeds.db.session import Base
from article_feeds.db.time import utcnow


class User(Base):
    """Registered account identified by a unique email and phone number."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    preference_rows: Mapped[list[UserPreference]] = relationship(
        "UserPreference",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserPreference.position",
    )

    @property
    def preferences(self) -> list[str]:
        """Return the stored categories in the order the user chose them."""
        return [row.category for row in self.preference_rows]


class UserPreference(Base):
    """One category a user wants to see in their feed."""

    __tablename__ = "user_preference"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Case-sensitive; values outside the known category set are kept as-is.
    category: Mapped[str] = mapped_column(Text, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    user: Mapped[User] = relationship("User", back_populates="preference_rows")
