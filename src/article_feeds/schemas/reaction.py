# src/article_feeds/schemas/reaction.py
"""Reaction-related Pydantic schemas."""

from pydantic import BaseModel, Field


class ReactionRequest(BaseModel):
    """Schema for toggling a reaction on an article."""

    # Free-form so unknown actions reach the service and fail with 400.
    action: str = Field(..., description="One of 'like', 'dislike' or 'block'")
