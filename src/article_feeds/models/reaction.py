# src/article_feeds/models/reaction.py
"""Models capturing like/dislike/block reactions on articles."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from article_feeds.db.session import Base

REACTION_LIKE = "like"
REACTION_DISLIKE = "dislike"
REACTION_BLOCK = "block"


class ArticleReaction(Base):
    """Membership of one user in one of an article's reaction sets."""

    __tablename__ = "article_reaction"
    __table_args__ = (
        CheckConstraint(
            "kind IN ('like', 'dislike', 'block')",
            name="ck_article_reaction_kind",
        ),
        Index("ix_article_reaction_article_id", "article_id"),
    )

    article_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("article.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Composite primary key gives each reaction set set semantics.
    kind: Mapped[str] = mapped_column(Text, primary_key=True)
