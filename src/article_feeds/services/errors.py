"""Domain exceptions raised by the Article Feeds service layer.

Every error here is a caller-input error. The API layer translates them into
4xx responses; anything not derived from `ArticleFeedsError` propagates
unchanged.
"""

from __future__ import annotations


class ArticleFeedsError(RuntimeError):
    """Base exception for all Article Feeds domain failures."""


class ArticleNotFound(ArticleFeedsError):
    """Raised when an article id does not resolve to a stored article."""

    def __init__(self, article_id: object) -> None:
        super().__init__(f"Article {article_id} not found")
        self.article_id = article_id


class InvalidAction(ArticleFeedsError):
    """Raised when a reaction action is not one of like, dislike or block."""

    def __init__(self, action: object) -> None:
        super().__init__(f"Invalid action: {action!r}")
        self.action = action


class Unauthenticated(ArticleFeedsError):
    """Raised when an operation requires an acting user and none was supplied."""


class ViewerRequired(ArticleFeedsError):
    """Raised when a feed is requested without a viewer id."""


class NotArticleAuthor(ArticleFeedsError):
    """Raised when someone other than the author edits or deletes an article."""


class ReactionConflict(ArticleFeedsError):
    """Raised when concurrent updates keep invalidating a reaction toggle."""


class ValidationFailed(ArticleFeedsError):
    """Raised when submitted article or account data is rejected."""


class UserAlreadyExists(ArticleFeedsError):
    """Raised when registering with an email or phone that is already taken."""


class InvalidCredentials(ArticleFeedsError):
    """Raised when a login or password check fails."""
