"""Reaction toggle over an article's like, dislike and block sets."""
from __future__ import annotations

import dataclasses
import logging
from typing import TypeVar

from article_feeds.db.time import utcnow
from article_feeds.services.errors import InvalidAction, Unauthenticated
from article_feeds.services.records import ArticleRecord, ReactionAction

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=ArticleRecord)

# Reaction set each action toggles, and the set it scrubs afterwards.
_TARGETS: dict[ReactionAction, tuple[str, str | None]] = {
    ReactionAction.LIKE: ("likes", "dislikes"),
    ReactionAction.DISLIKE: ("dislikes", "likes"),
    ReactionAction.BLOCK: ("blocks", None),
}


def parse_action(action: ReactionAction | str | None) -> ReactionAction:
    """Return the `ReactionAction` named by `action` or raise `InvalidAction`."""
    if isinstance(action, ReactionAction):
        return action
    try:
        return ReactionAction(action)
    except ValueError as err:
        raise InvalidAction(action) from err


def _toggle(members: frozenset[int], user_id: int) -> frozenset[int]:
    if user_id in members:
        return members - {user_id}
    return members | {user_id}


def apply_reaction(
    article: RecordT,
    acting_user_id: int | None,
    action: ReactionAction | str | None,
) -> RecordT:
    """Return a copy of `article` with `acting_user_id`'s reaction toggled.

    The named set is toggled (add if absent, remove if present). A like then
    always removes the user from dislikes and a dislike always removes them
    from likes, so the two sets never share a member. Blocks do not touch the
    other sets. The input record is left unchanged.

    Args:
        article: Current article state.
        acting_user_id: User performing the reaction. The article's own
            author is accepted.
        action: One of ``"like"``, ``"dislike"`` or ``"block"``.

    Returns:
        A record of the same type with updated sets and a fresh ``updated_at``.

    Raises:
        Unauthenticated: If no acting user id is supplied.
        InvalidAction: If `action` is outside the closed set.
    """
    if acting_user_id is None or acting_user_id == "":
        raise Unauthenticated("An acting user is required to react")
    reaction = parse_action(action)

    target, scrubbed = _TARGETS[reaction]
    changes: dict[str, object] = {
        target: _toggle(getattr(article, target), acting_user_id),
    }
    if scrubbed is not None:
        changes[scrubbed] = getattr(article, scrubbed) - {acting_user_id}
    changes["updated_at"] = utcnow()

    logger.debug(
        "Applied %s by user %s to article %s", reaction.value, acting_user_id, article.id
    )
    return dataclasses.replace(article, **changes)
