"""Service-level helpers for authoring, reacting to and listing articles."""
from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from article_feeds.core.settings import settings
from article_feeds.models.article import Article
from article_feeds.repositories.article_repo import (
    ArticleRepository,
    to_author_ref_record,
    to_expanded_record,
)
from article_feeds.services.errors import (
    ArticleNotFound,
    NotArticleAuthor,
    ReactionConflict,
    Unauthenticated,
    ValidationFailed,
)
from article_feeds.services.feed import annotate, project_authored_articles, project_feed
from article_feeds.services.image_store import ImageStore, UploadedImage, validate_image
from article_feeds.services.reactions import apply_reaction, parse_action
from article_feeds.services.records import (
    CATEGORIES,
    AnnotatedArticle,
    ArticleWithAuthorExpanded,
    ArticleWithAuthorRef,
    ReactionAction,
)

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3


@dataclass(frozen=True)
class ArticleDraft:
    """Content fields submitted when creating an article."""

    title: str
    description: str
    content: str
    category: str
    tags: list[str]


@dataclass(frozen=True)
class ArticleChanges:
    """Partial content update; ``None`` means "leave unchanged"."""

    title: str | None = None
    description: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            key: value
            for key, value in (
                ("title", self.title),
                ("description", self.description),
                ("content", self.content),
                ("category", self.category),
                ("tags", self.tags),
            )
            if value is not None
        }


def _validate_title(title: str) -> str:
    title = title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        raise ValidationFailed(
            f"Title must be at least {MIN_TITLE_LENGTH} characters long."
        )
    return title


def _validate_category(category: str) -> str:
    if category not in CATEGORIES:
        raise ValidationFailed(f"Unknown category: {category!r}")
    return category


def _clean_tags(tags: list[str]) -> list[str]:
    return [tag.strip() for tag in tags if tag and tag.strip()]


def _get_owned_article(repo: ArticleRepository, article_id: int, user_id: int) -> Article:
    article = repo.get_by_id(article_id)
    if article is None:
        raise ArticleNotFound(article_id)
    if article.author_id != user_id:
        raise NotArticleAuthor("Only the author may modify this article")
    return article


def _discard_upload(
    repo: ArticleRepository, image_store: ImageStore, image_url: str | None
) -> None:
    repo.session.rollback()
    if image_url:
        logger.warning("Removing image %s after a failed write", image_url)
        image_store.delete(image_url)


def create_article(
    *,
    repo: ArticleRepository,
    image_store: ImageStore,
    author_id: int,
    draft: ArticleDraft,
    image: UploadedImage | None = None,
) -> ArticleWithAuthorExpanded:
    """Validate and persist a new article, uploading its image if one is given.

    Raises:
        ValidationFailed: If a field or the image is rejected.
    """
    for name in ("description", "content"):
        if not getattr(draft, name).strip():
            raise ValidationFailed(f"Field '{name}' is required.")
    title = _validate_title(draft.title)
    category = _validate_category(draft.category)

    image_url = None
    if image is not None:
        validate_image(image, max_bytes=settings.max_image_bytes)
        image_url = image_store.save(image)

    try:
        article = repo.create(
            author_id=author_id,
            title=title,
            description=draft.description,
            content=draft.content,
            category=category,
            tags=_clean_tags(draft.tags),
            image_url=image_url,
        )
        repo.session.commit()
    except SQLAlchemyError:
        _discard_upload(repo, image_store, image_url)
        raise
    logger.info("User %s created article %s", author_id, article.id)
    return to_expanded_record(article)


def edit_article(
    *,
    repo: ArticleRepository,
    image_store: ImageStore,
    article_id: int,
    user_id: int,
    changes: ArticleChanges,
    image: UploadedImage | None = None,
) -> ArticleWithAuthorExpanded:
    """Apply a partial content update made by the article's author.

    A new image replaces the stored one, which is then deleted.

    Raises:
        ValidationFailed: If nothing is being changed or a field is rejected.
        ArticleNotFound: If the article does not exist.
        NotArticleAuthor: If `user_id` did not write the article.
    """
    updates = changes.as_dict()
    if not updates and image is None:
        raise ValidationFailed("No update fields provided.")
    if "title" in updates:
        updates["title"] = _validate_title(changes.title or "")
    if "category" in updates:
        updates["category"] = _validate_category(changes.category or "")
    if "tags" in updates:
        updates["tags"] = _clean_tags(changes.tags or [])

    article = _get_owned_article(repo, article_id, user_id)

    previous_image = article.image_url
    new_image = None
    if image is not None:
        validate_image(image, max_bytes=settings.max_image_bytes)
        new_image = image_store.save(image)
        updates["image_url"] = new_image

    try:
        repo.update_content(article, updates)
        repo.session.commit()
    except SQLAlchemyError:
        _discard_upload(repo, image_store, new_image)
        raise
    if image is not None and previous_image:
        image_store.delete(previous_image)
    logger.info("User %s edited article %s", user_id, article_id)
    return to_expanded_record(article)


def delete_article(
    *,
    repo: ArticleRepository,
    image_store: ImageStore,
    article_id: int,
    user_id: int,
) -> None:
    """Delete an article written by `user_id` along with its stored image."""
    article = _get_owned_article(repo, article_id, user_id)
    image_url = article.image_url
    repo.delete(article)
    repo.session.commit()
    if image_url:
        image_store.delete(image_url)
    logger.info("User %s deleted article %s", user_id, article_id)


def react_to_article(
    *,
    repo: ArticleRepository,
    article_id: int,
    user_id: int | None,
    action: ReactionAction | str | None,
    max_retries: int | None = None,
) -> ArticleWithAuthorExpanded:
    """Toggle `user_id`'s reaction and persist it with optimistic concurrency.

    Each attempt loads the current reaction sets, applies the toggle and
    writes back conditionally on the article version. A concurrent writer
    causes a rollback and a fresh attempt.

    Raises:
        Unauthenticated: If no user id is supplied.
        InvalidAction: If `action` is not like, dislike or block.
        ArticleNotFound: If the article does not exist.
        ReactionConflict: If every attempt lost a race.
    """
    if user_id is None or user_id == "":
        raise Unauthenticated("An acting user is required to react")
    reaction = parse_action(action)
    attempts = max_retries if max_retries is not None else settings.reaction_max_retries

    for attempt in range(1, max(attempts, 1) + 1):
        article = repo.get_by_id(article_id)
        if article is None:
            raise ArticleNotFound(article_id)

        updated = apply_reaction(to_expanded_record(article), user_id, reaction)
        try:
            repo.store_reaction_state(article, updated)
            repo.session.commit()
        except StaleDataError:
            repo.session.rollback()
            logger.warning(
                "Reaction on article %s lost a concurrent update (attempt %d/%d)",
                article_id,
                attempt,
                attempts,
            )
            continue
        logger.info("User %s toggled %s on article %s", user_id, reaction.value, article_id)
        return updated

    raise ReactionConflict(f"Could not apply reaction to article {article_id}; try again")


def get_annotated_article(
    *, repo: ArticleRepository, article_id: int, viewer_id: int
) -> AnnotatedArticle:
    """Return a single article annotated for `viewer_id`."""
    article = repo.get_by_id(article_id)
    if article is None:
        raise ArticleNotFound(article_id)
    return annotate(to_expanded_record(article), viewer_id)


def build_feed(
    *,
    repo: ArticleRepository,
    viewer_id: int,
    preferences: Collection[str],
) -> list[AnnotatedArticle]:
    """Load candidate articles and project the viewer's personalised feed."""
    articles = repo.list_for_categories(preferences)
    return project_feed([to_expanded_record(a) for a in articles], viewer_id, preferences)


def list_authored_articles(
    *, repo: ArticleRepository, author_id: int
) -> list[ArticleWithAuthorRef]:
    """Return the articles written by `author_id` for the owner's editing view."""
    articles = repo.list_by_author(author_id)
    return project_authored_articles([to_author_ref_record(a) for a in articles], author_id)
