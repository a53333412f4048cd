# src/article_feeds/api/v1/endpoints/articles.py
"""Article authoring, feed and reaction endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from article_feeds.api.v1.dependencies import ArticleRepoDep, CurrentUserDep, ImageStoreDep
from article_feeds.schemas.article import AnnotatedArticleOut, ArticleOut, OwnArticleOut
from article_feeds.schemas.reaction import ReactionRequest
from article_feeds.services import article_service
from article_feeds.services.errors import (
    ArticleFeedsError,
    ArticleNotFound,
    InvalidAction,
    NotArticleAuthor,
    ReactionConflict,
    Unauthenticated,
    ValidationFailed,
    ViewerRequired,
)
from article_feeds.services.feed import annotate
from article_feeds.services.image_store import UploadedImage

router = APIRouter(prefix="/articles", tags=["articles"])

_ERROR_STATUS: dict[type[ArticleFeedsError], int] = {
    ArticleNotFound: status.HTTP_404_NOT_FOUND,
    InvalidAction: status.HTTP_400_BAD_REQUEST,
    ValidationFailed: status.HTTP_400_BAD_REQUEST,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    ViewerRequired: status.HTTP_401_UNAUTHORIZED,
    NotArticleAuthor: status.HTTP_403_FORBIDDEN,
    ReactionConflict: status.HTTP_409_CONFLICT,
}


def _http_error(err: ArticleFeedsError) -> HTTPException:
    code = _ERROR_STATUS.get(type(err), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(err))


async def _read_image(upload: UploadFile | None) -> UploadedImage | None:
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return UploadedImage(
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        data=data,
    )


@router.post(
    "",
    response_model=ArticleOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new article",
)
async def create_article(
    current_user: CurrentUserDep,
    repo: ArticleRepoDep,
    image_store: ImageStoreDep,
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    content: Annotated[str, Form()],
    category: Annotated[str, Form()],
    tags: Annotated[list[str] | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> ArticleOut:
    """Create an article authored by the current user.

    Raises:
        HTTPException: 400 if a field or the image is rejected.
    """
    try:
        record = article_service.create_article(
            repo=repo,
            image_store=image_store,
            author_id=current_user.id,
            draft=article_service.ArticleDraft(
                title=title,
                description=description,
                content=content,
                category=category,
                tags=tags or [],
            ),
            image=await _read_image(image),
        )
    except ArticleFeedsError as err:
        raise _http_error(err) from err
    return ArticleOut.from_record(record)


@router.get("/feed", response_model=list[AnnotatedArticleOut])
async def get_feed(current_user: CurrentUserDep, repo: ArticleRepoDep) -> list[AnnotatedArticleOut]:
    """Return the current user's feed filtered by their stored preferences."""
    try:
        feed = article_service.build_feed(
            repo=repo,
            viewer_id=current_user.id,
            preferences=current_user.preferences,
        )
    except ArticleFeedsError as err:
        raise _http_error(err) from err
    return [AnnotatedArticleOut.from_annotated(item) for item in feed]


@router.get("/mine", response_model=list[OwnArticleOut])
async def get_my_articles(current_user: CurrentUserDep, repo: ArticleRepoDep) -> list[OwnArticleOut]:
    """Return the articles written by the current user."""
    records = article_service.list_authored_articles(repo=repo, author_id=current_user.id)
    return [OwnArticleOut.from_record(record) for record in records]


@router.get("/{article_id}", response_model=AnnotatedArticleOut)
async def get_article(
    article_id: int,
    current_user: CurrentUserDep,
    repo: ArticleRepoDep,
) -> AnnotatedArticleOut:
    """Return a single article annotated for the current user."""
    try:
        annotated = article_service.get_annotated_article(
            repo=repo, article_id=article_id, viewer_id=current_user.id
        )
    except ArticleFeedsError as err:
        raise _http_error(err) from err
    return AnnotatedArticleOut.from_annotated(annotated)


@router.put("/{article_id}", response_model=ArticleOut)
async def edit_article(
    article_id: int,
    current_user: CurrentUserDep,
    repo: ArticleRepoDep,
    image_store: ImageStoreDep,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    tags: Annotated[list[str] | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> ArticleOut:
    """Partially update an article written by the current user."""
    try:
        record = article_service.edit_article(
            repo=repo,
            image_store=image_store,
            article_id=article_id,
            user_id=current_user.id,
            changes=article_service.ArticleChanges(
                title=title,
                description=description,
                content=content,
                category=category,
                tags=tags,
            ),
            image=await _read_image(image),
        )
    except ArticleFeedsError as err:
        raise _http_error(err) from err
    return ArticleOut.from_record(record)


@router.delete("/{article_id}")
async def delete_article(
    article_id: int,
    current_user: CurrentUserDep,
    repo: ArticleRepoDep,
    image_store: ImageStoreDep,
) -> dict[str, str]:
    """Delete an article written by the current user."""
    try:
        article_service.delete_article(
            repo=repo,
            image_store=image_store,
            article_id=article_id,
            user_id=current_user.id,
        )
    except ArticleFeedsError as err:
        raise _http_error(err) from err
    return {"message": "Article deleted successfully"}


@router.put("/{article_id}/reaction", response_model=AnnotatedArticleOut)
async def react(
    article_id: int,
    payload: ReactionRequest,
    current_user: CurrentUserDep,
    repo: ArticleRepoDep,
) -> AnnotatedArticleOut:
    """Toggle a like, dislike or block and return the updated article."""
    try:
        record = article_service.react_to_article(
            repo=repo,
            article_id=article_id,
            user_id=current_user.id,
            action=payload.action,
        )
    except ArticleFeedsError as err:
        raise _http_error(err) from err
    return AnnotatedArticleOut.from_annotated(annotate(record, current_user.id))
