# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, date, datetime
from itertools import count
from typing import Any

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="article-feeds-media-"))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from article_feeds.api.v1.dependencies import get_image_store
from article_feeds.core.security import create_access_token, hash_password
from article_feeds.db.session import Base
from article_feeds.db.session import get_db as app_get_session
from article_feeds.main import app as fastapi_app
from article_feeds.models import Article, User, UserPreference
from article_feeds.repositories.article_repo import ArticleRepository
from article_feeds.services.image_store import UploadedImage
from tests.factories import TEST_PASSWORD

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)


class InMemoryImageStore:
    """Image store double that keeps uploads in a dict."""

    def __init__(self) -> None:
        self.images: dict[str, UploadedImage] = {}
        self.deleted: list[str] = []
        self._ids = count(1)

    def save(self, image: UploadedImage) -> str:
        url = f"https://images.test/articles/{next(self._ids)}-{image.filename}"
        self.images[url] = image
        return url

    def delete(self, url: str) -> None:
        self.deleted.append(url)
        self.images.pop(url, None)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every test wipes the tables afterwards.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def image_store() -> InMemoryImageStore:
    return InMemoryImageStore()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    image_store: InMemoryImageStore,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_image_store] = lambda: image_store
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_image_store, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def repo(db_session: Session) -> ArticleRepository:
    return ArticleRepository(db_session)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with a known password."""

    def _make_user(
        first_name: str = "Test",
        preferences: list[str] | None = None,
        **overrides: Any,
    ) -> User:
        n = next(_USER_COUNTER)
        user = User(
            first_name=first_name,
            last_name=overrides.get("last_name", "User"),
            email=overrides.get("email", f"user{n}@example.com"),
            phone=overrides.get("phone", f"+1555000{n:04d}"),
            dob=overrides.get("dob", date(1990, 1, 1)),
            password_hash=hash_password(overrides.get("password", TEST_PASSWORD)),
        )
        user.preference_rows = [
            UserPreference(category=category, position=position)
            for position, category in enumerate(preferences or [])
        ]
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user("Test")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("Other")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def make_article(repo: ArticleRepository, db_session: Session) -> Callable[..., Article]:
    """Return a factory that persists articles with explicit timestamps."""

    def _make_article(
        author: User,
        *,
        category: str = "technology",
        created_at: datetime | None = None,
        title: str = "A test article",
        tags: list[str] | None = None,
        image_url: str | None = None,
    ) -> Article:
        article = repo.create(
            author_id=author.id,
            title=title,
            description="Short description",
            content="Body content",
            category=category,
            tags=tags or [],
            image_url=image_url,
            created_at=created_at or datetime(2024, 1, 1, tzinfo=UTC),
        )
        db_session.commit()
        return article

    return _make_article


@pytest.fixture()
def test_article(make_article: Callable[..., Article], other_user: User) -> Article:
    """Create a baseline article written by the secondary user."""
    return make_article(other_user, category="space", tags=["nasa", "moon"])
