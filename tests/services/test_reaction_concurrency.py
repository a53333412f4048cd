# tests/services/test_reaction_concurrency.py
"""Interleaved reaction writers against a file-backed database."""

from collections.abc import Iterator
from datetime import date

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from article_feeds.db.session import Base
from article_feeds.models import ArticleReaction, User
from article_feeds.repositories.article_repo import ArticleRepository, to_expanded_record
from article_feeds.services import article_service
from article_feeds.services.reactions import apply_reaction


@pytest.fixture()
def session_factory(tmp_path) -> Iterator[sessionmaker[Session]]:
    engine = create_engine(f"sqlite:///{tmp_path / 'reactions.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture()
def seeded(session_factory) -> tuple[int, int, int]:
    """Persist two readers and one article; return their ids."""
    with session_factory() as session:
        readers = [
            User(
                first_name=name,
                last_name="Reader",
                email=f"{name.lower()}@example.com",
                phone=f"+1555999000{index}",
                dob=date(1990, 1, 1),
                password_hash="unused",
            )
            for index, name in enumerate(["Alice", "Bob"])
        ]
        session.add_all(readers)
        session.flush()
        article = ArticleRepository(session).create(
            author_id=readers[0].id,
            title="Shared article",
            description="Read by two people at once",
            content="Body",
            category="space",
            tags=[],
            image_url=None,
        )
        session.commit()
        return readers[0].id, readers[1].id, article.id


def _stored_reactions(session_factory, article_id: int) -> set[tuple[int, str]]:
    with session_factory() as session:
        rows = session.scalars(
            select(ArticleReaction).where(ArticleReaction.article_id == article_id)
        )
        return {(row.user_id, row.kind) for row in rows}


def test_stale_article_write_is_rejected(session_factory, seeded) -> None:
    alice, bob, article_id = seeded
    with session_factory() as session_a, session_factory() as session_b:
        repo_a = ArticleRepository(session_a)
        stale = repo_a.get_by_id(article_id)

        article_service.react_to_article(
            repo=ArticleRepository(session_b), article_id=article_id, user_id=bob, action="like"
        )

        updated = apply_reaction(to_expanded_record(stale), alice, "like")
        with pytest.raises(StaleDataError):
            repo_a.store_reaction_state(stale, updated)
        session_a.rollback()

    assert _stored_reactions(session_factory, article_id) == {(bob, "like")}


def test_interleaved_likes_keep_both_users(session_factory, seeded) -> None:
    alice, bob, article_id = seeded
    with session_factory() as session_a, session_factory() as session_b:
        repo_a = ArticleRepository(session_a)
        repo_a.get_by_id(article_id)

        article_service.react_to_article(
            repo=ArticleRepository(session_b), article_id=article_id, user_id=bob, action="like"
        )
        record = article_service.react_to_article(
            repo=repo_a, article_id=article_id, user_id=alice, action="like", max_retries=3
        )

    assert record.likes == {alice, bob}
    assert _stored_reactions(session_factory, article_id) == {(alice, "like"), (bob, "like")}
