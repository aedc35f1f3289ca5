"""Shared test fixtures for gatekeep tests."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from gatekeep.config._config import _reset_global_config
from tests._support import Article, Base, Note, Post, Principal

# ---------------------------------------------------------------------------
# Principals and resources
# ---------------------------------------------------------------------------


@pytest.fixture()
def owner() -> Principal:
    return Principal(id=1, role="user")


@pytest.fixture()
def stranger() -> Principal:
    return Principal(id=2, role="user")


@pytest.fixture()
def admin() -> Principal:
    return Principal(id=99, role="admin")


@pytest.fixture()
def post() -> Post:
    return Post(id=10, owner_id=1)


@pytest.fixture(autouse=True)
def _clean_config():
    """Every test starts and ends with the default global config."""
    _reset_global_config()
    yield
    _reset_global_config()


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    """Create an in-memory SQLite engine with all tables."""
    eng = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    """Provide a transactional session that rolls back after each test."""
    factory = sessionmaker(bind=engine)
    sess = factory()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


@pytest.fixture()
def sample_data(session: Session) -> dict[str, list]:
    """Seed the database with articles and notes."""
    articles = [
        Article(id=1, title="Published", is_published=True, owner_id=1),
        Article(id=2, title="Draft by 1", is_published=False, owner_id=1),
        Article(id=3, title="Draft by 2", is_published=False, owner_id=2),
    ]
    notes = [Note(id=1, body="a"), Note(id=2, body="b")]
    session.add_all([*articles, *notes])
    session.flush()
    return {"articles": articles, "notes": notes}
