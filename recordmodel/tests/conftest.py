"""Test configuration and fixtures."""

import os

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

from recordmodel.db import Base, provider_scope  # noqa: E402 - must set env vars before importing
from sample_models import Article, Author, Note  # noqa: E402

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def provider(db_session):
    """Bind a persistence provider on the default connection source."""
    with provider_scope(db_session) as bound:
        yield bound


@pytest.fixture
def statements():
    """Collect SQL statements sent to the test engine."""
    captured = []

    def _capture(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(engine, "before_cursor_execute", _capture)
    yield captured
    event.remove(engine, "before_cursor_execute", _capture)


@pytest.fixture
def ten_notes(provider):
    """Notes with ids 1..10."""
    notes = []
    for number in range(1, 11):
        note = Note(text=f"note {number}")
        note.save()
        notes.append(note)
    return notes


@pytest.fixture
def authors(provider):
    """Authors inserted out of alphabetical order."""
    created = []
    for name in ("Mallory", "Alice", "Zed", "Bob"):
        author = Author(name=name)
        author.save()
        created.append(author)
    return created


@pytest.fixture
def test_article(provider):
    article = Article(title="Hello World", body="First post")
    article.save()
    return article
