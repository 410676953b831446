"""Shared pytest fixtures and test utilities for record-serializer tests."""

from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from recordserializer.config import get_settings
from recordserializer.serializer import (
    DateTimeNormalizer,
    ModelNormalizer,
    Serializer,
)
from tests.models import Article, Author, Base


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from a clean environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def normalizer() -> ModelNormalizer:
    """Create a model normalizer composed with a serializer."""
    model_normalizer = ModelNormalizer()
    Serializer([model_normalizer, DateTimeNormalizer()])
    return model_normalizer


@pytest.fixture
def serializer(normalizer) -> Serializer:
    """The serializer the normalizer fixture is composed with."""
    return normalizer.serializer


@pytest.fixture
def author() -> Author:
    """Create a sample author."""
    return Author(id=7, name="Ada", password="secret")


@pytest.fixture
def article(author) -> Article:
    """Create a sample article with its author loaded."""
    article = Article(title="Hi", body="...", author_id=author.id)
    article.set_relation("author", author)
    return article


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with tables created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Get a database session with automatic rollback and close."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
