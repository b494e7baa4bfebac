"""
pytest Fixtures for Bookshelf Tests

Shared fixtures used across all test files.

For database tests we use:
- session scope for the engine (SQLite in-memory, created once)
- function scope for sessions, wrapped in a transaction that is rolled
  back after every test so tests never see each other's rows
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are cached on first import.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PAGE_SIZE"] = "4"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db
from bookshelf.main import app
from bookshelf.models import Book


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole session;
    without it the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session joins an outer transaction that is rolled back afterwards,
    so commits made by route handlers never outlive the test.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client that uses the test database session.

    Redirects are not followed so tests can check the 303 responses.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a single fully populated book."""
    book = Book(
        title="1984",
        author="George Orwell",
        genre="Dystopian",
        year=1949,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def catalog(db_session: Session) -> list[Book]:
    """A small catalog with distinct titles, authors, genres and years."""
    books = [
        Book(title="Dune", author="Frank Herbert", genre="Science Fiction", year=1965),
        Book(title="Emma", author="Jane Austen", genre="Classic", year=1815),
        Book(title="The Hobbit", author="J.R.R. Tolkien", genre="Fantasy", year=1937),
        Book(title="Frankenstein", author="Mary Shelley", genre="Horror", year=1818),
        Book(title="Untitled Manuscript", author="Anonymous", genre=None, year=None),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """
    Create ten books for pagination tests.

    Titles are zero-padded ("Paged Book 01" .. "Paged Book 10") so no title
    is a substring of another.
    """
    books = [
        Book(title=f"Paged Book {i:02d}", author=f"Author {i:02d}")
        for i in range(1, 11)
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def book_count(db_session: Session):
    """Return a callable giving the number of stored books."""

    def count() -> int:
        return db_session.execute(select(func.count()).select_from(Book)).scalar()

    return count
