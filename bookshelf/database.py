"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Bookshelf application.

SQLite is the default store, a single file next to the app; any
SQLAlchemy URL works, e.g. PostgreSQL through psycopg2.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookshelf.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# SQLite connections are shared between the threadpool workers FastAPI uses
# for sync routes, so check_same_thread must be off. SQLite pools also reject
# pool_size/max_overflow, those only apply to server databases.

def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.db_echo}
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
        options["pool_pre_ping"] = True
    return options


engine = create_engine(settings.database_url, **_engine_options())


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

        class Book(Base):
            __tablename__ = "books"
            ...

    Alembic reads Base.metadata to autogenerate migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the route handler and closes it
    when the request ends. Closing rolls back anything left uncommitted.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: DbSession):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def check_database_connection() -> bool:
    """
    Verify that the database accepts connections.

    Returns:
        True if a trivial query succeeded, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Database connection hasn't been established: {exc}")
        return False

    logger.info("Database connection has been established")
    return True


def create_tables() -> None:
    """
    Create all database tables.

    Used on startup when AUTO_CREATE_TABLES is on and by the seed script.
    In production, use Alembic migrations instead.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    WARNING: This deletes all data! Used by `scripts/seed_data.py --reset`.
    """
    Base.metadata.drop_all(bind=engine)
