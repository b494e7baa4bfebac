"""
SQLAlchemy Models Package

The catalog has a single table, books. Importing it here makes it available
as `from bookshelf.models import Book` and registers it with Base.metadata
so Alembic and create_tables() can see it.
"""

from bookshelf.models.book import Book

__all__ = [
    "Book",
]
