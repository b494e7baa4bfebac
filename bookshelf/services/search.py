"""
Search Service

Builds the filter behind the catalog's single search box.

A search term is matched as a case-insensitive substring against title,
author, genre and year. Matching any one of the four is enough, so the
conditions are combined with OR.

Examples:
    "herb"  -> matches author "Frank Herbert"
    "sci"   -> matches genre "Science Fiction"
    "196"   -> matches every book published in the 1960s
"""

import logging

from sqlalchemy import ColumnElement, Select, String, cast, func, or_

from bookshelf.models import Book

logger = logging.getLogger(__name__)


def normalize_search_term(term: str | None) -> str | None:
    """Strip the term; blank terms mean "no search"."""
    if term is None:
        return None
    term = term.strip()
    return term or None


def build_search_filter(term: str | None) -> ColumnElement[bool] | None:
    """
    Build the OR-combined partial-match condition for a search term.

    Args:
        term: Free text typed by the user

    Returns:
        SQLAlchemy boolean expression, or None when there is nothing to search
    """
    term = normalize_search_term(term)
    if term is None:
        return None

    pattern = f"%{term.lower()}%"
    return or_(
        func.lower(Book.title).like(pattern),
        func.lower(Book.author).like(pattern),
        func.lower(Book.genre).like(pattern),
        cast(Book.year, String).like(pattern),
    )


def apply_search(stmt: Select, term: str | None) -> Select:
    """
    Apply the search filter to a select statement.

    The statement is returned unchanged when the term is blank.
    """
    condition = build_search_filter(term)
    if condition is None:
        return stmt

    logger.debug(f"Filtering books by search term {term!r}")
    return stmt.where(condition)
