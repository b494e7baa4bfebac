"""
Tests for the Search Service

Runs the search filter directly against the test database, without going
through the HTTP layer.
"""

import pytest
from sqlalchemy import select

from bookshelf.models import Book
from bookshelf.services.search import apply_search, build_search_filter, normalize_search_term


def search_titles(db_session, term):
    stmt = apply_search(select(Book), term).order_by(Book.title)
    return [book.title for book in db_session.execute(stmt).scalars()]


class TestNormalizeSearchTerm:
    """Tests for normalize_search_term()."""

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_blank_terms_are_none(self, term):
        assert normalize_search_term(term) is None

    def test_term_is_stripped(self):
        assert normalize_search_term("  dune ") == "dune"


class TestBuildSearchFilter:
    """Tests for build_search_filter()."""

    def test_no_filter_without_term(self):
        assert build_search_filter(None) is None
        assert build_search_filter("  ") is None

    def test_filter_covers_four_columns(self):
        """The condition is an OR over title, author, genre and year."""
        condition = build_search_filter("dune")
        sql = str(condition.compile(compile_kwargs={"literal_binds": True}))

        assert " OR " in sql
        for column in ("books.title", "books.author", "books.genre", "books.year"):
            assert column in sql
        assert "'%dune%'" in sql


class TestApplySearch:
    """Tests for apply_search() against real rows."""

    def test_no_term_returns_everything(self, db_session, catalog):
        assert len(search_titles(db_session, None)) == len(catalog)

    def test_match_title(self, db_session, catalog):
        assert search_titles(db_session, "stein") == ["Frankenstein"]

    def test_match_is_case_insensitive(self, db_session, catalog):
        assert search_titles(db_session, "dUNE") == ["Dune"]

    def test_match_author(self, db_session, catalog):
        assert search_titles(db_session, "tolkien") == ["The Hobbit"]

    def test_match_genre(self, db_session, catalog):
        assert search_titles(db_session, "science") == ["Dune"]

    def test_match_year(self, db_session, catalog):
        assert search_titles(db_session, "1937") == ["The Hobbit"]

    def test_partial_year_matches_several(self, db_session, catalog):
        assert search_titles(db_session, "18") == ["Emma", "Frankenstein"]

    def test_any_field_is_enough(self, db_session, catalog):
        """One term can match the title of one book and the author of another."""
        # "Frankenstein" by title, "Dune" by its author Frank Herbert
        assert search_titles(db_session, "fr") == ["Dune", "Frankenstein"]

    def test_null_columns_do_not_match(self, db_session, catalog):
        """Books without genre or year are still found by title."""
        assert search_titles(db_session, "manuscript") == ["Untitled Manuscript"]

    def test_no_match(self, db_session, catalog):
        assert search_titles(db_session, "zzz") == []
