"""
Tests for Pagination Arithmetic

The page size is 4 in tests (PAGE_SIZE is set in conftest.py).
"""

import pytest

from bookshelf.dependencies import MAX_PAGE, PaginationParams, parse_page


class TestParsePage:
    """Tests for parse_page()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, 1),
            ("", 1),
            ("abc", 1),
            ("0", 1),
            ("-3", 1),
            ("1", 1),
            ("2", 2),
            (" 5 ", 5),
            ("99999999999999999999999", MAX_PAGE),
        ],
    )
    def test_parse_page(self, value, expected):
        assert parse_page(value) == expected


class TestPaginationParams:
    """Tests for PaginationParams."""

    def test_first_page_skips_nothing(self):
        pagination = PaginationParams(page=None)

        assert pagination.page == 1
        assert pagination.per_page == 4
        assert pagination.skip == 0

    def test_skip_grows_with_page(self):
        assert PaginationParams(page="2").skip == 4
        assert PaginationParams(page="3").skip == 8

    def test_huge_page_keeps_offset_in_integer_range(self):
        pagination = PaginationParams(page="99999999999999999999999")

        assert pagination.page == MAX_PAGE
        assert pagination.skip < 2**31

    @pytest.mark.parametrize(
        "total, pages",
        [(0, 0), (1, 1), (4, 1), (5, 2), (8, 2), (10, 3)],
    )
    def test_page_count(self, total, pages):
        assert PaginationParams(page=None).page_count(total) == pages
