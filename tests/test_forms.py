"""
Tests for Form Validation and Error Recovery

Covers BookForm normalisation and the conversion of validation failures
into the error list shown above the form.
"""

import pytest
from pydantic import ValidationError

from bookshelf.schemas import BookForm, FieldError
from bookshelf.services.forms import collect_form_errors, echo_form


def form_errors(data):
    with pytest.raises(ValidationError) as exc_info:
        BookForm.model_validate(data)
    return collect_form_errors(exc_info.value)


class TestBookForm:
    """Tests for BookForm."""

    def test_valid_form(self):
        form = BookForm.model_validate(
            {"title": " Dune ", "author": "Frank Herbert ", "genre": "Sci-Fi", "year": "1965"}
        )

        assert form.title == "Dune"
        assert form.author == "Frank Herbert"
        assert form.genre == "Sci-Fi"
        assert form.year == 1965

    def test_blank_optional_fields_become_none(self):
        form = BookForm.model_validate(
            {"title": "Dune", "author": "Frank Herbert", "genre": "  ", "year": ""}
        )

        assert form.genre is None
        assert form.year is None

    def test_unknown_fields_are_ignored(self):
        form = BookForm.model_validate(
            {"title": "Dune", "author": "Frank Herbert", "submit": "Create New Book"}
        )

        assert not hasattr(form, "submit")

    def test_year_accepts_integers(self):
        form = BookForm.model_validate({"title": "Dune", "author": "Frank Herbert", "year": 1965})

        assert form.year == 1965

    def test_year_bounds_are_inclusive(self):
        assert BookForm.model_validate({"title": "Beowulf", "author": "Unknown", "year": "-9999"}).year == -9999
        assert BookForm.model_validate({"title": "Dune", "author": "Frank Herbert", "year": "9999"}).year == 9999

    def test_optional_fields_not_sent_are_unset(self):
        form = BookForm.model_validate({"title": "Dune", "author": "Frank Herbert"})

        assert form.model_dump(exclude_unset=True) == {"title": "Dune", "author": "Frank Herbert"}


class TestCollectFormErrors:
    """Tests for collect_form_errors()."""

    @pytest.mark.parametrize("year", ["10000", "-10000", "99999999999999999999", 10**20])
    def test_year_out_of_range(self, year):
        errors = form_errors({"title": "Dune", "author": "Frank Herbert", "year": year})

        assert errors == [FieldError(field="year", message="Year must be between -9999 and 9999")]

    def test_missing_title(self):
        errors = form_errors({"author": "Frank Herbert"})

        assert errors == [FieldError(field="title", message="Title is required")]

    def test_blank_author(self):
        errors = form_errors({"title": "Dune", "author": "   "})

        assert errors == [FieldError(field="author", message="Author is required")]

    def test_errors_keep_field_order(self):
        errors = form_errors({"year": "soon"})

        assert [error.field for error in errors] == ["title", "author", "year"]
        assert [error.message for error in errors] == [
            "Title is required",
            "Author is required",
            "Year must be a whole number",
        ]

    @pytest.mark.parametrize("year", ["1965.5", "nineteen", "19 65"])
    def test_invalid_year(self, year):
        errors = form_errors({"title": "Dune", "author": "Frank Herbert", "year": year})

        assert errors == [FieldError(field="year", message="Year must be a whole number")]

    def test_builtin_messages_get_field_label(self):
        errors = form_errors({"title": "Dune", "author": "Frank Herbert", "genre": "g" * 256})

        assert len(errors) == 1
        assert errors[0].field == "genre"
        assert errors[0].message.startswith("Genre: ")


class TestEchoForm:
    """Tests for echo_form()."""

    def test_echo_keeps_raw_values(self):
        echoed = echo_form({"title": "  Dune ", "author": "", "year": "abc"})

        assert echoed == {"title": "  Dune ", "author": "", "genre": "", "year": "abc"}

    def test_echo_adds_extra_values(self):
        echoed = echo_form({"title": "Dune"}, id=7)

        assert echoed["id"] == 7
        assert echoed["title"] == "Dune"
