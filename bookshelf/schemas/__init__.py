"""
Pydantic Schemas Package

Schemas sit between HTML forms and the ORM:
- BookForm: validates submitted form data before anything is written
- FieldError: one structured validation error shown next to the form
- BookRead / BookListPage: what the list view renders
"""

from bookshelf.schemas.book import (
    BookForm,
    BookListPage,
    BookRead,
    FieldError,
)

__all__ = [
    "BookForm",
    "BookListPage",
    "BookRead",
    "FieldError",
]
