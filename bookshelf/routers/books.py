"""
Books Router

Server-rendered CRUD pages for the catalog.

Routes:
- GET  /books              list with search and pagination
- GET  /books/new          empty create form
- POST /books              create, or re-render the form with errors
- GET  /books/{id}         edit form
- POST /books/{id}         update, or re-render the form with errors
- POST /books/{id}/delete  delete

Successful writes answer with 303 See Other so the browser follows up
with a GET (post/redirect/get). Ids are matched with the int convertor,
so /books/abc never reaches a handler and ends on the 404 page.
"""

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy import func, select
from starlette.responses import Response

from bookshelf.config import get_settings
from bookshelf.dependencies import DbSession, FormData, Pagination, SearchQuery
from bookshelf.models import Book
from bookshelf.schemas import BookForm, BookListPage, BookRead, FieldError
from bookshelf.services.forms import collect_form_errors, echo_form
from bookshelf.services.rate_limiter import limiter
from bookshelf.services.search import apply_search
from bookshelf.templating import templates

logger = logging.getLogger(__name__)
settings = get_settings()

BOOK_NOT_FOUND = "We can't seem to find the book you're looking for."

router = APIRouter(
    prefix="/books",
    tags=["Books"],
)


# =============================================================================
# Helper Functions
# =============================================================================
def get_book_or_404(db: DbSession, book_id: int) -> Book:
    """
    Get a book by ID or raise 404.

    Args:
        db: Database session
        book_id: ID of the book to find

    Raises:
        HTTPException: 404 if book not found, rendered as the not-found page
    """
    book = db.get(Book, book_id)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=BOOK_NOT_FOUND,
        )
    return book


def pagination_url(query: str | None) -> str:
    """
    Prefix for the page links; the template appends `page=<n>`.

        None    -> "/books?"
        "dune"  -> "/books?query=dune&"
    """
    if query:
        return f"{router.prefix}?{urlencode({'query': query})}&"
    return f"{router.prefix}?"


def render_new_form(
    request: Request,
    book: dict[str, object],
    errors: list[FieldError] | None = None,
) -> Response:
    return templates.TemplateResponse(
        request,
        "books/new-book.html",
        {"book": book, "errors": errors or [], "title": "New Book"},
    )


def render_update_form(
    request: Request,
    book: Book | dict[str, object],
    errors: list[FieldError] | None = None,
) -> Response:
    book_title = book["title"] if isinstance(book, dict) else book.title
    return templates.TemplateResponse(
        request,
        "books/update-book.html",
        {"book": book, "errors": errors or [], "title": f"Edit Book: {book_title}"},
    )


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


# =============================================================================
# Pages
# =============================================================================
@router.get(
    "",
    summary="List books",
    description="Paginated list of books, newest first, with optional search.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    pagination: Pagination,
    query: SearchQuery,
) -> Response:
    """
    List books with optional search and pagination.

    The search term matches title, author, genre and year. Pages past the
    end simply render an empty table.
    """
    base_stmt = apply_search(select(Book), query)

    count_stmt = select(func.count()).select_from(base_stmt.subquery())
    total = db.execute(count_stmt).scalar() or 0

    stmt = (
        base_stmt
        .order_by(Book.id.desc())  # Last added first
        .offset(pagination.skip)
        .limit(pagination.per_page)
    )
    books = db.execute(stmt).scalars().all()

    page = BookListPage(
        items=[BookRead.model_validate(book) for book in books],
        total=total,
        page=pagination.page,
        per_page=pagination.per_page,
        pages=pagination.page_count(total),
        query=query,
    )

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "books": page.items,
            "total": page.total,
            "page": page.page,
            "pageCount": page.pages,
            "query": page.query,
            "url": pagination_url(page.query),
            "title": "Books",
        },
    )


@router.get(
    "/new",
    summary="New book form",
)
def new_book_form(request: Request) -> Response:
    """Show the empty create form."""
    return render_new_form(request, echo_form({}))


@router.post(
    "",
    summary="Create a book",
    description="Create a book from the submitted form.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    db: DbSession,
    form_data: FormData,
) -> Response:
    """
    Create a new book.

    On success, redirects to the new book's edit page. When validation
    fails nothing is written and the create form is shown again with the
    submitted values and the list of errors.
    """
    try:
        form = BookForm.model_validate(form_data)
    except ValidationError as exc:
        errors = collect_form_errors(exc)
        logger.info(f"Rejected new book: {[error.message for error in errors]}")
        return render_new_form(request, echo_form(form_data), errors)

    book = Book(**form.model_dump())
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Created {book!r}")
    return see_other(f"{router.prefix}/{book.id}")


@router.get(
    "/{book_id:int}",
    summary="Edit book form",
)
@limiter.limit(settings.rate_limit_default)
def edit_book_form(
    request: Request,
    book_id: int,
    db: DbSession,
) -> Response:
    """
    Show the edit form for a single book.

    Raises:
        HTTPException: 404 if book not found
    """
    book = get_book_or_404(db, book_id)
    return render_update_form(request, book)


@router.post(
    "/{book_id:int}",
    summary="Update a book",
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    db: DbSession,
    form_data: FormData,
) -> Response:
    """
    Update an existing book.

    Only fields present in the submitted form are changed. On a
    validation failure the edit form is shown again with the rejected
    values; the stored book is left untouched.

    Raises:
        HTTPException: 404 if book not found
    """
    book = get_book_or_404(db, book_id)

    try:
        form = BookForm.model_validate(form_data)
    except ValidationError as exc:
        errors = collect_form_errors(exc)
        logger.info(f"Rejected update of book {book_id}: {[error.message for error in errors]}")
        return render_update_form(request, echo_form(form_data, id=book.id), errors)

    # model_dump(exclude_unset=True) skips optional fields the form left out
    update_data = form.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(book, field, value)

    db.commit()
    db.refresh(book)

    logger.info(f"Updated {book!r}")
    return see_other(f"{router.prefix}/{book.id}")


@router.post(
    "/{book_id:int}/delete",
    summary="Delete a book",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> Response:
    """
    Delete a book permanently and go back to the list.

    Raises:
        HTTPException: 404 if book not found
    """
    book = get_book_or_404(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Deleted book {book_id}")
    return see_other(router.prefix)
