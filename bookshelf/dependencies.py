"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Dependencies provided here:
- DbSession: per-request database session
- Pagination: page number -> offset/limit arithmetic
- SearchQuery: the free-text search term
- FormData: submitted form fields as plain strings
"""

import math
from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from bookshelf.config import get_settings
from bookshelf.database import get_db

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Pagination Parameters
# =============================================================================
DEFAULT_PAGE = 1

# Keeps the OFFSET inside a 32-bit integer for any page size up to 100.
MAX_PAGE = 10_000_000


def parse_page(value: str | None) -> int:
    """
    Parse the page query parameter leniently.

    Links are typed and shared by people, so a bad page number shows the
    first page instead of an error page.

        None, "", "abc", "0", "-3" -> 1
        "2" -> 2
        "99999999999999999999" -> MAX_PAGE (past the end, empty table)
    """
    if value is None:
        return DEFAULT_PAGE
    try:
        page = int(value.strip())
    except ValueError:
        return DEFAULT_PAGE
    if page < 1:
        return DEFAULT_PAGE
    return min(page, MAX_PAGE)


class PaginationParams:
    """
    Pagination parameters for the book list.

    - page: Which page to return (1-indexed for user-friendliness)
    - per_page: Page size, taken from settings.page_size
    - skip: Calculated offset for database query

    Usage in route:
        @router.get("")
        def list_books(db: DbSession, pagination: Pagination):
            stmt = select(Book).offset(pagination.skip).limit(pagination.per_page)
    """

    def __init__(
        self,
        page: str | None = Query(
            default=None,
            description="Page number (1-indexed); invalid values show page 1",
            examples=["1", "2"],
        ),
    ) -> None:
        self.page = parse_page(page)
        self.per_page = settings.page_size

    @property
    def skip(self) -> int:
        """
        Calculate the number of records to skip.

        Page 1 -> skip 0 items
        Page 2 -> skip per_page items
        Page 3 -> skip 2 * per_page items
        """
        return (self.page - 1) * self.per_page

    def page_count(self, total: int) -> int:
        """Number of pages needed to show `total` rows."""
        return math.ceil(total / self.per_page) if total > 0 else 0


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# Search Query
# =============================================================================
def get_search_query(
    query: str | None = Query(
        default=None,
        description="Search title, author, genre and year",
        examples=["herbert", "fantasy", "1965"],
    ),
) -> str | None:
    """
    The search box value.

    Returns None if no search was entered, otherwise the stripped term.
    """
    if query is None:
        return None
    return query.strip() or None


SearchQuery = Annotated[str | None, Depends(get_search_query)]


# =============================================================================
# Form Data
# =============================================================================
async def get_form_data(request: Request) -> dict[str, str]:
    """
    Read the submitted form as a plain dict of strings.

    The form is read as a whole (rather than with one Form() parameter per
    field) so that missing required fields reach BookForm and come back as
    form errors instead of a 422 response.
    """
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


FormData = Annotated[dict[str, str], Depends(get_form_data)]
