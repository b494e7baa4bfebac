"""
Book Pydantic Schemas

Form values always arrive as strings, so the validators here normalise
them first: whitespace is stripped, blank optional fields become None and
year is parsed as an integer.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Fits a 32-bit INTEGER column on every backend.
MIN_YEAR = -9999
MAX_YEAR = 9999


class BookForm(BaseModel):
    """
    Schema for the create and update forms.

    Title and author are required and may not be blank; genre and year
    are optional.

    Example form body:
        title=Dune&author=Frank+Herbert&genre=Sci-Fi&year=1965
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(
        default="",
        max_length=255,
        validate_default=True,
        description="Book title",
        examples=["Dune", "Pride and Prejudice"],
    )

    author: str = Field(
        default="",
        max_length=255,
        validate_default=True,
        description="Author name",
        examples=["Frank Herbert", "Jane Austen"],
    )

    genre: str | None = Field(
        default=None,
        max_length=255,
        description="Genre label",
        examples=["Science Fiction", "Romance"],
    )

    year: int | None = Field(
        default=None,
        description="Year of publication",
        examples=[1965, 1813],
    )

    @field_validator("title", "author", mode="before")
    @classmethod
    def require_text(cls, v: object, info: ValidationInfo) -> object:
        """Reject missing or whitespace-only values with a readable message."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v

    @field_validator("genre", mode="before")
    @classmethod
    def blank_genre_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("year", mode="before")
    @classmethod
    def parse_year(cls, v: object) -> object:
        """
        Parse the year field.

        An empty input means "unknown year". Anything else has to be a
        whole number; "1965.5" or "nineteen" are rejected.
        """
        if not isinstance(v, str):
            return v

        v = v.strip()
        if not v:
            return None
        try:
            return int(v)
        except ValueError:
            raise ValueError("Year must be a whole number") from None

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v: int | None) -> int | None:
        if v is not None and not MIN_YEAR <= v <= MAX_YEAR:
            raise ValueError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
        return v


class FieldError(BaseModel):
    """A single validation problem, attached to the form field it concerns."""

    field: str
    message: str


class BookRead(BaseModel):
    """Book as rendered in the list view."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    genre: str | None = None
    year: int | None = None


class BookListPage(BaseModel):
    """
    One page of the catalog.

    Attributes:
        items: Books on this page, newest first
        total: Number of books matching the search
        page: Current page (1-indexed)
        per_page: Page size
        pages: Number of pages for the current search
        query: Search term, if any
    """

    items: list[BookRead]
    total: int
    page: int
    per_page: int
    pages: int
    query: str | None = None
