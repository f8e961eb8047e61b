"""API schemas for the book catalog.

Pydantic models for request/response validation and serialization.
"""

from pydantic import AliasChoices, BaseModel, Field, StrictInt

from bookcatalog.catalog.models import MAX_ID


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number")
    size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Total number of pages (0 when nothing matches)")


# ============================================================================
# Author Schemas
# ============================================================================


class AuthorRequest(BaseModel):
    """Request to create or rename an author."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author display name, unique across authors",
        examples=["J. K. Rowling"],
    )


class AuthorResponse(BaseModel):
    """Author representation."""

    id: int = Field(..., description="Author identifier")
    name: str = Field(..., description="Author display name")


class AuthorsListResponse(PaginatedResponse):
    """Paginated list of authors."""

    items: list[AuthorResponse] = Field(..., description="List of authors")


# ============================================================================
# Book Schemas
# ============================================================================


class BookRequest(BaseModel):
    """Request to create a book or replace all of its fields.

    Accepts both snake_case and camelCase keys for the author and year.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Title of the book",
        examples=["Harry Potter and the Philosopher's Stone"],
    )
    author_id: StrictInt = Field(
        ...,
        ge=1,
        le=MAX_ID,
        validation_alias=AliasChoices("author_id", "authorId"),
        description="ID of the author",
        examples=[1],
    )
    year_published: StrictInt | None = Field(
        default=None,
        ge=1000,
        le=9999,
        validation_alias=AliasChoices("year_published", "yearPublished"),
        description="Year the book was published",
        examples=[1997],
    )
    genres: list[str] | None = Field(
        default=None,
        description="Genres of the book",
        examples=[["Fantasy", "Adventure"]],
    )


class BookResponse(BaseModel):
    """Book representation with its author embedded."""

    id: int = Field(..., description="Book identifier")
    title: str = Field(..., description="Title of the book")
    author: AuthorResponse = Field(..., description="Author summary")
    year_published: int | None = Field(default=None, description="Year published")
    genres: list[str] = Field(default_factory=list, description="Genres of the book")


class BooksListResponse(PaginatedResponse):
    """Paginated list of books."""

    items: list[BookResponse] = Field(..., description="List of books")


class UploadResponse(BaseModel):
    """Outcome of a bulk book upload."""

    success_count: int = Field(..., description="Number of books created")
    failed_count: int = Field(..., description="Number of items that could not be created")
