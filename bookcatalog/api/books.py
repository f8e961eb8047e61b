"""Book API endpoints.

Provides endpoints for book management:
- GET /books - list books with optional filters (paginated)
- POST /books/search - same listing, kept for search clients
- GET /books/{id} - book details
- POST /books - create a book
- PUT /books/{id} - replace a book
- DELETE /books/{id} - delete a book
- POST /books/_report - CSV export of the filtered set
- POST /books/_upload - bulk import from a JSON array

Filters accept ``author_id``/``year`` as well as the ``authorId``/
``yearPublished`` names used by older clients.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, Query, Request, Response, UploadFile, status

from bookcatalog.api.authors import author_to_response
from bookcatalog.api.dependencies import get_service
from bookcatalog.api.errors import raise_for_result
from bookcatalog.api.schemas import (
    BookRequest,
    BookResponse,
    BooksListResponse,
    ErrorResponse,
    UploadResponse,
)
from bookcatalog.catalog.criteria import BookCriteria
from bookcatalog.catalog.importer import BookImporter
from bookcatalog.catalog.mapper import BookDTO
from bookcatalog.catalog.models import MAX_ID
from bookcatalog.catalog.service import CatalogService
from bookcatalog.infrastructure.config import settings

router = APIRouter(prefix="/books", tags=["Books"])

REPORT_FILENAME = "books_report.csv"

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

BookId = Annotated[int, Path(le=MAX_ID, description="Book ID")]


# ============================================================================
# Converters
# ============================================================================


def book_to_response(book: BookDTO) -> BookResponse:
    """Convert BookDTO to BookResponse."""
    return BookResponse(
        id=book.id,
        title=book.title,
        author=author_to_response(book.author),
        year_published=book.year_published,
        genres=list(book.genres),
    )


def book_filters(
    author_id: int | None = Query(default=None, le=MAX_ID, description="Filter by author ID"),
    author_id_camel: int | None = Query(
        default=None, alias="authorId", le=MAX_ID, include_in_schema=False
    ),
    title: str | None = Query(default=None, description="Filter by title substring"),
    year: int | None = Query(default=None, description="Filter by year published"),
    year_camel: int | None = Query(default=None, alias="yearPublished", include_in_schema=False),
) -> BookCriteria:
    """Collect listing filters from the query string."""
    return BookCriteria(
        author_id=author_id if author_id is not None else author_id_camel,
        title=title,
        year=year if year is not None else year_camel,
    )


async def _list_books(
    service: CatalogService,
    criteria: BookCriteria,
    page: int,
    size: int,
) -> BooksListResponse:
    result = await service.list_books(
        author_id=criteria.author_id,
        title=criteria.title,
        year=criteria.year,
        page=page,
        size=size,
    )
    raise_for_result(result, "LIST_FAILED")

    return BooksListResponse(
        items=[book_to_response(b) for b in result.page.items],
        total=result.page.total,
        page=result.page.page,
        size=result.page.size,
        total_pages=result.page.total_pages,
    )


async def _read_upload(request: Request, file: UploadFile | None) -> bytes:
    if file is not None:
        return await file.read()
    if request.headers.get("content-type", "").startswith(FORM_CONTENT_TYPES):
        # Form without a file part; its body stream is already consumed
        return b""
    return await request.body()


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=BooksListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List books",
    description="Get a paginated list of books ordered by title, with optional filters.",
)
async def list_books(
    service: Annotated[CatalogService, Depends(get_service)],
    criteria: Annotated[BookCriteria, Depends(book_filters)],
    page: int = Query(default=1, description="Page number (1-based)"),
    size: int = Query(
        default=settings.default_page_size,
        le=settings.max_page_size,
        description="Items per page",
    ),
) -> BooksListResponse:
    """List books with filtering and pagination.

    Args:
        service: Catalog service.
        criteria: Author, title and year filters.
        page: Page number (1-based).
        size: Items per page.

    Returns:
        Paginated list of books.
    """
    return await _list_books(service, criteria, page, size)


@router.post(
    "/search",
    response_model=BooksListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search books",
    description="Search books using optional filters and pagination.",
)
async def search_books(
    service: Annotated[CatalogService, Depends(get_service)],
    criteria: Annotated[BookCriteria, Depends(book_filters)],
    page: int = Query(default=1, description="Page number (1-based)"),
    size: int = Query(
        default=settings.default_page_size,
        le=settings.max_page_size,
        description="Items per page",
    ),
) -> BooksListResponse:
    """Search books. Same semantics as ``GET /books``."""
    return await _list_books(service, criteria, page, size)


@router.post(
    "/_report",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
    summary="Generate CSV report",
    description="Export every book matching the filters as CSV, in listing order.",
)
async def report_books(
    service: Annotated[CatalogService, Depends(get_service)],
    criteria: Annotated[BookCriteria, Depends(book_filters)],
) -> Response:
    """Generate a CSV report of books."""
    result = await service.export_books_csv(
        author_id=criteria.author_id,
        title=criteria.title,
        year=criteria.year,
    )
    raise_for_result(result, "EXPORT_FAILED")

    return Response(
        content=result.content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={REPORT_FILENAME}"},
    )


@router.post(
    "/_upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Upload books",
    description=(
        "Create books from a JSON array, sent either as the multipart part "
        "`file` or as the raw request body. Each item is created "
        "independently; failed items are counted, not fatal."
    ),
)
async def upload_books(
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
    file: UploadFile | None = File(default=None, description="JSON file with an array of books"),
) -> UploadResponse:
    """Bulk import books from an uploaded file or the raw request body.

    Raises:
        HTTPException: If the payload is not a JSON array of objects.
    """
    payload = await _read_upload(request, file)
    result = await BookImporter(service).import_json(payload)
    raise_for_result(result, "INVALID_IMPORT_PAYLOAD")

    return UploadResponse(
        success_count=result.success_count,
        failed_count=result.failed_count,
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get book",
)
async def get_book(
    book_id: BookId,
    service: Annotated[CatalogService, Depends(get_service)],
) -> BookResponse:
    """Get a book by ID.

    Raises:
        HTTPException: If book not found.
    """
    result = await service.get_book(book_id)
    raise_for_result(result, "BOOK_NOT_FOUND")
    return book_to_response(result.book)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create book",
)
async def create_book(
    request: BookRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> BookResponse:
    """Create a book for an existing author.

    Raises:
        HTTPException: If the author does not exist.
    """
    result = await service.create_book(
        title=request.title,
        author_id=request.author_id,
        year_published=request.year_published,
        genres=request.genres,
    )
    raise_for_result(result, "CREATE_FAILED")
    return book_to_response(result.book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Replace book",
    description="Replace title, author, year and genres of a book.",
)
async def update_book(
    book_id: BookId,
    request: BookRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> BookResponse:
    """Replace a book.

    Raises:
        HTTPException: If the book or the new author does not exist.
    """
    result = await service.update_book(
        book_id,
        title=request.title,
        author_id=request.author_id,
        year_published=request.year_published,
        genres=request.genres,
    )
    raise_for_result(result, "UPDATE_FAILED")
    return book_to_response(result.book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete book",
)
async def delete_book(
    book_id: BookId,
    service: Annotated[CatalogService, Depends(get_service)],
) -> Response:
    """Delete a book.

    Raises:
        HTTPException: If book not found.
    """
    result = await service.delete_book(book_id)
    raise_for_result(result, "DELETE_FAILED")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
