"""Author API endpoints.

Provides endpoints for author management:
- GET /authors - list authors (paginated)
- GET /authors/{id} - author details
- POST /authors - create an author
- PUT /authors/{id} - rename an author
- DELETE /authors/{id} - delete an author and their books
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from bookcatalog.api.dependencies import get_service
from bookcatalog.api.errors import raise_for_result
from bookcatalog.api.schemas import (
    AuthorRequest,
    AuthorResponse,
    AuthorsListResponse,
    ErrorResponse,
)
from bookcatalog.catalog.mapper import AuthorDTO
from bookcatalog.catalog.models import MAX_ID
from bookcatalog.catalog.service import CatalogService
from bookcatalog.infrastructure.config import settings

router = APIRouter(prefix="/authors", tags=["Authors"])

AuthorId = Annotated[int, Path(le=MAX_ID, description="Author ID")]


# ============================================================================
# Converters
# ============================================================================


def author_to_response(author: AuthorDTO) -> AuthorResponse:
    """Convert AuthorDTO to AuthorResponse."""
    return AuthorResponse(id=author.id, name=author.name)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=AuthorsListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List authors",
    description="Get a paginated list of authors ordered by name.",
)
async def list_authors(
    service: Annotated[CatalogService, Depends(get_service)],
    page: int = Query(default=1, description="Page number (1-based)"),
    size: int = Query(
        default=settings.default_page_size,
        le=settings.max_page_size,
        description="Items per page",
    ),
) -> AuthorsListResponse:
    """List authors with pagination.

    Args:
        service: Catalog service.
        page: Page number (1-based).
        size: Items per page.

    Returns:
        Paginated list of authors.
    """
    result = await service.list_authors(page=page, size=size)
    raise_for_result(result, "LIST_FAILED")

    return AuthorsListResponse(
        items=[author_to_response(a) for a in result.page.items],
        total=result.page.total,
        page=result.page.page,
        size=result.page.size,
        total_pages=result.page.total_pages,
    )


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get author",
)
async def get_author(
    author_id: AuthorId,
    service: Annotated[CatalogService, Depends(get_service)],
) -> AuthorResponse:
    """Get an author by ID.

    Raises:
        HTTPException: If author not found.
    """
    result = await service.get_author(author_id)
    raise_for_result(result, "AUTHOR_NOT_FOUND")
    return author_to_response(result.author)


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create author",
    description="Create an author. Names are unique across authors.",
)
async def create_author(
    request: AuthorRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> AuthorResponse:
    """Create an author.

    Raises:
        HTTPException: If the name is already taken.
    """
    result = await service.create_author(request.name)
    raise_for_result(result, "CREATE_FAILED")
    return author_to_response(result.author)


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Rename author",
)
async def update_author(
    author_id: AuthorId,
    request: AuthorRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> AuthorResponse:
    """Rename an author.

    Raises:
        HTTPException: If author not found or the name is taken.
    """
    result = await service.update_author(author_id, request.name)
    raise_for_result(result, "UPDATE_FAILED")
    return author_to_response(result.author)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete author",
    description="Delete an author. Books by the author are deleted as well.",
)
async def delete_author(
    author_id: AuthorId,
    service: Annotated[CatalogService, Depends(get_service)],
) -> Response:
    """Delete an author and their books.

    Raises:
        HTTPException: If author not found.
    """
    result = await service.delete_author(author_id)
    raise_for_result(result, "DELETE_FAILED")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
