"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bookcatalog.catalog.service import CatalogService
from bookcatalog.infrastructure.database import get_session


def get_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session and request ID."""
    request_id = getattr(request.state, "request_id", None)
    return CatalogService(session, request_id=request_id)
