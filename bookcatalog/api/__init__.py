"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from bookcatalog.api.authors import router as authors_router
from bookcatalog.api.books import router as books_router
from bookcatalog.api.health import router as health_router

__all__ = [
    "authors_router",
    "books_router",
    "health_router",
]
