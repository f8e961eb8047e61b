"""Domain layer - error hierarchy shared by the catalog and the API.

Example usage:
    from bookcatalog.domain import AuthorNotFoundError, ErrorKind

    try:
        ...
    except AuthorNotFoundError as e:
        assert e.kind is ErrorKind.NOT_FOUND
"""

from bookcatalog.domain.exceptions import (
    AuthorNameConflictError,
    AuthorNotFoundError,
    BookNotFoundError,
    ConflictError,
    DomainError,
    ErrorKind,
    InvalidImportPayloadError,
    InvalidInputError,
    InvalidPageRequestError,
    NotFoundError,
    ValidationFailedError,
)

__all__ = [
    "DomainError",
    "ErrorKind",
    # Not found
    "NotFoundError",
    "AuthorNotFoundError",
    "BookNotFoundError",
    # Conflict
    "ConflictError",
    "AuthorNameConflictError",
    # Input
    "InvalidInputError",
    "InvalidPageRequestError",
    "InvalidImportPayloadError",
    "ValidationFailedError",
]
