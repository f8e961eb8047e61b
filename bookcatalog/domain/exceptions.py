"""Domain exceptions.

All domain-level errors raised by the catalog. The catalog service raises
these internally and converts them into typed failure results at its
public boundary. Store failures are not represented here; they propagate
as SQLAlchemy errors.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Category of a domain failure."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_INPUT = "invalid_input"
    VALIDATION_FAILED = "validation_failed"


class DomainError(Exception):
    """Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        details: Additional error context.
        kind: Failure category used to pick a transport status.
        error_code: Machine-readable error code.
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(DomainError):
    """Base class for errors about a referenced entity that does not exist."""

    kind = ErrorKind.NOT_FOUND
    error_code = "NOT_FOUND"


class AuthorNotFoundError(NotFoundError):
    """Raised when an author id does not resolve."""

    error_code = "AUTHOR_NOT_FOUND"

    def __init__(self, author_id: int) -> None:
        """Initialize author not found error.

        Args:
            author_id: The missing author id.
        """
        super().__init__(
            f"Author not found: {author_id}",
            details={"author_id": author_id},
        )


class BookNotFoundError(NotFoundError):
    """Raised when a book id does not resolve."""

    error_code = "BOOK_NOT_FOUND"

    def __init__(self, book_id: int) -> None:
        """Initialize book not found error.

        Args:
            book_id: The missing book id.
        """
        super().__init__(
            f"Book not found: {book_id}",
            details={"book_id": book_id},
        )


# ============================================================================
# Conflict Errors
# ============================================================================


class ConflictError(DomainError):
    """Base class for uniqueness violations."""

    kind = ErrorKind.CONFLICT
    error_code = "CONFLICT"


class AuthorNameConflictError(ConflictError):
    """Raised when an author name is already taken by another author."""

    error_code = "AUTHOR_NAME_CONFLICT"

    def __init__(self, name: str) -> None:
        """Initialize author name conflict error.

        Args:
            name: The conflicting author name.
        """
        super().__init__(
            f"Author with name '{name}' already exists",
            details={"name": name},
        )


# ============================================================================
# Input Errors
# ============================================================================


class InvalidInputError(DomainError):
    """Base class for malformed caller input."""

    kind = ErrorKind.INVALID_INPUT
    error_code = "INVALID_INPUT"


class InvalidPageRequestError(InvalidInputError):
    """Raised when a page number or page size is below 1."""

    error_code = "INVALID_PAGE_REQUEST"

    def __init__(self, page: int, size: int) -> None:
        """Initialize invalid page request error.

        Args:
            page: Requested page number.
            size: Requested page size.
        """
        super().__init__(
            f"Invalid page request: page={page}, size={size}. Both must be >= 1",
            details={"page": page, "size": size},
        )


class InvalidImportPayloadError(InvalidInputError):
    """Raised when a bulk import payload is not a JSON array of objects."""

    error_code = "INVALID_IMPORT_PAYLOAD"

    def __init__(self, reason: str) -> None:
        """Initialize invalid import payload error.

        Args:
            reason: Why the payload could not be decoded.
        """
        super().__init__(
            f"Invalid import payload: {reason}",
            details={"reason": reason},
        )


class ValidationFailedError(DomainError):
    """Raised when a single field violates a required constraint."""

    kind = ErrorKind.VALIDATION_FAILED
    error_code = "VALIDATION_FAILED"

    def __init__(self, field: str, reason: str) -> None:
        """Initialize validation failed error.

        Args:
            field: Name of the offending field.
            reason: Explanation of the violated constraint.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason
