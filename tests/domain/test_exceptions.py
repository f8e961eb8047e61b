"""Tests for domain exceptions."""

import pytest

from bookcatalog.domain.exceptions import (
    AuthorNameConflictError,
    AuthorNotFoundError,
    BookNotFoundError,
    DomainError,
    ErrorKind,
    InvalidImportPayloadError,
    InvalidPageRequestError,
    ValidationFailedError,
)


class TestDomainErrors:
    """Tests for the domain error hierarchy."""

    @pytest.mark.parametrize(
        "error,kind,code",
        [
            (AuthorNotFoundError(1), ErrorKind.NOT_FOUND, "AUTHOR_NOT_FOUND"),
            (BookNotFoundError(2), ErrorKind.NOT_FOUND, "BOOK_NOT_FOUND"),
            (AuthorNameConflictError("X"), ErrorKind.CONFLICT, "AUTHOR_NAME_CONFLICT"),
            (InvalidPageRequestError(0, 1), ErrorKind.INVALID_INPUT, "INVALID_PAGE_REQUEST"),
            (InvalidImportPayloadError("bad"), ErrorKind.INVALID_INPUT, "INVALID_IMPORT_PAYLOAD"),
            (ValidationFailedError("title", "must not be blank"), ErrorKind.VALIDATION_FAILED, "VALIDATION_FAILED"),
        ],
    )
    def test_kind_and_code(self, error: DomainError, kind: ErrorKind, code: str) -> None:
        """Each error carries its failure category and code."""
        assert isinstance(error, DomainError)
        assert error.kind is kind
        assert error.error_code == code

    def test_message_and_details(self) -> None:
        """Errors expose message and structured details."""
        error = AuthorNotFoundError(42)
        assert error.message == "Author not found: 42"
        assert str(error) == error.message
        assert error.details == {"author_id": 42}

    def test_validation_error_fields(self) -> None:
        """Validation errors name the field and reason."""
        error = ValidationFailedError("year_published", "must be between 1000 and 9999")
        assert error.field == "year_published"
        assert error.reason == "must be between 1000 and 9999"
        assert "year_published" in error.message
