"""Catalog service for author and book operations.

High-level service that combines repository operations with the
catalog's business rules. Domain failures are returned as typed results;
store failures propagate to the caller.
"""

from dataclasses import dataclass, field
from typing import TypeVar

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookcatalog.catalog.criteria import BookCriteria
from bookcatalog.catalog.exporter import BookCsvExporter
from bookcatalog.catalog.mapper import AuthorDTO, BookDTO, author_to_dto, book_to_dto
from bookcatalog.catalog.models import Author, Book, is_storable_int
from bookcatalog.catalog.paging import PageRequest, PaginatedResult
from bookcatalog.catalog.repository import AuthorRepository, BookRepository
from bookcatalog.domain.exceptions import (
    AuthorNameConflictError,
    AuthorNotFoundError,
    BookNotFoundError,
    DomainError,
    ErrorKind,
    ValidationFailedError,
)
from bookcatalog.infrastructure.config import settings

logger = structlog.get_logger()

AUTHOR_NAME_MAX_LENGTH = 255
BOOK_TITLE_MAX_LENGTH = 500
MIN_YEAR = 1000
MAX_YEAR = 9999


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class OperationResult:
    """Outcome of a catalog operation without a value."""

    success: bool = True
    error: str | None = None
    error_code: str | None = None
    error_kind: ErrorKind | None = None


@dataclass
class AuthorResult(OperationResult):
    """Result of an operation returning one author."""

    author: AuthorDTO | None = None


@dataclass
class BookResult(OperationResult):
    """Result of an operation returning one book."""

    book: BookDTO | None = None


@dataclass
class AuthorPageResult(OperationResult):
    """Result of listing authors."""

    page: PaginatedResult[AuthorDTO] | None = None


@dataclass
class BookPageResult(OperationResult):
    """Result of listing books."""

    page: PaginatedResult[BookDTO] | None = None


@dataclass
class ExportResult(OperationResult):
    """Result of exporting books to CSV."""

    content: bytes = b""
    row_count: int = 0


R = TypeVar("R", bound=OperationResult)


def failure(result_type: type[R], error: DomainError) -> R:
    """Build a failed result of the given type from a domain error."""
    return result_type(
        success=False,
        error=error.message,
        error_code=error.error_code,
        error_kind=error.kind,
    )


# ============================================================================
# Field Validation
# ============================================================================


def validate_author_name(name: str | None) -> str:
    """Validate an author name and return it stripped.

    Raises:
        ValidationFailedError: If the name is blank or too long.
    """
    if name is None or not name.strip():
        raise ValidationFailedError("name", "must not be blank")
    name = name.strip()
    if len(name) > AUTHOR_NAME_MAX_LENGTH:
        raise ValidationFailedError("name", f"must be at most {AUTHOR_NAME_MAX_LENGTH} characters")
    return name


def validate_book_fields(
    title: str | None,
    author_id: int | None,
    year_published: int | None,
    genres: list[str] | None,
) -> list[str]:
    """Validate book fields.

    Returns:
        The genres normalized to a list (None becomes empty).

    Raises:
        ValidationFailedError: On the first violated constraint.
    """
    if title is None or not title.strip():
        raise ValidationFailedError("title", "must not be blank")
    if len(title) > BOOK_TITLE_MAX_LENGTH:
        raise ValidationFailedError("title", f"must be at most {BOOK_TITLE_MAX_LENGTH} characters")
    if author_id is None:
        raise ValidationFailedError("author_id", "is required")
    if year_published is not None and not MIN_YEAR <= year_published <= MAX_YEAR:
        raise ValidationFailedError(
            "year_published", f"must be between {MIN_YEAR} and {MAX_YEAR}"
        )
    if genres is None:
        return []
    if not all(isinstance(genre, str) for genre in genres):
        raise ValidationFailedError("genres", "must be a list of strings")
    return list(genres)


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for catalog operations.

    Provides author and book CRUD, filtered listing, CSV export and the
    single-item create used by the bulk importer.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)
            result = await service.create_author("Octavia E. Butler")
            books = await service.list_books(author_id=result.author.id)
    """

    def __init__(self, session: AsyncSession, request_id: str | None = None) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            request_id: Request ID for correlation.
        """
        self.session = session
        self.request_id = request_id
        self.authors = AuthorRepository(session)
        self.books = BookRepository(session)
        self.exporter = BookCsvExporter(genre_delimiter=settings.csv_genre_delimiter)

    def _log_failure(self, operation: str, error: DomainError) -> None:
        logger.warning(
            "Catalog operation failed",
            operation=operation,
            error_code=error.error_code,
            error=error.message,
            request_id=self.request_id,
        )

    # ------------------------------------------------------------------------
    # Authors
    # ------------------------------------------------------------------------

    async def create_author(self, name: str | None) -> AuthorResult:
        """Create an author.

        Args:
            name: Display name; must not be taken by another author.

        Returns:
            AuthorResult with the created author.
        """
        try:
            name = validate_author_name(name)
            if await self.authors.exists_by_name(name):
                raise AuthorNameConflictError(name)
            author = await self._save_author(Author(name=name))
        except DomainError as e:
            self._log_failure("create_author", e)
            return failure(AuthorResult, e)

        logger.info(
            "Author created",
            author_id=author.id,
            name=author.name,
            request_id=self.request_id,
        )
        return AuthorResult(author=author_to_dto(author))

    async def update_author(self, author_id: int, name: str | None) -> AuthorResult:
        """Rename an author.

        Keeping the current name never conflicts.

        Args:
            author_id: Author ID.
            name: New display name.

        Returns:
            AuthorResult with the updated author.
        """
        try:
            name = validate_author_name(name)
            author = await self._get_author_or_raise(author_id)
            if name != author.name and await self.authors.exists_by_name(name):
                raise AuthorNameConflictError(name)
            author.name = name
            author = await self._save_author(author)
        except DomainError as e:
            self._log_failure("update_author", e)
            return failure(AuthorResult, e)

        logger.info(
            "Author updated",
            author_id=author.id,
            name=author.name,
            request_id=self.request_id,
        )
        return AuthorResult(author=author_to_dto(author))

    async def delete_author(self, author_id: int) -> OperationResult:
        """Delete an author together with all of their books.

        Args:
            author_id: Author ID.

        Returns:
            OperationResult.
        """
        try:
            author = await self._get_author_or_raise(author_id)
        except DomainError as e:
            self._log_failure("delete_author", e)
            return failure(OperationResult, e)

        deleted_books = await self.books.delete_by_author(author.id)
        await self.authors.delete(author)

        logger.info(
            "Author deleted",
            author_id=author_id,
            deleted_books=deleted_books,
            request_id=self.request_id,
        )
        return OperationResult()

    async def get_author(self, author_id: int) -> AuthorResult:
        """Get an author by ID.

        Args:
            author_id: Author ID.

        Returns:
            AuthorResult with the author if found.
        """
        try:
            author = await self._get_author_or_raise(author_id)
        except DomainError as e:
            return failure(AuthorResult, e)
        return AuthorResult(author=author_to_dto(author))

    async def list_authors(
        self,
        page: int = 1,
        size: int = settings.default_page_size,
    ) -> AuthorPageResult:
        """List authors ordered by name.

        Args:
            page: Page number (1-based).
            size: Items per page.

        Returns:
            AuthorPageResult with the requested page.
        """
        try:
            request = PageRequest(page=page, size=size)
        except DomainError as e:
            self._log_failure("list_authors", e)
            return failure(AuthorPageResult, e)

        authors = await self.authors.find_all(limit=request.limit, offset=request.offset)
        total = await self.authors.count()

        return AuthorPageResult(
            page=PaginatedResult(
                items=[author_to_dto(a) for a in authors],
                total=total,
                page=request.page,
                size=request.size,
            )
        )

    # ------------------------------------------------------------------------
    # Books
    # ------------------------------------------------------------------------

    async def create_book(
        self,
        title: str | None,
        author_id: int | None,
        year_published: int | None = None,
        genres: list[str] | None = None,
    ) -> BookResult:
        """Create a book for an existing author.

        Args:
            title: Book title.
            author_id: ID of the owning author.
            year_published: Optional publication year.
            genres: Genre labels; None is stored as an empty list.

        Returns:
            BookResult with the created book.
        """
        try:
            genres = validate_book_fields(title, author_id, year_published, genres)
            author = await self._get_author_or_raise(author_id)  # type: ignore[arg-type]
        except DomainError as e:
            self._log_failure("create_book", e)
            return failure(BookResult, e)

        book = await self.books.save(
            Book(
                title=title,
                author=author,
                year_published=year_published,
                genres=genres,
            )
        )

        logger.info(
            "Book created",
            book_id=book.id,
            author_id=author.id,
            request_id=self.request_id,
        )
        return BookResult(book=book_to_dto(book))

    async def update_book(
        self,
        book_id: int,
        title: str | None,
        author_id: int | None,
        year_published: int | None = None,
        genres: list[str] | None = None,
    ) -> BookResult:
        """Replace every field of a book.

        A missing book is reported before any field problem.

        Args:
            book_id: Book ID.
            title: New title.
            author_id: New author ID; must resolve.
            year_published: New publication year.
            genres: New genre labels.

        Returns:
            BookResult with the updated book.
        """
        try:
            book = await self._get_book_or_raise(book_id)
            genres = validate_book_fields(title, author_id, year_published, genres)
            author = await self._get_author_or_raise(author_id)  # type: ignore[arg-type]
        except DomainError as e:
            self._log_failure("update_book", e)
            return failure(BookResult, e)

        book.title = title  # type: ignore[assignment]
        book.author = author
        book.year_published = year_published
        book.genres = genres
        book = await self.books.save(book)

        logger.info(
            "Book updated",
            book_id=book.id,
            author_id=author.id,
            request_id=self.request_id,
        )
        return BookResult(book=book_to_dto(book))

    async def delete_book(self, book_id: int) -> OperationResult:
        """Delete a book.

        Args:
            book_id: Book ID.

        Returns:
            OperationResult.
        """
        try:
            book = await self._get_book_or_raise(book_id)
        except DomainError as e:
            self._log_failure("delete_book", e)
            return failure(OperationResult, e)

        await self.books.delete(book)

        logger.info("Book deleted", book_id=book_id, request_id=self.request_id)
        return OperationResult()

    async def get_book(self, book_id: int) -> BookResult:
        """Get a book by ID.

        Args:
            book_id: Book ID.

        Returns:
            BookResult with the book if found.
        """
        try:
            book = await self._get_book_or_raise(book_id)
        except DomainError as e:
            return failure(BookResult, e)
        return BookResult(book=book_to_dto(book))

    async def list_books(
        self,
        author_id: int | None = None,
        title: str | None = None,
        year: int | None = None,
        page: int = 1,
        size: int = settings.default_page_size,
    ) -> BookPageResult:
        """List books matching optional filters, ordered by title.

        Args:
            author_id: Filter by author.
            title: Case-insensitive title substring. Blank is ignored.
            year: Exact publication year.
            page: Page number (1-based).
            size: Items per page.

        Returns:
            BookPageResult with the requested page. An empty match set
            yields no items and zero total pages.
        """
        try:
            request = PageRequest(page=page, size=size)
        except DomainError as e:
            self._log_failure("list_books", e)
            return failure(BookPageResult, e)

        criteria = BookCriteria(author_id=author_id, title=title, year=year)
        books = await self.books.find_all(criteria, limit=request.limit, offset=request.offset)
        total = await self.books.count(criteria)

        result = PaginatedResult(items=list(books), total=total, page=request.page, size=request.size)
        return BookPageResult(page=result.map(book_to_dto))

    async def export_books_csv(
        self,
        author_id: int | None = None,
        title: str | None = None,
        year: int | None = None,
    ) -> ExportResult:
        """Export every book matching the filters as CSV.

        Rows follow the listing order of ``list_books``.

        Args:
            author_id: Filter by author.
            title: Case-insensitive title substring.
            year: Exact publication year.

        Returns:
            ExportResult with the encoded CSV document.
        """
        criteria = BookCriteria(author_id=author_id, title=title, year=year)
        books = [book_to_dto(b) for b in await self.books.find_all(criteria)]
        content = self.exporter.export(books)

        logger.info(
            "Books exported",
            row_count=len(books),
            author_id=author_id,
            title=title,
            year=year,
            request_id=self.request_id,
        )
        return ExportResult(content=content, row_count=len(books))

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    async def _get_author_or_raise(self, author_id: int) -> Author:
        author = await self.authors.get_by_id(author_id) if is_storable_int(author_id) else None
        if author is None:
            raise AuthorNotFoundError(author_id)
        return author

    async def _get_book_or_raise(self, book_id: int) -> Book:
        book = await self.books.get_by_id(book_id) if is_storable_int(book_id) else None
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    async def _save_author(self, author: Author) -> Author:
        # The unique index catches a concurrent creator that passed the
        # existence check at the same time.
        name = author.name
        try:
            return await self.authors.save(author)
        except IntegrityError as e:
            await self.session.rollback()
            raise AuthorNameConflictError(name) from e
