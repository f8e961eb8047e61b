"""Book catalog core.

Provides the query and bulk-ingestion engine of the catalog: criteria
composition, pagination, record projections, CSV export, JSON import and
the catalog service that orchestrates them against the store.
"""

from bookcatalog.catalog.criteria import BookCriteria, build_predicate
from bookcatalog.catalog.exporter import CSV_HEADER, BookCsvExporter
from bookcatalog.catalog.importer import BookImporter, ImportTally, UploadResult
from bookcatalog.catalog.mapper import AuthorDTO, BookDTO, author_to_dto, book_to_dto
from bookcatalog.catalog.models import Author, Book
from bookcatalog.catalog.paging import PageRequest, PaginatedResult
from bookcatalog.catalog.repository import AuthorRepository, BookRepository
from bookcatalog.catalog.service import (
    AuthorPageResult,
    AuthorResult,
    BookPageResult,
    BookResult,
    CatalogService,
    ExportResult,
    OperationResult,
)

__all__ = [
    # Models
    "Author",
    "Book",
    # Criteria & paging
    "BookCriteria",
    "build_predicate",
    "PageRequest",
    "PaginatedResult",
    # Projections
    "AuthorDTO",
    "BookDTO",
    "author_to_dto",
    "book_to_dto",
    # Repository
    "AuthorRepository",
    "BookRepository",
    # Export / import
    "CSV_HEADER",
    "BookCsvExporter",
    "BookImporter",
    "ImportTally",
    "UploadResult",
    # Service
    "CatalogService",
    "OperationResult",
    "AuthorResult",
    "BookResult",
    "AuthorPageResult",
    "BookPageResult",
    "ExportResult",
]
