"""Bulk import of books from a JSON batch.

The payload is decoded once; a payload that is not a JSON array of objects
is rejected as a whole. Every decoded item is then created independently
and in order, and its outcome is added to a tally. One item's failure
never stops the batch.
"""

from dataclasses import dataclass
from typing import Annotated, Any

import structlog
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError,
)

from bookcatalog.catalog.models import MAX_ID
from bookcatalog.catalog.service import CatalogService, OperationResult, failure
from bookcatalog.domain.exceptions import DomainError, InvalidImportPayloadError

logger = structlog.get_logger()

_batch_adapter = TypeAdapter(list[dict[str, Any]])

RecordId = Annotated[StrictInt, Field(ge=1, le=MAX_ID)]


class BookImportItem(BaseModel):
    """One book description in an import batch.

    Only value types are checked here, plus the id range the store can
    hold. Booleans and numeric strings are not accepted as integers. Field
    constraints are enforced by the catalog service.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    author_id: RecordId | None = Field(
        default=None,
        validation_alias=AliasChoices("authorId", "author_id"),
    )
    year_published: StrictInt | None = Field(
        default=None,
        validation_alias=AliasChoices("yearPublished", "year_published", "year"),
    )
    genres: list[str] | None = None


@dataclass(frozen=True)
class ImportTally:
    """Running success/failure counts of an import."""

    success_count: int = 0
    failed_count: int = 0

    def record(self, succeeded: bool) -> "ImportTally":
        """Return a new tally with one more outcome counted."""
        if succeeded:
            return ImportTally(self.success_count + 1, self.failed_count)
        return ImportTally(self.success_count, self.failed_count + 1)

    @property
    def total(self) -> int:
        """Number of items processed."""
        return self.success_count + self.failed_count


@dataclass
class UploadResult(OperationResult):
    """Result of a bulk import."""

    success_count: int = 0
    failed_count: int = 0


def decode_batch(payload: bytes | str) -> list[dict[str, Any]]:
    """Decode a JSON array of objects.

    Args:
        payload: Raw JSON document.

    Returns:
        The decoded items.

    Raises:
        InvalidImportPayloadError: If the payload is not valid JSON or not
            an array of objects.
    """
    try:
        return _batch_adapter.validate_json(payload)
    except ValidationError as e:
        errors = e.errors()
        reason = errors[0]["msg"] if errors else "malformed batch"
        raise InvalidImportPayloadError(reason) from e


class BookImporter:
    """Creates books from a JSON batch through the catalog service.

    Example usage:
        importer = BookImporter(CatalogService(session))
        result = await importer.import_json(b'[{"title": "A", "authorId": 1}]')
        print(result.success_count, result.failed_count)
    """

    def __init__(self, service: CatalogService) -> None:
        """Initialize importer.

        Args:
            service: Catalog service used to create each book.
        """
        self.service = service

    async def import_json(self, payload: bytes | str) -> UploadResult:
        """Import every book in the payload.

        Args:
            payload: JSON array of book objects.

        Returns:
            UploadResult with the tally, or a failed result when the
            payload itself is malformed (nothing is created then).
        """
        try:
            items = decode_batch(payload)
        except DomainError as e:
            logger.warning(
                "Rejected import payload",
                error=e.message,
                request_id=self.service.request_id,
            )
            return failure(UploadResult, e)

        tally = ImportTally()
        for index, raw in enumerate(items):
            tally = tally.record(await self._import_item(index, raw))

        logger.info(
            "Book import finished",
            items=tally.total,
            success_count=tally.success_count,
            failed_count=tally.failed_count,
            request_id=self.service.request_id,
        )
        return UploadResult(
            success_count=tally.success_count,
            failed_count=tally.failed_count,
        )

    async def _import_item(self, index: int, raw: dict[str, Any]) -> bool:
        try:
            item = BookImportItem.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Failed to import book",
                index=index,
                title=raw.get("title"),
                error=str(e.errors()[0]["msg"]) if e.errors() else str(e),
                request_id=self.service.request_id,
            )
            return False

        result = await self.service.create_book(
            title=item.title,
            author_id=item.author_id,
            year_published=item.year_published,
            genres=item.genres,
        )
        if not result.success:
            logger.warning(
                "Failed to import book",
                index=index,
                title=item.title,
                error_code=result.error_code,
                error=result.error,
                request_id=self.service.request_id,
            )
        return result.success
