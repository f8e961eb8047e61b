"""Tests for bulk JSON import."""

import json

import pytest

from bookcatalog.catalog.importer import BookImporter, ImportTally, decode_batch
from bookcatalog.catalog.service import CatalogService
from bookcatalog.domain.exceptions import ErrorKind, InvalidImportPayloadError


@pytest.fixture
def importer(service: CatalogService) -> BookImporter:
    """Create importer bound to the test service."""
    return BookImporter(service)


@pytest.fixture
async def author_id(service: CatalogService) -> int:
    """Create an author to import books for."""
    result = await service.create_author("Import Author")
    return result.author.id


class TestImportTally:
    """Tests for ImportTally."""

    def test_record_returns_new_tally(self) -> None:
        """Recording does not mutate the original tally."""
        tally = ImportTally()
        updated = tally.record(True).record(False).record(True)

        assert tally == ImportTally(0, 0)
        assert updated == ImportTally(success_count=2, failed_count=1)
        assert updated.total == 3


class TestDecodeBatch:
    """Tests for batch decoding."""

    def test_decodes_array_of_objects(self) -> None:
        """A JSON array of objects decodes to dicts."""
        assert decode_batch(b'[{"title": "A"}, {}]') == [{"title": "A"}, {}]

    def test_empty_array(self) -> None:
        """An empty array is a valid, empty batch."""
        assert decode_batch("[]") == []

    @pytest.mark.parametrize(
        "payload",
        [b"", b"not json", b'{"title": "A"}', b"[1, 2]", b'[{"title": "A"}, "B"]', b"[{"],
    )
    def test_rejects_malformed_batch(self, payload: bytes) -> None:
        """Anything but an array of objects is invalid input."""
        with pytest.raises(InvalidImportPayloadError) as exc_info:
            decode_batch(payload)
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT


class TestBookImporter:
    """Tests for BookImporter."""

    @pytest.mark.asyncio
    async def test_partial_failure_is_tallied(
        self, importer: BookImporter, service: CatalogService, author_id: int
    ) -> None:
        """An unknown author fails one item without aborting the batch."""
        payload = json.dumps(
            [
                {"title": "A", "authorId": author_id, "year": 2000},
                {"title": "B", "authorId": 9999, "year": 2001},
            ]
        )

        result = await importer.import_json(payload)

        assert result.success
        assert (result.success_count, result.failed_count) == (1, 1)
        books = (await service.list_books()).page.items
        assert [b.title for b in books] == ["A"]
        assert books[0].year_published == 2000

    @pytest.mark.asyncio
    async def test_counts_sum_to_batch_size(
        self, importer: BookImporter, service: CatalogService, author_id: int
    ) -> None:
        """Every item is either a success or a failure."""
        items = [
            {"title": "Valid 1", "authorId": author_id, "yearPublished": 1999, "genres": ["X"]},
            {"title": "", "authorId": author_id},
            {"title": "No author"},
            {"title": "Bad year", "author_id": author_id, "year_published": 12},
            {"title": "Bad type", "authorId": "not-a-number"},
            {"title": "Valid 2", "author_id": author_id, "unknown": "ignored"},
        ]

        result = await importer.import_json(json.dumps(items).encode())

        assert result.success_count == 2
        assert result.failed_count == 4
        assert result.success_count + result.failed_count == len(items)
        assert (await service.list_books()).page.total == 2

    @pytest.mark.asyncio
    async def test_items_created_in_batch_order(
        self, importer: BookImporter, service: CatalogService, author_id: int
    ) -> None:
        """Created records follow the order of the batch."""
        payload = json.dumps([{"title": "Same", "authorId": author_id, "genres": [str(i)]} for i in range(3)])

        await importer.import_json(payload)

        books = (await service.list_books()).page.items
        assert [b.genres for b in books] == [["0"], ["1"], ["2"]]

    @pytest.mark.asyncio
    async def test_malformed_payload_creates_nothing(
        self, importer: BookImporter, service: CatalogService, author_id: int
    ) -> None:
        """A malformed batch fails as a whole without a tally."""
        payload = b'[{"title": "A", "authorId": %d}, 42]' % author_id

        result = await importer.import_json(payload)

        assert not result.success
        assert result.error_kind is ErrorKind.INVALID_INPUT
        assert result.error_code == "INVALID_IMPORT_PAYLOAD"
        assert (result.success_count, result.failed_count) == (0, 0)
        assert (await service.list_books()).page.total == 0

    @pytest.mark.asyncio
    async def test_empty_batch(self, importer: BookImporter) -> None:
        """An empty batch succeeds with zero counts."""
        result = await importer.import_json(b"[]")

        assert result.success
        assert (result.success_count, result.failed_count) == (0, 0)

    @pytest.mark.asyncio
    async def test_out_of_range_author_id_fails_one_item(
        self, importer: BookImporter, service: CatalogService, author_id: int
    ) -> None:
        """An id no store row can carry is a failed item, not a failed batch."""
        payload = json.dumps(
            [
                {"title": "First", "authorId": author_id},
                {"title": "Huge", "authorId": 10**20},
                {"title": "Last", "authorId": author_id},
            ]
        )

        result = await importer.import_json(payload)

        assert (result.success_count, result.failed_count) == (2, 1)
        books = (await service.list_books()).page.items
        assert [b.title for b in books] == ["First", "Last"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "item",
        [
            {"title": "Bool author", "authorId": True},
            {"title": "String author", "authorId": "1"},
            {"title": "Float author", "authorId": 1.5},
            {"title": "Bool year", "authorId": 1, "yearPublished": True},
            {"title": "String year", "authorId": 1, "yearPublished": "2001"},
        ],
    )
    async def test_wrongly_typed_numbers_fail(
        self, importer: BookImporter, service: CatalogService, author_id: int, item: dict
    ) -> None:
        """Booleans, floats and numeric strings are not integers."""
        assert author_id == 1

        result = await importer.import_json(json.dumps([item]))

        assert (result.success_count, result.failed_count) == (0, 1)
        assert (await service.list_books()).page.total == 0
