"""Tests for pagination primitives."""

import pytest

from bookcatalog.catalog.paging import PageRequest, PaginatedResult
from bookcatalog.domain.exceptions import ErrorKind, InvalidPageRequestError


class TestPageRequest:
    """Tests for PageRequest."""

    def test_first_page_offset_is_zero(self) -> None:
        """Page 1 starts at offset 0."""
        request = PageRequest(page=1, size=10)
        assert request.offset == 0
        assert request.limit == 10

    def test_offset_is_page_minus_one_times_size(self) -> None:
        """Offset is (page - 1) * size."""
        assert PageRequest(page=4, size=25).offset == 75

    @pytest.mark.parametrize("page,size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
    def test_rejects_non_positive_values(self, page: int, size: int) -> None:
        """Page and size below 1 are invalid input, not clamped."""
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest(page=page, size=size)
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert exc_info.value.details == {"page": page, "size": size}


class TestPaginatedResult:
    """Tests for PaginatedResult."""

    @pytest.mark.parametrize(
        "total,size,expected",
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (7, 3, 3), (9, 3, 3)],
    )
    def test_total_pages_is_ceiling(self, total: int, size: int, expected: int) -> None:
        """Total pages is ceil(total / size), zero when nothing matches."""
        assert PaginatedResult(items=[], total=total, page=1, size=size).total_pages == expected

    def test_has_next(self) -> None:
        """has_next is true until the last page."""
        assert PaginatedResult(items=[], total=7, page=2, size=3).has_next
        assert not PaginatedResult(items=[], total=7, page=3, size=3).has_next

    def test_map_keeps_paging_fields(self) -> None:
        """map converts items and keeps counts."""
        result = PaginatedResult(items=[1, 2], total=5, page=1, size=2).map(str)
        assert result.items == ["1", "2"]
        assert (result.total, result.page, result.size) == (5, 1, 2)
