"""Pagination primitives.

Converts 1-based page requests to offset/limit queries and wraps a fetched
page together with the total page count.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from bookcatalog.domain.exceptions import InvalidPageRequestError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page of an ordered result set.

    Attributes:
        page: Page number (1-indexed).
        size: Items per page.
    """

    page: int = 1
    size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1 or self.size < 1:
            raise InvalidPageRequestError(self.page, self.size)

    @property
    def offset(self) -> int:
        """Calculate zero-based offset from page number."""
        return (self.page - 1) * self.size

    @property
    def limit(self) -> int:
        """Get limit (alias for size)."""
        return self.size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items of the current page.
        total: Total number of matches across all pages.
        page: Current page.
        size: Items per page.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    size: int = 20

    @property
    def total_pages(self) -> int:
        """Calculate total pages. Zero when nothing matches."""
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    def map(self, fn: Callable[[T], U]) -> "PaginatedResult[U]":
        """Return the same page with every item converted by ``fn``."""
        return PaginatedResult(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            size=self.size,
        )
