"""Book query criteria.

Composes the optional listing filters into a single SQL predicate.
"""

from dataclasses import dataclass

from sqlalchemy import ColumnElement, and_, false, true

from bookcatalog.catalog.models import Book, is_storable_int


@dataclass(frozen=True)
class BookCriteria:
    """Optional filters for listing books.

    An absent filter places no constraint on the result.

    Attributes:
        author_id: Only books by this author.
        title: Case-insensitive substring of the title. Blank means absent.
        year: Exact publication year.
    """

    author_id: int | None = None
    title: str | None = None
    year: int | None = None

    @property
    def title_filter(self) -> str | None:
        """Title filter, or None when blank."""
        if self.title is None or not self.title.strip():
            return None
        return self.title

    @property
    def is_empty(self) -> bool:
        """Check whether no filter is present."""
        return self.author_id is None and self.title_filter is None and self.year is None


def _equals(column, value: int) -> ColumnElement[bool]:
    # No stored row can hold a value outside the INTEGER range
    if not is_storable_int(value):
        return false()
    return column == value


def build_conditions(criteria: BookCriteria) -> list[ColumnElement[bool]]:
    """Build one SQL condition per present filter.

    Args:
        criteria: Filters to apply.

    Returns:
        Conditions to be combined with AND.
    """
    conditions: list[ColumnElement[bool]] = []

    if criteria.author_id is not None:
        conditions.append(_equals(Book.author_id, criteria.author_id))

    title = criteria.title_filter
    if title is not None:
        conditions.append(Book.title.icontains(title, autoescape=True))

    if criteria.year is not None:
        conditions.append(_equals(Book.year_published, criteria.year))

    return conditions


def build_predicate(criteria: BookCriteria) -> ColumnElement[bool]:
    """Combine all present filters into a single predicate.

    Args:
        criteria: Filters to apply.

    Returns:
        AND of every present filter, or a predicate matching every book
        when no filter is present.
    """
    conditions = build_conditions(criteria)
    if not conditions:
        return true()
    return and_(*conditions)
