"""Record projections and mappers.

Projections are the externally visible shapes of persisted records. They
are derived from entities and never written back to the store.
"""

from dataclasses import dataclass, field

from bookcatalog.catalog.models import Author, Book


# ============================================================================
# Projections
# ============================================================================


@dataclass(frozen=True)
class AuthorDTO:
    """Author projection."""

    id: int
    name: str


@dataclass(frozen=True)
class BookDTO:
    """Book projection with the author embedded as a summary."""

    id: int
    title: str
    author: AuthorDTO
    year_published: int | None = None
    genres: list[str] = field(default_factory=list)


# ============================================================================
# Mappers
# ============================================================================


def author_to_dto(author: Author) -> AuthorDTO:
    """Convert Author entity to its projection."""
    return AuthorDTO(id=author.id, name=author.name)


def book_to_dto(book: Book) -> BookDTO:
    """Convert Book entity to its projection.

    The book's author must be loaded; callers guarantee the reference
    resolved before mapping.
    """
    return BookDTO(
        id=book.id,
        title=book.title,
        author=author_to_dto(book.author),
        year_published=book.year_published,
        genres=list(book.genres or []),
    )
