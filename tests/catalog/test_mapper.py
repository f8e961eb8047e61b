"""Tests for record projections."""

from bookcatalog.catalog.mapper import AuthorDTO, author_to_dto, book_to_dto
from bookcatalog.catalog.models import Author, Book


class TestMappers:
    """Tests for entity to projection mapping."""

    def test_author_to_dto(self) -> None:
        """Author maps id and name."""
        author = Author(id=3, name="Ursula K. Le Guin")
        assert author_to_dto(author) == AuthorDTO(id=3, name="Ursula K. Le Guin")

    def test_book_embeds_author_summary(self) -> None:
        """Book projection carries its author as a summary."""
        author = Author(id=3, name="Ursula K. Le Guin")
        book = Book(
            id=10,
            title="A Wizard of Earthsea",
            author=author,
            year_published=1968,
            genres=["Fantasy", "Fantasy"],
        )

        dto = book_to_dto(book)

        assert dto.id == 10
        assert dto.title == "A Wizard of Earthsea"
        assert dto.author == AuthorDTO(id=3, name="Ursula K. Le Guin")
        assert dto.year_published == 1968
        assert dto.genres == ["Fantasy", "Fantasy"]

    def test_missing_genres_map_to_empty_list(self) -> None:
        """Unset genres become an empty list."""
        book = Book(id=1, title="Untitled", author=Author(id=1, name="Anon"))
        assert book_to_dto(book).genres == []

    def test_projection_genres_are_a_copy(self) -> None:
        """Mutating the projection does not touch the entity."""
        book = Book(id=1, title="T", author=Author(id=1, name="A"), genres=["Drama"])
        book_to_dto(book).genres.append("Comedy")
        assert book.genres == ["Drama"]
