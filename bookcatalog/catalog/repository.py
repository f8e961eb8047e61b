"""Author and book repositories for database operations.

The record store contract used by the catalog service. Lookups return
None for absent records; store failures propagate as SQLAlchemy errors.
"""

from collections.abc import Sequence

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookcatalog.catalog.criteria import BookCriteria, build_predicate
from bookcatalog.catalog.models import Author, Book


class AuthorRepository:
    """Repository for Author database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = AuthorRepository(session)
            author = await repo.get_by_name("Ursula K. Le Guin")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, author: Author) -> Author:
        """Insert or update an author.

        Args:
            author: Author to save.

        Returns:
            Saved author with its id assigned.
        """
        self.session.add(author)
        await self.session.flush()
        return author

    async def get_by_id(self, author_id: int) -> Author | None:
        """Get author by ID.

        Args:
            author_id: Author ID.

        Returns:
            Author if found, None otherwise.
        """
        return await self.session.get(Author, author_id)

    async def get_by_name(self, name: str) -> Author | None:
        """Get author by exact name.

        Args:
            name: Author name.

        Returns:
            Author if found, None otherwise.
        """
        result = await self.session.execute(select(Author).where(Author.name == name))
        return result.scalar_one_or_none()

    async def exists_by_id(self, author_id: int) -> bool:
        """Check whether an author with this id exists."""
        result = await self.session.execute(select(exists().where(Author.id == author_id)))
        return bool(result.scalar())

    async def exists_by_name(self, name: str) -> bool:
        """Check whether an author with this exact name exists."""
        result = await self.session.execute(select(exists().where(Author.name == name)))
        return bool(result.scalar())

    async def find_all(self, limit: int, offset: int = 0) -> Sequence[Author]:
        """Find authors ordered by name, then id.

        Args:
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of authors.
        """
        query = (
            select(Author)
            .order_by(Author.name.asc(), Author.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self) -> int:
        """Count all authors."""
        result = await self.session.execute(select(func.count(Author.id)))
        return result.scalar_one()

    async def delete(self, author: Author) -> None:
        """Delete an author.

        Args:
            author: Author to delete.
        """
        await self.session.delete(author)
        await self.session.flush()


class BookRepository:
    """Repository for Book database operations.

    Handles filtering, sorting, and pagination of books. Listing order is
    always title ascending with id as tie-breaker.

    Example usage:
        async with async_session_factory() as session:
            repo = BookRepository(session)
            books = await repo.find_all(
                BookCriteria(author_id=1, title="earth"),
                limit=20,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, book: Book) -> Book:
        """Insert or update a book.

        Args:
            book: Book to save.

        Returns:
            Saved book with its id assigned.
        """
        self.session.add(book)
        await self.session.flush()
        return book

    async def get_by_id(self, book_id: int) -> Book | None:
        """Get book by ID, with its author loaded.

        Args:
            book_id: Book ID.

        Returns:
            Book if found, None otherwise.
        """
        return await self.session.get(Book, book_id)

    async def exists_by_id(self, book_id: int) -> bool:
        """Check whether a book with this id exists."""
        result = await self.session.execute(select(exists().where(Book.id == book_id)))
        return bool(result.scalar())

    async def find_all(
        self,
        criteria: BookCriteria,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Book]:
        """Find books matching criteria in listing order.

        Args:
            criteria: Filters to apply.
            limit: Maximum results. None returns every match.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching books.
        """
        query = (
            select(Book)
            .where(build_predicate(criteria))
            .order_by(Book.title.asc(), Book.id.asc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, criteria: BookCriteria) -> int:
        """Count books matching criteria.

        Args:
            criteria: Filters to apply.

        Returns:
            Count of matching books.
        """
        query = select(func.count(Book.id)).where(build_predicate(criteria))
        result = await self.session.execute(query)
        return result.scalar_one()

    async def delete(self, book: Book) -> None:
        """Delete a book.

        Args:
            book: Book to delete.
        """
        await self.session.delete(book)
        await self.session.flush()

    async def delete_by_author(self, author_id: int) -> int:
        """Delete all books of an author.

        Args:
            author_id: Author ID.

        Returns:
            Number of deleted books.
        """
        result = await self.session.execute(
            delete(Book).where(Book.author_id == author_id)
        )
        await self.session.flush()
        return result.rowcount or 0
