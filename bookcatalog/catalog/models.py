"""SQLAlchemy models for the book catalog.

Defines Author and Book tables for persistent storage.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.infrastructure.database import Base

# Largest value a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


def is_storable_int(value: int) -> bool:
    """Check whether an integer fits an INTEGER column."""
    return -MAX_ID - 1 <= value <= MAX_ID


class Author(Base):
    """Author of one or more books.

    Attributes:
        id: Store-assigned identifier, immutable after creation.
        name: Display name, unique across all authors.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Author(id={self.id}, name={self.name})>"


class Book(Base):
    """Book in the catalog.

    Attributes:
        id: Store-assigned identifier.
        title: Book title.
        author_id: Owning author.
        year_published: Optional publication year.
        genres: Ordered list of genre labels (may be empty, may repeat).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year_published: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    genres: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Always loaded with the book; the response projection embeds it
    author: Mapped["Author"] = relationship("Author", lazy="joined")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Book(id={self.id}, title={self.title[:30]}...)>"
