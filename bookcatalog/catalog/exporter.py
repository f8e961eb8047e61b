"""CSV export of book listings."""

import csv
import io
from collections.abc import Iterable

from bookcatalog.catalog.mapper import BookDTO

CSV_HEADER = ["ID", "Title", "Author", "Year Published", "Genres"]


class BookCsvExporter:
    """Serializes books to CSV bytes.

    One header row followed by one row per book, in the order given.
    Genres are joined into a single column with ``genre_delimiter``.
    Values are quoted only where CSV requires it.
    """

    def __init__(self, genre_delimiter: str = "|", encoding: str = "utf-8") -> None:
        """Initialize exporter.

        Args:
            genre_delimiter: Separator placed between genre labels.
            encoding: Output text encoding.
        """
        self.genre_delimiter = genre_delimiter
        self.encoding = encoding

    def to_row(self, book: BookDTO) -> list[str]:
        """Convert a book to its CSV column values."""
        return [
            str(book.id),
            book.title,
            book.author.name,
            "" if book.year_published is None else str(book.year_published),
            self.genre_delimiter.join(book.genres),
        ]

    def export(self, books: Iterable[BookDTO]) -> bytes:
        """Write the header and every book to CSV.

        Args:
            books: Books in output order.

        Returns:
            Encoded CSV document.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADER)
        for book in books:
            writer.writerow(self.to_row(book))
        return buffer.getvalue().encode(self.encoding)
