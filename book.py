from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from errors import BookNotFoundError, DuplicateKeyError

logger = logging.getLogger(__name__)


class Book:
    """Represents a single book item in the library."""

    def __init__(self, title: str, author: str, isbn: int, is_available: bool = True) -> None:
        self.title = title
        self.author = author
        self.isbn = isbn
        self.is_available = is_available

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ISBN: {self.isbn})"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Book(title={self.title!r}, author={self.author!r}, isbn={self.isbn!r}, is_available={self.is_available!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def copy(self) -> "Book":
        return Book(self.title, self.author, self.isbn, self.is_available)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "is_available": self.is_available,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            title=data["title"],
            author=data["author"],
            isbn=int(data["isbn"]),
            is_available=bool(data.get("is_available", True)),
        )


class BookCollection:
    """Owns the book records. Lookups are exact-match scans over insertion order."""

    def __init__(self, seed: Optional[Iterable[dict]] = None) -> None:
        self._books: List[Book] = []
        for data in seed or ():
            self.create(data["title"], data["author"], int(data["isbn"]))

    def __len__(self) -> int:
        return len(self._books)

    def create(self, title: str, author: str, isbn: int) -> Book:
        """Store a new book, always available. ISBNs are unique."""
        if self.find(isbn=isbn) is not None:
            raise DuplicateKeyError(f"A book with ISBN {isbn} already exists.")
        book = Book(title=title, author=author, isbn=isbn)
        self._books.append(book)
        logger.info(f"Book created: isbn={isbn}, title={title!r}")
        return book

    def find(
        self,
        title: Optional[str] = None,
        isbn: Optional[int] = None,
        author: Optional[str] = None,
    ) -> Union[Book, List[Book], None]:
        """Find a book by title or ISBN, or all books by an author.

        Criteria are checked in that order and only the first one given is used.
        Title and ISBN return a single book or None; author returns a list.
        """
        if title is not None:
            return next((b for b in self._books if b.title == title), None)
        if isbn is not None:
            return next((b for b in self._books if b.isbn == isbn), None)
        if author is not None:
            return [b for b in self._books if b.author == author]
        return None

    def get(self, isbn: int) -> Book:
        book = self.find(isbn=isbn)
        if book is None:
            raise BookNotFoundError(isbn)
        return book

    def delete(self, isbn: int) -> Book:
        book = self.get(isbn)
        self._books = [b for b in self._books if b.isbn != isbn]
        logger.info(f"Book deleted: isbn={isbn}")
        return book

    def list(self) -> List[Book]:
        return list(self._books)
