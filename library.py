import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import Any, Dict, List, Optional, Union

from book import Book, BookCollection
from errors import DuplicateKeyError, NotFoundError
from seed import LibraryConfig
from user import User, UserCollection

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    NOT_BORROWED = "not_borrowed"


@dataclass
class LibraryResult:
    """Outcome of a facade operation. Callers branch on ``outcome``."""

    outcome: Outcome
    message: str = ""
    book: Optional[Book] = None
    user: Optional[User] = None
    available: Optional[bool] = None

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "success": self.success,
            "outcome": self.outcome.value,
            "message": self.message,
        }
        if self.book is not None:
            data["book"] = self.book.to_dict()
        if self.user is not None:
            data["user"] = self.user.to_dict()
        if self.available is not None:
            data["available"] = self.available
        return data


def _snapshot(found: Union[Book, User, List[Book], None]) -> Union[Book, User, List[Book], None]:
    if found is None:
        return None
    if isinstance(found, list):
        return [item.copy() for item in found]
    return found.copy()


class Library:
    """Coordinates the book and user collections.

    Every public method runs under one lock per instance, so a borrow or a
    return never interleaves with another operation on the same library.
    Collection errors stop here and come back as LibraryResult values.
    Records handed out are copies; stored state only changes through
    these methods.
    """

    def __init__(self, config: Optional[LibraryConfig] = None) -> None:
        config = config or LibraryConfig()
        self._lock = RLock()
        self._books = BookCollection(config.books)
        self._users = UserCollection(config.users)

    # ------------------------- Books ------------------------- #
    def add_book(self, title: str, author: str, isbn: int) -> LibraryResult:
        with self._lock:
            try:
                book = self._books.create(title, author, isbn)
            except DuplicateKeyError as exc:
                logger.warning(f"Rejected duplicate ISBN {isbn}")
                return LibraryResult(Outcome.CONFLICT, str(exc))
            return LibraryResult(Outcome.SUCCESS, f"Book {book.title} has been added", book=book.copy())

    def remove_book(self, isbn: int) -> LibraryResult:
        """Delete a book. A book that is out on loan cannot be removed."""
        with self._lock:
            book = self._books.find(isbn=isbn)
            if book is not None and not book.is_available:
                return LibraryResult(
                    Outcome.CONFLICT,
                    f"Book: {book.title} is currently borrowed",
                    book=book.copy(),
                )
            try:
                removed = self._books.delete(isbn)
            except NotFoundError as exc:
                return LibraryResult(Outcome.NOT_FOUND, str(exc))
            return LibraryResult(Outcome.SUCCESS, f"Book {removed.title} has been removed", book=removed)

    def search_book(
        self,
        title: Optional[str] = None,
        isbn: Optional[int] = None,
        author: Optional[str] = None,
    ) -> Union[Book, List[Book], None]:
        with self._lock:
            return _snapshot(self._books.find(title=title, isbn=isbn, author=author))

    def list_books(self) -> List[Book]:
        with self._lock:
            return [b.copy() for b in self._books.list()]

    def is_book_available(self, isbn: int) -> LibraryResult:
        with self._lock:
            try:
                book = self._books.get(isbn)
            except NotFoundError as exc:
                return LibraryResult(Outcome.NOT_FOUND, str(exc))
            state = "available" if book.is_available else "not available"
            return LibraryResult(
                Outcome.SUCCESS,
                f"Book: {book.title} is {state}",
                book=book.copy(),
                available=book.is_available,
            )

    # ------------------------- Users ------------------------- #
    def add_user(self, name: str) -> LibraryResult:
        with self._lock:
            user = self._users.create(name)
            return LibraryResult(Outcome.SUCCESS, f"User {user.name} has been added", user=user.copy())

    def remove_user(self, user_id: int) -> LibraryResult:
        """Delete a user. Users still holding books cannot be removed."""
        with self._lock:
            user = self._users.find(id=user_id)
            if user is not None and user.borrowed_books:
                return LibraryResult(
                    Outcome.CONFLICT,
                    f"User {user.name} still has {len(user.borrowed_books)} borrowed book(s)",
                    user=user.copy(),
                )
            try:
                removed = self._users.delete(user_id)
            except NotFoundError as exc:
                return LibraryResult(Outcome.NOT_FOUND, str(exc))
            return LibraryResult(Outcome.SUCCESS, f"User {removed.name} has been removed", user=removed)

    def search_user(self, id: Optional[int] = None, name: Optional[str] = None) -> Optional[User]:
        with self._lock:
            return _snapshot(self._users.find(id=id, name=name))

    def list_users(self) -> List[User]:
        with self._lock:
            return [u.copy() for u in self._users.list()]

    # ------------------------- Loans ------------------------- #
    def borrow_book(self, user_id: int, isbn: int) -> LibraryResult:
        """Check a book out to a user.

        Missing user or book gives NOT_FOUND. A book already out on loan
        gives UNAVAILABLE and leaves everything untouched.
        """
        with self._lock:
            try:
                user = self._users.get(user_id)
                book = self._books.get(isbn)
            except NotFoundError as exc:
                logger.info(f"Borrow failed for user={user_id}, isbn={isbn}: {exc}")
                return LibraryResult(Outcome.NOT_FOUND, str(exc))

            if not book.is_available:
                return LibraryResult(
                    Outcome.UNAVAILABLE,
                    f"Book: {book.title} is not available at the moment",
                    book=book.copy(),
                    user=user.copy(),
                )

            user.borrowed_books.append(book.isbn)
            book.is_available = False
            logger.info(f"User {user.id} borrowed isbn={book.isbn}")
            return LibraryResult(
                Outcome.SUCCESS,
                f"User {user.name} has successfully borrowed book {book.title}",
                book=book.copy(),
                user=user.copy(),
            )

    def return_book(self, user_id: int, isbn: int) -> LibraryResult:
        """Take a book back from the user who borrowed it."""
        with self._lock:
            try:
                user = self._users.get(user_id)
                book = self._books.get(isbn)
            except NotFoundError as exc:
                logger.info(f"Return failed for user={user_id}, isbn={isbn}: {exc}")
                return LibraryResult(Outcome.NOT_FOUND, str(exc))

            if isbn not in user.borrowed_books:
                return LibraryResult(
                    Outcome.NOT_BORROWED,
                    "User did not borrow this book",
                    book=book.copy(),
                    user=user.copy(),
                )

            user.borrowed_books = [b for b in user.borrowed_books if b != isbn]
            book.is_available = True
            logger.info(f"User {user.id} returned isbn={book.isbn}")
            return LibraryResult(
                Outcome.SUCCESS,
                f"User {user.name} has successfully returned book {book.title}",
                book=book.copy(),
                user=user.copy(),
            )

    # ------------------------- Statistics ------------------------- #
    def get_statistics(self) -> Dict[str, Any]:
        with self._lock:
            books = self._books.list()
            available = sum(1 for b in books if b.is_available)
            return {
                "total_books": len(books),
                "available_books": available,
                "borrowed_books": len(books) - available,
                "unique_authors": len({b.author for b in books}),
                "total_users": len(self._users),
            }
