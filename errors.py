class LibraryError(Exception):
    """Base class for catalog errors raised by the collections."""


class NotFoundError(LibraryError, LookupError):
    pass


class BookNotFoundError(NotFoundError):
    def __init__(self, isbn: int) -> None:
        super().__init__("Book not found")
        self.isbn = isbn


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class DuplicateKeyError(LibraryError, ValueError):
    pass
