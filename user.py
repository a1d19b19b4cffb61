from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from errors import DuplicateKeyError, UserNotFoundError

logger = logging.getLogger(__name__)


class User:
    """A library member and the ISBNs they currently hold."""

    def __init__(self, id: int, name: str, borrowed_books: Optional[List[int]] = None) -> None:
        self.id = id
        self.name = name
        self.borrowed_books: List[int] = list(borrowed_books or [])

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.name} (ID: {self.id})"

    def __repr__(self) -> str:  # pragma: no cover
        return f"User(id={self.id!r}, name={self.name!r}, borrowed_books={self.borrowed_books!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def copy(self) -> "User":
        return User(self.id, self.name, self.borrowed_books)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "borrowed_books": list(self.borrowed_books)}

    @staticmethod
    def from_dict(data: dict) -> "User":
        return User(
            id=int(data["id"]),
            name=data["name"],
            borrowed_books=[int(isbn) for isbn in data.get("borrowed_books") or []],
        )


class UserCollection:
    """Owns the user records and hands out ids.

    Ids come from a counter that only moves forward, so an id freed by a
    delete is never given to a later user.
    """

    def __init__(self, seed: Optional[Iterable[dict]] = None) -> None:
        self._users: List[User] = []
        self._next_id = 1
        for data in seed or ():
            if data.get("id") is None:
                self.create(data["name"])
            else:
                self._insert_seeded(int(data["id"]), data["name"])

    def __len__(self) -> int:
        return len(self._users)

    def _insert_seeded(self, user_id: int, name: str) -> User:
        if self.find(id=user_id) is not None:
            raise DuplicateKeyError(f"A user with ID {user_id} already exists.")
        user = User(id=user_id, name=name)
        self._users.append(user)
        self._next_id = max(self._next_id, user_id + 1)
        return user

    def create(self, name: str) -> User:
        user = User(id=self._next_id, name=name)
        self._next_id += 1
        self._users.append(user)
        logger.info(f"User created: id={user.id}, name={name!r}")
        return user

    def find(self, id: Optional[int] = None, name: Optional[str] = None) -> Optional[User]:
        """Find a user by id, or by name when no id is given."""
        if id is not None:
            return next((u for u in self._users if u.id == id), None)
        if name is not None:
            return next((u for u in self._users if u.name == name), None)
        return None

    def get(self, user_id: int) -> User:
        user = self.find(id=user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def delete(self, user_id: int) -> User:
        user = self.get(user_id)
        self._users = [u for u in self._users if u.id != user_id]
        logger.info(f"User deleted: id={user_id}")
        return user

    def list(self) -> List[User]:
        return list(self._users)
