from dataclasses import dataclass, field
from typing import List


@dataclass
class LibraryConfig:
    """Initial contents for a Library. Both lists are empty by default."""

    books: List[dict] = field(default_factory=list)
    users: List[dict] = field(default_factory=list)


DEMO_BOOKS: List[dict] = [
    {"title": "Harry Potter and the Philosopher's stone", "author": "J.K Rowling", "isbn": 12345},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "isbn": 57369},
    {"title": "Harry Potter and the Chamber of Secrets", "author": "J.K Rowling", "isbn": 12346},
    {"title": "1984", "author": "George Orwell", "isbn": 28903},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "isbn": 20943},
]

DEMO_USERS: List[dict] = [
    {"id": 1, "name": "Harry"},
    {"id": 2, "name": "Hermione"},
    {"id": 3, "name": "Ronald"},
    {"id": 4, "name": "Nevile"},
    {"id": 5, "name": "Draco"},
]


def demo_config() -> LibraryConfig:
    return LibraryConfig(books=[dict(b) for b in DEMO_BOOKS], users=[dict(u) for u in DEMO_USERS])


def config_from_settings(settings) -> LibraryConfig:
    """Demo catalog when LIBRARY_SEED_DEMO is on, otherwise an empty library."""
    return demo_config() if settings.seed_demo else LibraryConfig()
