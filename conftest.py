import pytest

from library import Library
from seed import LibraryConfig


@pytest.fixture
def lib():
    # The borrow/return scenario: one user, one book
    config = LibraryConfig(
        books=[{"title": "T", "author": "A", "isbn": 12345}],
        users=[{"id": 1, "name": "Harry"}],
    )
    return Library(config)


@pytest.fixture
def empty_lib():
    return Library()
