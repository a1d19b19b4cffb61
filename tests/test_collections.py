import pytest

from book import Book, BookCollection
from errors import BookNotFoundError, DuplicateKeyError, NotFoundError, UserNotFoundError
from seed import DEMO_BOOKS, DEMO_USERS
from user import User, UserCollection


@pytest.fixture
def books():
    return BookCollection(DEMO_BOOKS)

@pytest.fixture
def users():
    return UserCollection(DEMO_USERS)


def test_create_book_is_available(books):
    book = books.create("Dune", "Frank Herbert", 44444)
    assert book.is_available is True
    assert books.find(isbn=44444) is book
    assert len(books) == 6

def test_create_duplicate_isbn_rejected(books):
    with pytest.raises(DuplicateKeyError, match="12345"):
        books.create("Another", "Someone", 12345)
    assert len(books) == 5

def test_duplicate_in_seed_rejected():
    seed = [{"title": "A", "author": "X", "isbn": 1}, {"title": "B", "author": "Y", "isbn": 1}]
    with pytest.raises(DuplicateKeyError):
        BookCollection(seed)

def test_empty_collection_by_default():
    assert BookCollection().list() == []
    assert UserCollection().list() == []

def test_find_book_by_title(books):
    book = books.find(title="1984")
    assert book.isbn == 28903
    assert books.find(title="nineteen eighty-four") is None

def test_find_is_exact_match(books):
    assert books.find(title="1984 ") is None
    assert books.find(author="j.k rowling") == []
    assert books.find(author="Rowling") == []

def test_find_books_by_author(books):
    found = books.find(author="J.K Rowling")
    assert [b.isbn for b in found] == [12345, 12346]

def test_find_priority_title_over_isbn(books):
    # title wins even when isbn points elsewhere
    book = books.find(title="1984", isbn=12345, author="Harper Lee")
    assert book.isbn == 28903

def test_find_without_criteria_returns_none(books):
    assert books.find() is None

def test_delete_book(books):
    removed = books.delete(57369)
    assert removed.title == "To Kill a Mockingbird"
    assert books.find(isbn=57369) is None

def test_delete_missing_book_raises(books):
    with pytest.raises(BookNotFoundError) as exc_info:
        books.delete(99999)
    assert isinstance(exc_info.value, NotFoundError)
    assert isinstance(exc_info.value, LookupError)
    assert exc_info.value.isbn == 99999

def test_book_dict_round_trip():
    book = Book("T", "A", 1, is_available=False)
    assert book.to_dict() == {"title": "T", "author": "A", "isbn": 1, "is_available": False}
    assert Book.from_dict(book.to_dict()) == book


def test_first_user_gets_id_one():
    users = UserCollection()
    assert users.create("Tobi").id == 1
    assert users.create("Ada").id == 2

def test_seeded_users_continue_counter(users):
    assert users.create("Luna").id == 6

def test_ids_not_reused_after_deleting_last():
    users = UserCollection()
    users.create("A")
    last = users.create("B")
    users.delete(last.id)
    assert users.create("C").id == 3

def test_seed_without_id_assigned_from_counter():
    users = UserCollection([{"id": 7, "name": "Seven"}, {"name": "Next"}])
    assert users.find(name="Next").id == 8

def test_seed_duplicate_id_rejected():
    with pytest.raises(DuplicateKeyError):
        UserCollection([{"id": 1, "name": "A"}, {"id": 1, "name": "B"}])

def test_new_user_has_empty_borrowed_list():
    user = UserCollection().create("Tobi")
    assert user.borrowed_books == []

def test_find_user(users):
    assert users.find(id=2).name == "Hermione"
    assert users.find(name="Draco").id == 5
    assert users.find(id=42) is None
    assert users.find(name="harry") is None
    assert users.find() is None

def test_find_user_id_takes_priority(users):
    assert users.find(id=1, name="Draco").name == "Harry"

def test_delete_user(users):
    removed = users.delete(3)
    assert removed.name == "Ronald"
    assert users.find(id=3) is None
    assert len(users) == 4

def test_delete_missing_user_raises(users):
    with pytest.raises(UserNotFoundError):
        users.delete(42)

def test_get_missing_raises():
    with pytest.raises(UserNotFoundError):
        UserCollection().get(1)
    with pytest.raises(BookNotFoundError):
        BookCollection().get(1)

def test_user_copy_is_independent():
    user = User(1, "Harry", [12345])
    clone = user.copy()
    clone.borrowed_books.append(1)
    assert user.borrowed_books == [12345]
    assert User.from_dict(user.to_dict()) == user
