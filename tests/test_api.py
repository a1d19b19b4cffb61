import pytest
from fastapi.testclient import TestClient

from api import app, get_library


@pytest.fixture
def client(lib):
    # Each test gets its own scenario library instead of the process-wide one
    app.dependency_overrides[get_library] = lambda: lib
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["total_books"] == 1
    assert data["total_users"] == 1


def test_get_books(client):
    response = client.get("/books")
    assert response.status_code == 200
    assert response.json() == [{"title": "T", "author": "A", "isbn": 12345, "is_available": True}]


def test_filter_books(client):
    assert len(client.get("/books", params={"author": "A"}).json()) == 1
    assert client.get("/books", params={"title": "T"}).json()[0]["isbn"] == 12345
    assert client.get("/books", params={"isbn": 1}).json() == []


def test_get_book_not_found(client):
    response = client.get("/books/99999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Book not found"


def test_add_and_delete_book(client):
    response = client.post("/books", json={"title": "Dune", "author": "Frank Herbert", "isbn": 44444})
    assert response.status_code == 201
    assert response.json()["book"]["is_available"] is True

    assert client.get("/books/44444").status_code == 200
    assert client.delete("/books/44444").status_code == 200
    assert client.get("/books/44444").status_code == 404
    assert client.delete("/books/44444").status_code == 404


def test_add_duplicate_book(client):
    response = client.post("/books", json={"title": "Other", "author": "B", "isbn": 12345})
    assert response.status_code == 409
    assert response.json()["outcome"] == "conflict"


def test_users(client):
    response = client.post("/users", json={"name": "Hermione"})
    assert response.status_code == 201
    assert response.json()["user"] == {"id": 2, "name": "Hermione", "borrowed_books": []}

    assert [u["name"] for u in client.get("/users").json()] == ["Harry", "Hermione"]
    assert client.get("/users", params={"name": "Harry"}).json()[0]["id"] == 1
    assert client.get("/users/2").json()["name"] == "Hermione"
    assert client.delete("/users/2").status_code == 200
    assert client.get("/users/2").status_code == 404


def test_borrow_and_return(client):
    response = client.post("/users/1/borrow/12345")
    assert response.status_code == 200
    assert response.json()["message"] == "User Harry has successfully borrowed book T"

    availability = client.get("/books/12345/availability").json()
    assert availability["available"] is False

    again = client.post("/users/1/borrow/12345")
    assert again.status_code == 409
    assert again.json()["outcome"] == "unavailable"

    assert client.post("/users/1/return/12345").status_code == 200
    assert client.get("/books/12345/availability").json()["available"] is True
    assert client.get("/users/1").json()["borrowed_books"] == []


def test_return_not_borrowed(client):
    response = client.post("/users/1/return/12345")
    assert response.status_code == 409
    assert response.json()["outcome"] == "not_borrowed"


def test_borrow_unknown_user(client):
    response = client.post("/users/42/borrow/12345")
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_stats(client):
    client.post("/users/1/borrow/12345")
    assert client.get("/stats").json() == {
        "total_books": 1,
        "available_books": 0,
        "borrowed_books": 1,
        "unique_authors": 1,
        "total_users": 1,
    }
