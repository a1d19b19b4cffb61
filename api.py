import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import settings
from library import Library, LibraryResult, Outcome
from seed import config_from_settings

logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))

library = Library(config_from_settings(settings))


def get_library() -> Library:
    """Dependency returning the process-wide library. Tests override it."""
    return library


app = FastAPI(title="Library Catalog API", version=settings.app_version, debug=settings.debug)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Models ---
class BookModel(BaseModel):
    title: str
    author: str
    isbn: int
    is_available: bool

class BookCreateModel(BaseModel):
    title: str
    author: str
    isbn: int

class UserModel(BaseModel):
    id: int
    name: str
    borrowed_books: List[int] = []

class UserCreateModel(BaseModel):
    name: str

class ResultModel(BaseModel):
    success: bool
    outcome: str
    message: str
    book: Optional[BookModel] = None
    user: Optional[UserModel] = None
    available: Optional[bool] = None

class StatsModel(BaseModel):
    total_books: int
    available_books: int
    borrowed_books: int
    unique_authors: int
    total_users: int


# NOT_FOUND maps to 404; conflicts and soft loan failures to 409
_FAILURE_STATUS = {
    Outcome.NOT_FOUND: 404,
    Outcome.CONFLICT: 409,
    Outcome.UNAVAILABLE: 409,
    Outcome.NOT_BORROWED: 409,
}

def _respond(result: LibraryResult, success_status: int = 200) -> JSONResponse:
    status = success_status if result.success else _FAILURE_STATUS[result.outcome]
    return JSONResponse(status_code=status, content=result.to_dict())


# --- Health ---
@app.get("/health")
def health(lib: Library = Depends(get_library)):
    """Lightweight health endpoint with catalog counters."""
    stats = lib.get_statistics()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_books": stats["total_books"],
        "total_users": stats["total_users"],
    }

@app.get("/stats", response_model=StatsModel)
def get_stats(lib: Library = Depends(get_library)):
    return lib.get_statistics()


# --- Books ---
@app.get("/books", response_model=List[BookModel])
def get_books(
    title: Optional[str] = Query(None),
    isbn: Optional[int] = Query(None),
    author: Optional[str] = Query(None),
    lib: Library = Depends(get_library),
):
    """List all books, or filter by exact title, ISBN or author."""
    if title is None and isbn is None and author is None:
        return [b.to_dict() for b in lib.list_books()]
    found = lib.search_book(title=title, isbn=isbn, author=author)
    if found is None:
        return []
    if not isinstance(found, list):
        found = [found]
    return [b.to_dict() for b in found]

@app.get("/books/{isbn}", response_model=BookModel)
def get_book(isbn: int, lib: Library = Depends(get_library)):
    book = lib.search_book(isbn=isbn)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book.to_dict()

@app.post("/books", response_model=ResultModel, status_code=201)
def add_book(payload: BookCreateModel, lib: Library = Depends(get_library)):
    return _respond(lib.add_book(payload.title, payload.author, payload.isbn), success_status=201)

@app.delete("/books/{isbn}", response_model=ResultModel)
def delete_book(isbn: int, lib: Library = Depends(get_library)):
    return _respond(lib.remove_book(isbn))

@app.get("/books/{isbn}/availability", response_model=ResultModel)
def book_availability(isbn: int, lib: Library = Depends(get_library)):
    return _respond(lib.is_book_available(isbn))


# --- Users ---
@app.get("/users", response_model=List[UserModel])
def get_users(name: Optional[str] = Query(None), lib: Library = Depends(get_library)):
    if name is None:
        return [u.to_dict() for u in lib.list_users()]
    user = lib.search_user(name=name)
    return [user.to_dict()] if user else []

@app.get("/users/{user_id}", response_model=UserModel)
def get_user(user_id: int, lib: Library = Depends(get_library)):
    user = lib.search_user(id=user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user.to_dict()

@app.post("/users", response_model=ResultModel, status_code=201)
def add_user(payload: UserCreateModel, lib: Library = Depends(get_library)):
    return _respond(lib.add_user(payload.name), success_status=201)

@app.delete("/users/{user_id}", response_model=ResultModel)
def delete_user(user_id: int, lib: Library = Depends(get_library)):
    return _respond(lib.remove_user(user_id))


# --- Loans ---
@app.post("/users/{user_id}/borrow/{isbn}", response_model=ResultModel)
def borrow_book(user_id: int, isbn: int, lib: Library = Depends(get_library)):
    return _respond(lib.borrow_book(user_id, isbn))

@app.post("/users/{user_id}/return/{isbn}", response_model=ResultModel)
def return_book(user_id: int, isbn: int, lib: Library = Depends(get_library)):
    return _respond(lib.return_book(user_id, isbn))
