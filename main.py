import logging
import subprocess
import sys
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from config import settings
from library import Library
from seed import LibraryConfig, config_from_settings, demo_config
from utils.ui_helpers import (
    print_books,
    print_result,
    print_stats_result,
    print_users,
    set_output_mode,
)

logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))

APP_NAME = "Library CLI"

console = Console()


class LibraryManager:
    """Holds the in-memory Library for the lifetime of one CLI process."""

    _instance: Optional[Library] = None

    @classmethod
    def get_instance(cls) -> Library:
        if cls._instance is None:
            cls._instance = Library(config_from_settings(settings))
        return cls._instance

    @classmethod
    def reset(cls, config: Optional[LibraryConfig] = None) -> Library:
        cls._instance = Library(config if config is not None else config_from_settings(settings))
        return cls._instance


# --- Typer CLI application ---
app = typer.Typer(help=APP_NAME)

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    empty: bool = typer.Option(False, "--empty", help="Start without the demo books and users"),
):
    """Global options for the CLI (output mode, initial catalog)."""
    if output:
        set_output_mode(output)
    LibraryManager.reset(LibraryConfig() if empty else None)

@app.command("books")
def cli_books(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Exact title"),
    isbn: Optional[int] = typer.Option(None, "--isbn", "-i", help="Exact ISBN"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Exact author"),
):
    """List books, or search them by exact title, ISBN or author."""
    lib = LibraryManager.get_instance()
    if title is None and isbn is None and author is None:
        print_books(lib.list_books())
        return
    found = lib.search_book(title=title, isbn=isbn, author=author)
    if found is None:
        found = []
    elif not isinstance(found, list):
        found = [found]
    print_books(found)

@app.command("users")
def cli_users(
    user_id: Optional[int] = typer.Option(None, "--id", help="Exact user ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Exact name"),
):
    """List users, or find one by exact ID or name."""
    lib = LibraryManager.get_instance()
    if user_id is None and name is None:
        print_users(lib.list_users())
        return
    user = lib.search_user(id=user_id, name=name)
    print_users([user] if user else [])

@app.command("available")
def cli_available(isbn: int):
    """Check whether a book can be borrowed right now."""
    print_result(LibraryManager.get_instance().is_book_available(isbn))

@app.command("stats")
def cli_stats():
    """Show catalog statistics."""
    print_stats_result(LibraryManager.get_instance().get_statistics())

@app.command("demo")
def cli_demo():
    """Walk through adding, borrowing and returning on a fresh demo catalog."""
    lib = LibraryManager.reset(demo_config())

    def step(label: str) -> None:
        console.print(f"[bold cyan]» {escape(label)}[/]")

    step("Adding user Tobi")
    print_result(lib.add_user("Tobi"))

    step("Adding a new book")
    print_result(lib.add_book("Harry Potter and the Prisoner of Azkaban", "J.K Rowling", 12347))

    step("Books by J.K Rowling")
    print_books(lib.search_book(author="J.K Rowling") or [])

    step("User 1 borrows 12345")
    print_result(lib.borrow_book(1, 12345))
    print_result(lib.is_book_available(12345))

    step("User 1 borrows 12345 again")
    print_result(lib.borrow_book(1, 12345))

    step("User 1 returns 12345")
    print_result(lib.return_book(1, 12345))
    print_result(lib.is_book_available(12345))

    step("Removing user 1 and book 12345")
    print_result(lib.remove_user(1))
    print_result(lib.remove_book(12345))

@app.command("menu")
def cli_menu():
    """Interactive session on one in-memory library."""
    run_menu()

@app.command("serve")
def cli_serve(reload: bool = typer.Option(False, "--reload", help="Restart the server on code changes")):
    """Start the HTTP API with uvicorn."""
    host = settings.api_host
    port = int(settings.api_port)
    print(f"Starting API on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        args.append("--reload")
    subprocess.run(args)


# --- Interactive menu ---
def _add_book(lib: Library) -> None:
    title = Prompt.ask("Title")
    author = Prompt.ask("Author")
    isbn = IntPrompt.ask("ISBN")
    print_result(lib.add_book(title, author, isbn))

def _search_books(lib: Library) -> None:
    field = Prompt.ask("Search by", choices=["title", "isbn", "author"], default="title")
    if field == "isbn":
        found = lib.search_book(isbn=IntPrompt.ask("ISBN"))
    else:
        found = lib.search_book(**{field: Prompt.ask(field.title())})
    if found is None:
        found = []
    print_books(found if isinstance(found, list) else [found])

def _loan(lib: Library, action: str) -> None:
    user_id = IntPrompt.ask("User ID")
    isbn = IntPrompt.ask("ISBN")
    if action == "borrow":
        print_result(lib.borrow_book(user_id, isbn))
    else:
        print_result(lib.return_book(user_id, isbn))

def run_menu() -> None:
    """Simple interactive menu for the library CLI."""
    lib = LibraryManager.get_instance()
    menu_items = [
        ("1", "List books", "📚"),
        ("2", "Add book", "➕"),
        ("3", "Remove book", "🗑️"),
        ("4", "Search books", "🔎"),
        ("5", "List users", "👤"),
        ("6", "Add user", "➕"),
        ("7", "Remove user", "🗑️"),
        ("8", "Borrow book", "📥"),
        ("9", "Return book", "📤"),
        ("a", "Check availability", "❔"),
        ("s", "Show statistics", "📊"),
        ("0", "Exit", "🚪"),
    ]

    def render_menu() -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    actions = {
        "1": lambda: print_books(lib.list_books()),
        "2": lambda: _add_book(lib),
        "3": lambda: print_result(lib.remove_book(IntPrompt.ask("ISBN"))),
        "4": lambda: _search_books(lib),
        "5": lambda: print_users(lib.list_users()),
        "6": lambda: print_result(lib.add_user(Prompt.ask("Name"))),
        "7": lambda: print_result(lib.remove_user(IntPrompt.ask("User ID"))),
        "8": lambda: _loan(lib, "borrow"),
        "9": lambda: _loan(lib, "return"),
        "a": lambda: print_result(lib.is_book_available(IntPrompt.ask("ISBN"))),
        "s": lambda: print_stats_result(lib.get_statistics()),
    }

    while True:
        render_menu()
        choice = Prompt.ask("Choose an option", choices=[key for key, _, _ in menu_items], default="1").strip()
        if choice == "0":
            console.print("[green]Goodbye![/]")
            break
        actions[choice]()
        print()


if __name__ == "__main__":
    if len(sys.argv) > 1:
        app()
    else:
        run_menu()
