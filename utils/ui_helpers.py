import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, settings.cli_output).lower()

def _status(available: bool) -> str:
    return "available" if available else "borrowed"

def print_books(books: List[Any]) -> None:
    """Print books in the current output mode.
    - plain: 'ISBN - Title by Author [status]' lines, or 'No books in library.'
    - json: JSON array of flat book records
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status", style="green")
        for b in books:
            table.add_row(str(b.isbn), escape(b.title), escape(b.author), _status(b.is_available))
        _console.print(table)
    else:
        for b in books:
            print(f"{b.isbn} - {b.title} by {b.author} [{_status(b.is_available)}]")

def print_users(users: List[Any]) -> None:
    mode = get_output_mode()

    if not users:
        print("No users in library.")
        return

    if mode == "json":
        print(json.dumps([u.to_dict() for u in users], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="👤 Users", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Borrowed", style="white")
        for u in users:
            table.add_row(str(u.id), escape(u.name), ", ".join(str(i) for i in u.borrowed_books) or "-")
        _console.print(table)
    else:
        for u in users:
            borrowed = ", ".join(str(i) for i in u.borrowed_books) or "none"
            print(f"{u.id} - {u.name} (borrowed: {borrowed})")

def print_result(result: Any) -> None:
    """Print a LibraryResult: its message, or the whole record in json mode."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        style = "green" if result.success else "yellow"
        _console.print(f"[{style}]{escape(result.message)}[/]")
    else:
        print(result.message)

def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print statistics in the current output mode."""
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    labels = {
        "total_books": "Total Books",
        "available_books": "Available Books",
        "borrowed_books": "Borrowed Books",
        "unique_authors": "Unique Authors",
        "total_users": "Total Users",
    }

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {stats.get(key, 0)}" for key, label in labels.items())
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        for key, label in labels.items():
            print(f"{label}: {stats.get(key, 0)}")
