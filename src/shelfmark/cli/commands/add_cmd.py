# ABOUTME: The `shelfmark add` command for cataloging a book by ISBN.
# ABOUTME: Resolves metadata across providers and creates a record unless already owned.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console

from shelfmark.cli.options import db_option, non_blank, user_option
from shelfmark.config import ConfigError
from shelfmark.db.catalog import DuplicateBookError, LibraryCatalog
from shelfmark.db.connection import DEFAULT_DB_PATH, open_library
from shelfmark.factory import search_session


@click.command("add")
@click.argument("isbn", callback=non_blank)
@db_option
@user_option
def add(isbn: str, db_path: Path | None, user_id: str) -> None:
    """Look up a book by ISBN and add it to your catalog."""
    console = Console()

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        catalog = LibraryCatalog(conn, user_id)
        try:
            with search_session(catalog) as service:
                result = service.search_by_isbn(isbn)
        except ConfigError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise SystemExit(1) from exc

        if result is None:
            console.print(f"[red]No metadata found for ISBN {isbn}.[/red]")
            raise SystemExit(1)

        if result.in_library:
            console.print(
                f"[yellow]Already in library:[/yellow] {result.candidate.title} "
                f"(id {result.book_id})"
            )
            return

        try:
            book_id = catalog.add_book(result.candidate)
        except DuplicateBookError as exc:
            console.print(f"[yellow]{exc}[/yellow]")
            return

    console.print(
        f"[green]Added:[/green] {result.candidate.title} "
        f"[dim](from {result.candidate.source}, id {book_id})[/dim]"
    )
