# ABOUTME: The `shelfmark isbn` command for resolving a book by ISBN.
# ABOUTME: Falls through Google Books, Open Library and Amazon, or queries a single source.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console

from shelfmark.cli.options import db_option, json_option, non_blank, user_option
from shelfmark.cli.render import print_candidate, print_json
from shelfmark.config import ConfigError
from shelfmark.db.catalog import LibraryCatalog
from shelfmark.db.connection import DEFAULT_DB_PATH, open_library
from shelfmark.factory import search_session
from shelfmark.metadata.resolver import BookSearchError

_SOURCES = ("auto", "google", "openlibrary", "amazon")


@click.command("isbn")
@click.argument("isbn", callback=non_blank)
@click.option(
    "-s",
    "--source",
    type=click.Choice(_SOURCES),
    default="auto",
    show_default=True,
    help="Query one source only instead of falling through all of them.",
)
@json_option
@db_option
@user_option
def isbn(isbn: str, source: str, as_json: bool, db_path: Path | None, user_id: str) -> None:
    """Look up book metadata by ISBN."""
    console = Console()

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        catalog = LibraryCatalog(conn, user_id)
        try:
            with search_session(catalog) as service:
                if source == "google":
                    result = service.search_by_isbn_google(isbn)
                elif source == "openlibrary":
                    result = service.search_by_isbn_openlibrary(isbn)
                elif source == "amazon":
                    result = service.search_by_isbn_amazon(isbn)
                else:
                    result = service.search_by_isbn(isbn)
        except (BookSearchError, ConfigError) as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise SystemExit(1) from exc

    if as_json:
        print_json(result.as_dict() if result is not None else None)
        return

    if result is None:
        console.print(f"[yellow]No results found for ISBN {isbn}.[/yellow]")
        return

    print_candidate(console, result)
