# ABOUTME: The `shelfmark search` command for title-based metadata lookup.
# ABOUTME: Resolves the best single match, or lists all Google Books results with library status.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console

from shelfmark.cli.options import db_option, json_option, non_blank, user_option
from shelfmark.cli.render import print_candidate, print_json, print_page
from shelfmark.config import ConfigError
from shelfmark.db.catalog import LibraryCatalog
from shelfmark.db.connection import DEFAULT_DB_PATH, open_library
from shelfmark.factory import search_session
from shelfmark.metadata.resolver import BookSearchError


@click.command("search")
@click.argument("title", callback=non_blank)
@click.option("-a", "--author", default=None, help="Narrow a --all listing by author.")
@click.option(
    "--all",
    "list_all",
    is_flag=True,
    default=False,
    help="List every Google Books result instead of the single best match.",
)
@click.option(
    "--library/--no-library",
    default=True,
    help="Mark results already in your catalog (default: --library).",
)
@json_option
@db_option
@user_option
def search(
    title: str,
    author: str | None,
    list_all: bool,
    library: bool,
    as_json: bool,
    db_path: Path | None,
    user_id: str,
) -> None:
    """Search for book metadata by title."""
    console = Console()

    if author and not list_all:
        raise click.UsageError("--author only applies together with --all.")

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        catalog = LibraryCatalog(conn, user_id)
        try:
            with search_session(catalog) as service:
                if list_all:
                    page = service.search_and_add(title, author, included_in_library=library)
                else:
                    result = service.search_by_title(title)
        except (BookSearchError, ConfigError) as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise SystemExit(1) from exc

    if list_all:
        if as_json:
            print_json(page.as_dict())
        elif not page.results:
            console.print("[yellow]No results found.[/yellow]")
        else:
            print_page(console, page)
        return

    if as_json:
        print_json(result.as_dict() if result is not None else None)
    elif result is None:
        console.print("[yellow]No results found.[/yellow]")
    else:
        print_candidate(console, result)
