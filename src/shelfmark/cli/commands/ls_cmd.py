# ABOUTME: The `shelfmark ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of the current user's books.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfmark.cli.options import db_option, user_option
from shelfmark.db.catalog import LibraryCatalog
from shelfmark.db.connection import DEFAULT_DB_PATH, open_library


@click.command("ls")
@db_option
@user_option
def ls(db_path: Path | None, user_id: str) -> None:
    """List the books in your catalog."""
    console = Console()

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        records = LibraryCatalog(conn, user_id).list_all()

    if not records:
        console.print("[yellow]Library is empty.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", overflow="fold")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("ISBN")

    for record in records:
        table.add_row(
            record.id,
            record.title,
            record.author or "[dim]unknown[/dim]",
            record.isbn or "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
