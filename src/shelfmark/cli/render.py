# ABOUTME: Rich and JSON rendering of candidates and search pages for CLI commands.
# ABOUTME: Shared by the isbn, search and add commands.

import json

import click
from rich.console import Console
from rich.table import Table

from shelfmark.metadata.candidate import MatchedCandidate, SearchPage
from shelfmark.metadata.types import BookCandidate


def _unwrap(result: BookCandidate | MatchedCandidate) -> BookCandidate:
    return result.candidate if isinstance(result, MatchedCandidate) else result


def print_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def print_candidate(console: Console, result: BookCandidate | MatchedCandidate) -> None:
    """Show every populated field of a single result."""
    candidate = _unwrap(result)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Title", candidate.title)
    if candidate.subtitle:
        table.add_row("Subtitle", candidate.subtitle)
    table.add_row("Author", candidate.author or "unknown")
    if candidate.publisher:
        table.add_row("Publisher", candidate.publisher)
    if candidate.published_year:
        table.add_row("Year", str(candidate.published_year))
    if candidate.isbn:
        table.add_row("ISBN", candidate.isbn)
    if candidate.pages:
        table.add_row("Pages", str(candidate.pages))
    if candidate.language:
        table.add_row("Language", candidate.language)
    if candidate.categories:
        table.add_row("Categories", ", ".join(candidate.categories))
    if candidate.cover_url:
        table.add_row("Cover", candidate.cover_url)
    if candidate.description:
        table.add_row("Description", candidate.description)
    table.add_row("Source", f"{candidate.source} ({candidate.external_id})")
    if isinstance(result, MatchedCandidate):
        owned = f"[green]yes[/green] (id {result.book_id})" if result.in_library else "no"
        table.add_row("In library", owned)

    console.print(table)


def print_page(console: Console, page: SearchPage) -> None:
    """Show a listing as a table, one row per result."""
    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("ISBN")
    matched = any(isinstance(r, MatchedCandidate) for r in page.results)
    if matched:
        table.add_column("Owned", width=5)

    for position, result in enumerate(page.results, start=1):
        candidate = _unwrap(result)
        row = [
            str(position),
            candidate.title,
            candidate.author or "[dim]unknown[/dim]",
            str(candidate.published_year or ""),
            candidate.isbn or "",
        ]
        if matched:
            row.append("[green]yes[/green]" if result.in_library else "")
        table.add_row(*row)

    console.print(table)
    console.print(f"\n[dim]{len(page.results)} shown, {page.total_items} total[/dim]")
