# ABOUTME: Shared Click options for shelfmark CLI commands.
# ABOUTME: Provides reusable decorators for the catalog path, user scope, and JSON output.

from pathlib import Path

import click

from shelfmark.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="SHELFMARK_DB",
    help=f"Path to catalog database (default: {DEFAULT_DB_PATH})",
)

user_option = click.option(
    "--user",
    "user_id",
    default="default",
    show_default=True,
    envvar="SHELFMARK_USER",
    help="Catalog owner used for library matching.",
)

json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON.",
)


def non_blank(ctx: click.Context, param: click.Parameter, value: str) -> str:
    """Click callback rejecting empty or whitespace-only arguments."""
    if not value or not value.strip():
        raise click.BadParameter("must not be empty")
    return value.strip()
