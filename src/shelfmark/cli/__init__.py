# ABOUTME: CLI package for shelfmark, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from shelfmark.cli.commands import add_cmd, isbn_cmd, ls_cmd, search_cmd

_LOG_FORMAT = "%(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    """Send shelfmark log records to stderr through Rich."""
    package_logger = logging.getLogger("shelfmark")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(package_name="shelfmark")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Shelfmark - look up book metadata across Google Books, Open Library and Amazon."""
    _configure_logging(verbose)


cli.add_command(isbn_cmd.isbn)
cli.add_command(search_cmd.search)
cli.add_command(add_cmd.add)
cli.add_command(ls_cmd.ls)
