"""Main Typer application — imports and registers all CLI commands.

Entry point: ``multistream`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from multistream.cli.commands.shred import shred_cmd
from multistream.cli.commands.tee import tee_cmd
from multistream.config import config

app = typer.Typer(
    name="multistream",
    help="multistream: fan-out stream broadcasting and secure erase.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        config.log_level,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="shred", help="Overwrite files with erase patterns, then delete them.")(shred_cmd)
app.command(name="tee", help="Copy stdin to every given file (and stdout).")(tee_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
