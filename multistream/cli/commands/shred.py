"""``multistream shred PATH...`` — securely erase and delete files.

Each file is opened read/write, wrapped in a ``SecureEraseStream`` and
closed, which overwrites its content with the configured number of passes
and removes it.  A summary table is printed; the exit code is 1 if any
file was missing or could not be erased.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from multistream.config import config
from multistream.errors import AggregateFailure
from multistream.streams.destroyable import SecureEraseStream

console = Console()


def _shred_one(path: Path, passes: int, block_size: int, flush: bool) -> str:
    """Erase one file and return a Rich-formatted status."""
    if not path.is_file():
        return "[red]not found[/red]"
    stream = SecureEraseStream(
        open(path, "r+b"),
        pass_count=passes,
        block_size=block_size,
        flush_after_write=flush,
    )
    stream.close()
    if path.exists():
        return "[yellow]erased, not deleted[/yellow]"
    return "[green]erased[/green]"


def shred_cmd(
    paths: list[Path] = typer.Argument(
        ...,
        help="Files to erase and delete.",
    ),
    passes: int = typer.Option(
        config.erase_pass_count,
        "--passes",
        "-n",
        min=0,
        help="Number of overwrite passes.",
    ),
    block_size: int = typer.Option(
        config.erase_block_size,
        "--block-size",
        "-b",
        min=1,
        help="Bytes written per overwrite block.",
    ),
    flush: bool = typer.Option(
        config.erase_flush_after_write,
        "--flush/--no-flush",
        help="Flush after every overwrite block.",
    ),
) -> None:
    """Overwrite each file with 0xFF/0x00/0x97 passes, then delete it."""
    table = Table(title="Secure erase")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Passes", justify="right")
    table.add_column("Status", no_wrap=True)

    failed = False
    for path in paths:
        size = path.stat().st_size if path.is_file() else 0
        try:
            status = _shred_one(path, passes, block_size, flush)
        except (OSError, AggregateFailure) as exc:
            status = f"[red]failed:[/red] {escape(str(exc))}"
        if not status.startswith("[green]"):
            failed = True
        table.add_row(str(path), str(size), str(passes), status)

    console.print(table)
    if failed:
        raise typer.Exit(code=1)
