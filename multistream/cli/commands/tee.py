"""``multistream tee PATH...`` — copy stdin to several files at once.

Stdin is read in chunks and broadcast through an ``AggregateStreamWriter``
to every file (and to stdout unless ``--no-stdout``).  A failing
destination does not stop the others; failures are reported once stdin
is exhausted and the exit code is 1.
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path

import typer
from rich.console import Console

from multistream.config import config
from multistream.errors import AggregateFailure
from multistream.streams.aggregate import AggregateStreamWriter

err_console = Console(stderr=True)


def tee_cmd(
    paths: list[Path] | None = typer.Argument(
        None,
        help="Destination files.",
    ),
    append: bool = typer.Option(
        False,
        "--append",
        "-a",
        help="Append to the files instead of overwriting them.",
    ),
    stdout: bool = typer.Option(
        True,
        "--stdout/--no-stdout",
        help="Also copy stdin to stdout.",
    ),
    chunk_size: int = typer.Option(
        config.tee_chunk_size,
        "--chunk-size",
        min=1,
        help="Bytes read from stdin per broadcast.",
    ),
) -> None:
    """Broadcast stdin to every destination."""
    mode = "ab" if append else "wb"
    source = typer.get_binary_stream("stdin")
    failures: list[Exception] = []

    with ExitStack() as stack:
        out = AggregateStreamWriter(owns_sinks=False)
        for path in paths or []:
            out.add_sink(stack.enter_context(open(path, mode)))
        if stdout:
            out.add_sink(typer.get_binary_stream("stdout"))

        while chunk := source.read(chunk_size):
            try:
                out.write(chunk)
            except AggregateFailure as exc:
                failures.extend(exc.causes)
        try:
            out.close()
        except AggregateFailure as exc:
            failures.extend(exc.causes)

    if failures:
        for exc in failures:
            err_console.print(f"[bold red]tee:[/bold red] {exc}")
        raise typer.Exit(code=1)
