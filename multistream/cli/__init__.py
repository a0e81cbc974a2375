"""multistream CLI — Typer-based command-line interface.

Provides the ``multistream`` command with two subcommands built on the
library: ``shred`` (secure erase of files) and ``tee`` (copy stdin to
several files at once).

All output uses Rich for formatted terminal display.
"""
