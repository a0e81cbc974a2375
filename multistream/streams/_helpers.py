"""Shared low-level helpers for the stream decorators."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any


def write_all(stream: Any, data: bytes) -> int:
    """Write all of *data* to *stream*, retrying short writes.

    Sinks whose ``write`` returns None are assumed to have consumed the
    whole buffer.
    """
    total = len(data)
    offset = 0
    while offset < total:
        written = stream.write(data[offset:] if offset else data)
        if written is None:
            break
        if written <= 0:
            raise OSError(f"short write: sink accepted 0 of {total - offset} bytes")
        offset += written
    return total


def measure_length(stream: Any) -> int:
    """Return the total length of a seekable *stream*, keeping its position."""
    length = getattr(stream, "length", None)
    if isinstance(length, int):
        return length
    current = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    if end != current:
        stream.seek(current, io.SEEK_SET)
    return end


def backing_path(stream: Any) -> Path | None:
    """Return the filesystem path behind *stream*, if it names one.

    Streams opened from a file descriptor report an ``int`` name and
    in-memory streams have no name at all; both yield None.
    """
    name = getattr(stream, "name", None)
    if isinstance(name, (str, bytes, os.PathLike)):
        return Path(os.fsdecode(name))
    return None


def supports(stream: Any, capability: str) -> bool:
    """Ask *stream* for a capability flag such as ``writable``.

    A sink that lacks the query method entirely is treated as supporting
    the capability; the operation itself then succeeds or fails per sink.
    """
    query = getattr(stream, capability, None)
    if query is None:
        return True
    return bool(query())


def is_append_mode(stream: Any) -> bool:
    """True if writes to *stream* always land at the end of the file."""
    mode = getattr(stream, "mode", None)
    if isinstance(mode, str) and "a" in mode:
        return True
    if os.name != "posix":
        return False
    import fcntl

    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return False
    return bool(fcntl.fcntl(fd, fcntl.F_GETFL) & os.O_APPEND)
