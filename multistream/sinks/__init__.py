"""Sink protocols for multistream broadcasters.

Sinks are the backing destinations a broadcaster writes to.  These
protocols document the capabilities each operation relies on; the
broadcasters never check them when a sink is added, so a sink lacking an
optional capability only fails (per sink, aggregated) when that
capability is actually used.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BinarySink(Protocol):
    """Minimum surface of a byte sink: write and flush."""

    def write(self, data: bytes, /) -> int | None:
        """Write *data*; may perform a short write and return the count."""
        ...

    def flush(self) -> None:
        ...


@runtime_checkable
class SeekableSink(BinarySink, Protocol):
    """A byte sink that also supports positioning and truncation."""

    def seekable(self) -> bool:
        ...

    def writable(self) -> bool:
        ...

    def seek(self, offset: int, whence: int = 0, /) -> int:
        ...

    def tell(self) -> int:
        ...

    def truncate(self, size: int | None = None, /) -> int:
        ...


@runtime_checkable
class TextSink(Protocol):
    """Minimum surface of a text sink: write and flush."""

    def write(self, text: str, /) -> int | None:
        ...

    def flush(self) -> None:
        ...


@runtime_checkable
class Closeable(Protocol):
    """Anything an owning broadcaster or wrapper can close."""

    def close(self) -> None:
        ...


__all__ = ["BinarySink", "Closeable", "SeekableSink", "TextSink"]
