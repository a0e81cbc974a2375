"""Shared test fixtures for multistream."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


# ---------------------------------------------------------------------------
# Fake sinks, shared across test modules
# ---------------------------------------------------------------------------


class RecordingSink:
    """An in-memory byte sink that logs every call into a shared list."""

    def __init__(
        self,
        label: str = "sink",
        log: list[tuple[str, str]] | None = None,
        *,
        seekable: bool = True,
        writable: bool = True,
    ) -> None:
        self.label = label
        self.log = log if log is not None else []
        self.buffer = io.BytesIO()
        self._seekable = seekable
        self._writable = writable
        self.closed = False
        self.flush_count = 0

    def _record(self, op: str) -> None:
        if self.closed:
            raise ValueError(f"{self.label} is closed")
        self.log.append((self.label, op))

    def write(self, data: bytes) -> int:
        self._record("write")
        return self.buffer.write(bytes(data))

    def flush(self) -> None:
        self._record("flush")
        self.flush_count += 1

    def seekable(self) -> bool:
        return self._seekable

    def writable(self) -> bool:
        return self._writable

    def seek(self, offset: int, whence: int = 0) -> int:
        self._record("seek")
        return self.buffer.seek(offset, whence)

    def tell(self) -> int:
        return self.buffer.tell()

    def truncate(self, size: int | None = None) -> int:
        self._record("truncate")
        return self.buffer.truncate(size)

    def close(self) -> None:
        self.log.append((self.label, "close"))
        self.closed = True

    @property
    def data(self) -> bytes:
        return self.buffer.getvalue()


class FailingSink(RecordingSink):
    """A sink whose write, flush, seek and close all raise ``OSError``."""

    def _record(self, op: str) -> None:
        self.log.append((self.label, op))
        raise OSError(f"{self.label} failed on {op}")

    def close(self) -> None:
        self.log.append((self.label, "close"))
        raise OSError(f"{self.label} failed on close")


class RecordingTextSink:
    """A text sink with optional ``encoding``/``errors``/``newline`` attributes."""

    def __init__(
        self,
        label: str = "text",
        *,
        encoding: str | None = "utf-8",
        errors: str | None = "strict",
        newline: str = "\n",
    ) -> None:
        self.label = label
        self.encoding = encoding
        self.errors = errors
        self.newline = newline
        self.parts: list[str] = []
        self.closed = False

    def write(self, text: str) -> int:
        if self.closed:
            raise ValueError(f"{self.label} is closed")
        self.parts.append(text)
        return len(text)

    def flush(self) -> None:
        if self.closed:
            raise ValueError(f"{self.label} is closed")

    def close(self) -> None:
        self.closed = True

    @property
    def text(self) -> str:
        return "".join(self.parts)


class TracingFileIO(io.FileIO):
    """A real file that records writes and flushes in call order."""

    def __init__(self, path: Path | str, mode: str = "r+") -> None:
        super().__init__(path, mode)
        self.events: list[tuple[Any, ...]] = []

    def write(self, data: Any) -> int:
        chunk = bytes(data)
        self.events.append(("write", len(chunk), sorted(set(chunk))))
        return super().write(chunk)

    def flush(self) -> None:
        if not self.closed:
            self.events.append(("flush",))
        super().flush()

    @property
    def writes(self) -> list[tuple[int, list[int]]]:
        return [(e[1], e[2]) for e in self.events if e[0] == "write"]


@pytest.fixture
def call_log() -> list[tuple[str, str]]:
    """Provide a shared, ordered call log for fake sinks."""
    return []


@pytest.fixture
def make_sink(call_log: list[tuple[str, str]]) -> Callable[..., RecordingSink]:
    """Factory fixture: build a RecordingSink that logs into ``call_log``."""

    def _factory(label: str = "sink", **overrides: Any) -> RecordingSink:
        return RecordingSink(label, call_log, **overrides)

    return _factory


@pytest.fixture
def make_failing_sink(call_log: list[tuple[str, str]]) -> Callable[..., FailingSink]:
    """Factory fixture: build a FailingSink that logs into ``call_log``."""

    def _factory(label: str = "bad", **overrides: Any) -> FailingSink:
        return FailingSink(label, call_log, **overrides)

    return _factory


@pytest.fixture
def make_text_sink() -> Callable[..., RecordingTextSink]:
    """Factory fixture: build a RecordingTextSink."""

    def _factory(label: str = "text", **overrides: Any) -> RecordingTextSink:
        return RecordingTextSink(label, **overrides)

    return _factory


@pytest.fixture
def secret_file(tmp_path: Path) -> Path:
    """Provide a 10-byte file of sensitive content."""
    path = tmp_path / "secret.bin"
    path.write_bytes(b"0123456789")
    return path


@pytest.fixture
def make_tracing_file() -> Callable[..., TracingFileIO]:
    """Factory fixture: open a TracingFileIO on an existing path."""

    def _factory(path: Path | str, mode: str = "r+") -> TracingFileIO:
        return TracingFileIO(path, mode)

    return _factory
