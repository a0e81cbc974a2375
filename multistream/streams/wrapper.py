"""StreamWrapper — transparent pass-through over one backing stream.

Every call is forwarded 1:1 to the backing stream.  Subclasses override
the members whose behaviour they change (see ``SecureEraseStream`` and
``TempFileStream``); the wrapper itself only relies on the public stream
interface of the object it wraps.
"""

from __future__ import annotations

import io
import threading
from contextlib import AbstractContextManager
from typing import Any

from multistream.errors import InvalidArgumentError
from multistream.streams._helpers import measure_length
from multistream.streams._lifecycle import ClosingMixin


class StreamWrapper(ClosingMixin, io.RawIOBase):
    """Forward all stream operations to *base_stream*.

    Parameters
    ----------
    base_stream:
        The already-open stream to wrap.  Closing the wrapper closes it.
    sync_root:
        Optional lock shared with other objects; exposed as ``sync_root``
        for callers that coordinate access to the backing stream.
    """

    _base: Any = None

    def __init__(
        self,
        base_stream: Any,
        *,
        sync_root: AbstractContextManager[Any] | None = None,
    ) -> None:
        if base_stream is None:
            raise InvalidArgumentError("base_stream must not be None")
        super().__init__()
        self._base = base_stream
        self._sync_root = sync_root if sync_root is not None else threading.RLock()

    @property
    def base_stream(self) -> Any:
        return self._base

    @property
    def sync_root(self) -> AbstractContextManager[Any]:
        return self._sync_root

    @property
    def name(self) -> Any:
        return self._base.name

    @property
    def length(self) -> int:
        return measure_length(self._base)

    @property
    def position(self) -> int:
        return self._base.tell()

    @position.setter
    def position(self, value: int) -> None:
        self._base.seek(value, io.SEEK_SET)

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def readable(self) -> bool:
        return self._base.readable()

    def writable(self) -> bool:
        return self._base.writable()

    def seekable(self) -> bool:
        return self._base.seekable()

    def isatty(self) -> bool:
        return self._base.isatty()

    def fileno(self) -> int:
        return self._base.fileno()

    # ------------------------------------------------------------------
    # I/O
    # ------------------------------------------------------------------

    def read(self, size: int = -1) -> bytes:
        return self._base.read(size)

    def readall(self) -> bytes:
        return self._base.read()

    def readinto(self, buffer: Any) -> int:
        readinto = getattr(self._base, "readinto", None)
        if readinto is not None:
            return readinto(buffer)
        view = memoryview(buffer).cast("B")
        data = self._base.read(len(view))
        view[: len(data)] = data
        return len(data)

    def readline(self, size: int | None = -1) -> bytes:
        return self._base.readline(size)

    def write(self, data: Any) -> int:
        return self._base.write(data)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._base.seek(offset, whence)

    def tell(self) -> int:
        return self._base.tell()

    def truncate(self, size: int | None = None) -> int:
        return self._base.truncate(size)

    def flush(self) -> None:
        self._ensure_open()
        self._base.flush()

    def close(self) -> None:
        """Close the wrapper and its backing stream (once)."""
        if self._closed or self._base is None:
            return
        self._closed = True
        self._base.close()
