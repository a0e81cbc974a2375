"""AggregateStreamWriter — broadcasts byte-stream operations to ALL sinks.

Every write, flush, seek and truncate is fanned out to each registered
sink in registration order.  One sink failing never stops the others;
the failures are raised together as ``AggregateFailure`` after the whole
batch has run.  Reading is never supported: there is no single-stream
meaning for reading from N sinks at once.

Scalar properties are reconciled across sinks:

* ``writable()`` / ``seekable()`` — ``True`` with no sinks; divergence is
  handled by the writer's ``DivergencePolicy``.
* ``length`` / ``position`` / ``seek()`` — None with no sinks; divergence
  always raises ``ConsistencyFailure`` (sinks drifted out of sync).
"""

from __future__ import annotations

import io
from contextlib import AbstractContextManager
from typing import Any

from multistream.config import config
from multistream.core.fanout import FanOut
from multistream.errors import InvalidArgumentError, UnsupportedOperationError
from multistream.models.policy import DivergencePolicy
from multistream.sinks import BinarySink
from multistream.streams._helpers import measure_length, supports, write_all
from multistream.streams._lifecycle import ClosingMixin


class AggregateStreamWriter(ClosingMixin, io.RawIOBase):
    """Write-only byte stream that mirrors every operation onto many sinks.

    Parameters
    ----------
    owns_sinks:
        Close every sink when this writer is closed.
    sync_root:
        Re-entrant lock held for each full broadcast; share it to serialise
        several writers.
    divergence:
        Policy for ``writable()``/``seekable()`` when sinks disagree.
        Defaults to ``config.divergence_policy``.

    Usage
    -----
    >>> with AggregateStreamWriter(owns_sinks=True) as out:
    ...     out.add_sink(open("a.bin", "wb"))
    ...     out.add_sink(open("b.bin", "wb"))
    ...     out.write(b"payload")
    """

    def __init__(
        self,
        *,
        owns_sinks: bool = False,
        sync_root: AbstractContextManager[Any] | None = None,
        divergence: DivergencePolicy | str | None = None,
    ) -> None:
        super().__init__()
        self._fanout: FanOut[BinarySink] = FanOut(owns_sinks=owns_sinks, sync_root=sync_root)
        self._divergence = DivergencePolicy(
            divergence if divergence is not None else config.divergence_policy
        )

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def add_sink(self, sink: BinarySink) -> None:
        """Register a byte sink; see ``FanOut.add_sink``."""
        self._fanout.add_sink(sink)

    @property
    def sinks(self) -> list[BinarySink]:
        return self._fanout.sinks

    @property
    def owns_sinks(self) -> bool:
        return self._fanout.owns_sinks

    @property
    def sync_root(self) -> AbstractContextManager[Any]:
        return self._fanout.sync_root

    @property
    def divergence(self) -> DivergencePolicy:
        return self._divergence

    # ------------------------------------------------------------------
    # Reconciled properties
    # ------------------------------------------------------------------

    def readable(self) -> bool:
        return False

    def writable(self) -> bool:
        self._ensure_open()
        return self._fanout.reconcile(
            lambda sink: supports(sink, "writable"),
            name="writable",
            default=True,
            on_divergence=self._divergence,
        )

    def seekable(self) -> bool:
        self._ensure_open()
        return self._fanout.reconcile(
            lambda sink: supports(sink, "seekable"),
            name="seekable",
            default=True,
            on_divergence=self._divergence,
        )

    @property
    def length(self) -> int | None:
        """Common length of all sinks, or None when there are no sinks."""
        self._ensure_open()
        return self._fanout.reconcile(measure_length, name="length")

    @property
    def position(self) -> int | None:
        """Common position of all sinks, or None when there are no sinks."""
        self._ensure_open()
        return self._fanout.reconcile(lambda sink: sink.tell(), name="position")

    @position.setter
    def position(self, value: int) -> None:
        self.seek(value, io.SEEK_SET)

    def tell(self) -> int | None:
        return self.position

    # ------------------------------------------------------------------
    # Unsupported reads
    # ------------------------------------------------------------------

    def read(self, size: int = -1) -> bytes:
        raise UnsupportedOperationError("AggregateStreamWriter is write-only")

    def readall(self) -> bytes:
        raise UnsupportedOperationError("AggregateStreamWriter is write-only")

    def readinto(self, buffer: Any) -> int:
        raise UnsupportedOperationError("AggregateStreamWriter is write-only")

    # ------------------------------------------------------------------
    # Broadcast operations
    # ------------------------------------------------------------------

    def write(self, data: Any, offset: int = 0, count: int | None = None) -> int:
        """Write ``data[offset:offset + count]`` to every sink.

        Returns the number of bytes broadcast.  Each sink receives its own
        immutable copy and the full slice, even across short writes.
        """
        self._ensure_open()
        view = memoryview(data).cast("B")
        if count is None:
            count = len(view) - offset
        if offset < 0 or count < 0 or offset + count > len(view):
            raise InvalidArgumentError(
                f"offset={offset}, count={count} outside buffer of {len(view)} bytes"
            )
        payload = bytes(view[offset : offset + count])

        with self._fanout.sync_root:
            if not self.writable():
                raise UnsupportedOperationError("sinks do not support writing")
            self._fanout.execute_action(
                lambda sink: write_all(sink, payload), "write"
            )
        return len(payload)

    def flush(self) -> None:
        self._ensure_open()
        self._fanout.execute_action(lambda sink: sink.flush(), "flush")

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int | None:
        """Seek every sink; return the common new position."""
        self._ensure_open()
        with self._fanout.sync_root:
            if not self.seekable():
                raise UnsupportedOperationError("sinks do not support seeking")
            return self._fanout.reconcile(
                lambda sink: sink.seek(offset, whence), name="position"
            )

    def truncate(self, size: int | None = None) -> int | None:
        """Truncate every sink; return the common new size."""
        self._ensure_open()
        with self._fanout.sync_root:
            if not self.seekable():
                raise UnsupportedOperationError("sinks do not support truncation")
            return self._fanout.reconcile(
                lambda sink: sink.truncate(size), name="length", default=size
            )

    def _finalize_on_collect(self) -> None:
        # Non-owned sinks belong to the caller and may already be closed.
        fanout = getattr(self, "_fanout", None)
        if fanout is None or not fanout.owns_sinks:
            self._closed = True
            return
        self.finalize()

    def close(self) -> None:
        """Flush every sink, then close them all when owning them."""
        if self._closed:
            return
        self._closed = True
        with self._fanout.sync_root:
            try:
                self._fanout.execute_action(lambda sink: sink.flush(), "flush")
            finally:
                self._fanout.close_sinks()
