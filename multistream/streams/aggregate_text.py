"""AggregateTextWriter — broadcasts text output to ALL writers.

The text counterpart of ``AggregateStreamWriter``: same ordering,
locking, ownership and failure aggregation, over text sinks.  ``encoding``,
``errors`` and ``newline`` are reconciled across the sinks; ``writeline``
terminates the line with each sink's own newline.
"""

from __future__ import annotations

import io
import locale
from collections.abc import Iterable
from contextlib import AbstractContextManager
from typing import Any

from multistream.config import config
from multistream.core.fanout import FanOut
from multistream.models.policy import DivergencePolicy
from multistream.sinks import TextSink
from multistream.streams._lifecycle import ClosingMixin

DEFAULT_NEWLINE = "\n"
DEFAULT_ERRORS = "strict"


def _sink_newline(sink: Any) -> str:
    return getattr(sink, "newline", None) or DEFAULT_NEWLINE


class AggregateTextWriter(ClosingMixin, io.TextIOBase):
    """Text writer that mirrors every write onto many text sinks.

    Parameters mirror ``AggregateStreamWriter``.
    """

    def __init__(
        self,
        *,
        owns_sinks: bool = False,
        sync_root: AbstractContextManager[Any] | None = None,
        divergence: DivergencePolicy | str | None = None,
    ) -> None:
        super().__init__()
        self._fanout: FanOut[TextSink] = FanOut(owns_sinks=owns_sinks, sync_root=sync_root)
        self._divergence = DivergencePolicy(
            divergence if divergence is not None else config.divergence_policy
        )

    def add_sink(self, sink: TextSink) -> None:
        """Register a text sink; see ``FanOut.add_sink``."""
        self._fanout.add_sink(sink)

    @property
    def sinks(self) -> list[TextSink]:
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

    @property
    def encoding(self) -> str | None:
        return self._fanout.reconcile(
            lambda sink: getattr(sink, "encoding", None),
            name="encoding",
            default=locale.getpreferredencoding(False),
            on_divergence=self._divergence,
        )

    @property
    def errors(self) -> str | None:
        return self._fanout.reconcile(
            lambda sink: getattr(sink, "errors", None),
            name="errors",
            default=DEFAULT_ERRORS,
            on_divergence=self._divergence,
        )

    @property
    def newline(self) -> str:
        return self._fanout.reconcile(
            _sink_newline,
            name="newline",
            default=DEFAULT_NEWLINE,
            on_divergence=self._divergence,
        )

    @newline.setter
    def newline(self, value: str) -> None:
        self._fanout.execute_action(
            lambda sink: setattr(sink, "newline", value), "set newline"
        )

    def writable(self) -> bool:
        return not self._closed

    # ------------------------------------------------------------------
    # Broadcast operations
    # ------------------------------------------------------------------

    def write(self, text: str) -> int:
        self._ensure_open()
        if not isinstance(text, str):
            raise TypeError(f"write() argument must be str, not {type(text).__name__}")
        self._fanout.execute_action(lambda sink: sink.write(text), "write")
        return len(text)

    def writelines(self, lines: Iterable[str]) -> None:
        """Write every line to each sink in one broadcast."""
        self._ensure_open()
        batch = list(lines)

        def _write_batch(sink: Any) -> None:
            for line in batch:
                sink.write(line)

        self._fanout.execute_action(_write_batch, "writelines")

    def writeline(self, value: Any = "") -> None:
        """Write *value* followed by each sink's newline."""
        self._ensure_open()
        text = value if isinstance(value, str) else str(value)
        self._fanout.execute_action(
            lambda sink: sink.write(text + _sink_newline(sink)), "writeline"
        )

    def flush(self) -> None:
        self._ensure_open()
        self._fanout.execute_action(lambda sink: sink.flush(), "flush")

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
