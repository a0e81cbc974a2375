"""Closing discipline shared by every stream decorator.

``close()`` is the strict, explicit entry point: teardown failures
propagate.  ``finalize()`` is the best-effort entry point used on garbage
collection and when a ``with`` block is already unwinding an exception:
teardown failures are logged and swallowed so they cannot mask the
original error.
"""

from __future__ import annotations

import logging
from types import TracebackType

logger = logging.getLogger(__name__)


class ClosingMixin:
    """Own ``closed`` flag plus strict/best-effort close entry points.

    Must precede the ``io`` base class in the MRO.  ``io.IOBase.close()``
    is never called: it would flush through a decorator whose sinks may
    already be closed.
    """

    _closed: bool = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed stream.")

    def close(self) -> None:
        self._closed = True

    def finalize(self) -> None:
        """Close without raising; failures are logged."""
        try:
            self.close()
        except Exception:  # noqa: BLE001
            logger.warning("Best-effort close of %r failed", self, exc_info=True)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            self.finalize()

    def _finalize_on_collect(self) -> None:
        """Teardown run by the garbage collector; defaults to ``finalize()``."""
        self.finalize()

    def __del__(self) -> None:
        self._finalize_on_collect()
