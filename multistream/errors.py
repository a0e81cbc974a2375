"""Error taxonomy shared by the broadcasters and the secure erase stream.

``InvalidArgumentError`` and ``UnsupportedOperationError`` are raised before
any sink is touched.  ``AggregateFailure`` wraps every per-sink failure of a
single fan-out, in the order they happened.  ``ConsistencyFailure`` signals
that sinks disagree on a value that must be unique.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import Any


class InvalidArgumentError(ValueError):
    """Raised for a ``None`` sink or an out-of-range construction argument."""


class UnsupportedOperationError(io.UnsupportedOperation):
    """Raised when the reconciled capability flags refuse an operation."""


class AggregateFailure(ExceptionGroup):
    """One or more sink failures collected from a single fan-out.

    Never raised for a batch without failures.  The individual causes are
    available as ``causes`` (or ``exceptions``), in sink order, with an
    iteration failure (if any) last.
    """

    @property
    def causes(self) -> list[Exception]:
        return list(self.exceptions)


class ConsistencyFailure(RuntimeError):
    """Raised when sinks report more than one distinct value for a property.

    Attributes
    ----------
    name:
        The reconciled property (``"length"``, ``"position"``, ...).
    values:
        The distinct values observed, in sink order.
    """

    def __init__(self, name: str, values: Sequence[Any]) -> None:
        self.name = name
        self.values = list(values)
        super().__init__(
            f"Sinks disagree on {name}: "
            + ", ".join(repr(v) for v in self.values)
        )
