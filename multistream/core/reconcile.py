"""Reconciliation — reduce N per-sink values to one broadcaster-level value.

Rule: exactly one distinct value wins; no values yields the caller's
default; more than one distinct value is resolved by an explicit
``DivergencePolicy``.  "No sinks" and "sinks disagree" are never folded
into the same path.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from multistream.errors import ConsistencyFailure
from multistream.models.policy import DivergencePolicy


def distinct(values: Iterable[Any]) -> list[Any]:
    """Return the distinct *values* (by equality), in first-seen order.

    Works for unhashable values too, so it compares linearly.
    """
    seen: list[Any] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def reconcile(
    values: Iterable[Any],
    *,
    default: Any = None,
    on_divergence: DivergencePolicy = DivergencePolicy.FAIL,
    name: str = "value",
) -> Any:
    """Resolve per-sink *values* into a single value.

    Parameters
    ----------
    values:
        Per-sink values, in sink order.
    default:
        Returned when *values* is empty (no sinks registered).
    on_divergence:
        ``FAIL`` raises ``ConsistencyFailure``; ``ACCEPT_FIRST`` returns the
        value reported by the earliest sink.
    name:
        Property name used in the ``ConsistencyFailure`` message.
    """
    unique = distinct(values)
    if not unique:
        return default
    if len(unique) == 1:
        return unique[0]
    if DivergencePolicy(on_divergence) is DivergencePolicy.ACCEPT_FIRST:
        return unique[0]
    raise ConsistencyFailure(name, unique)
