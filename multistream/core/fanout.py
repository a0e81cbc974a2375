"""FanOut — applies one operation to ALL registered sinks.

Every operation is attempted on every sink, in registration order.  A
failing sink never prevents the remaining sinks from receiving the
operation; failures are collected and surfaced together as a single
``AggregateFailure`` once the whole batch has run.  Failures while walking
the sink collection itself are folded into the same failure set, so either
every sink was attempted or the outcome explains why not.

All operations hold the fan-out's re-entrant lock for the whole batch, so
two broadcasts never interleave their per-sink calls.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, MutableSequence
from contextlib import AbstractContextManager
from typing import Any, Generic, TypeVar

from multistream.core.reconcile import reconcile
from multistream.errors import InvalidArgumentError
from multistream.models.outcome import FanOutOutcome
from multistream.models.policy import DivergencePolicy

logger = logging.getLogger(__name__)

SinkT = TypeVar("SinkT")
ResultT = TypeVar("ResultT")


class FanOutAccumulator:
    """Mutable tally threaded through one fan-out loop.

    Its final state maps deterministically to a ``FanOutOutcome``: either no
    failure, or the ordered list of causes.
    """

    def __init__(self) -> None:
        self.attempted = 0
        self.results: list[Any] = []
        self.failures: list[Exception] = []
        self.iteration_failure: Exception | None = None

    def succeed(self, result: Any) -> None:
        self.attempted += 1
        self.results.append(result)

    def fail(self, exc: Exception) -> None:
        self.attempted += 1
        self.failures.append(exc)

    def abort(self, exc: Exception) -> None:
        """Record a failure of the iteration itself."""
        self.iteration_failure = exc

    def outcome(self, operation: str) -> FanOutOutcome:
        return FanOutOutcome(
            operation=operation,
            attempted=self.attempted,
            results=self.results,
            failures=self.failures,
            iteration_failure=self.iteration_failure,
        )


class FanOut(Generic[SinkT]):
    """Ordered sink collection plus the broadcast/aggregate machinery.

    Parameters
    ----------
    owns_sinks:
        When True, ``close_sinks()`` closes every sink; when False the sinks
        outlive the fan-out and ``close_sinks()`` does nothing.
    sync_root:
        Lock held for every operation.  Pass the same lock to several
        fan-outs to serialise them against each other.  Must be re-entrant.

    Usage
    -----
    >>> fanout = FanOut()
    >>> fanout.add_sink(io.BytesIO())
    >>> fanout.execute_action(lambda s: s.write(b"data"), "write")
    """

    def __init__(
        self,
        *,
        owns_sinks: bool = False,
        sync_root: AbstractContextManager[Any] | None = None,
    ) -> None:
        self._owns_sinks = owns_sinks
        self._sync_root = sync_root if sync_root is not None else threading.RLock()
        sinks = self._create_sink_collection()
        self._sinks: MutableSequence[SinkT] = sinks if sinks is not None else []

    def _create_sink_collection(self) -> MutableSequence[SinkT] | None:
        """Hook for subclasses that need a custom sink collection.

        Returning None selects a plain list.
        """
        return None

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    @property
    def owns_sinks(self) -> bool:
        return self._owns_sinks

    @property
    def sync_root(self) -> AbstractContextManager[Any]:
        return self._sync_root

    @property
    def sinks(self) -> list[SinkT]:
        """Return a copy of the registered sinks, in registration order."""
        with self._sync_root:
            return list(self._sinks)

    def __len__(self) -> int:
        with self._sync_root:
            return len(self._sinks)

    def add_sink(self, sink: SinkT) -> None:
        """Append *sink*; capability is not checked until it is used."""
        if sink is None:
            raise InvalidArgumentError("sink must not be None")
        with self._sync_root:
            self._sinks.append(sink)
        logger.debug("Registered sink: %r", sink)

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------

    def run(
        self, func: Callable[[SinkT], ResultT], operation: str = "operation"
    ) -> FanOutOutcome:
        """Invoke *func* on every sink and return the outcome without raising."""
        if func is None:
            raise InvalidArgumentError("func must not be None")

        tally = FanOutAccumulator()
        with self._sync_root:
            try:
                for sink in self._sinks:
                    try:
                        tally.succeed(func(sink))
                    except Exception as exc:  # noqa: BLE001
                        tally.fail(exc)
            except Exception as exc:  # noqa: BLE001
                tally.abort(exc)

        outcome = tally.outcome(operation)
        if not outcome.succeeded:
            logger.warning(
                "%s: %d/%d sinks failed%s",
                operation,
                len(outcome.failures),
                outcome.attempted,
                " (sink iteration aborted)" if outcome.iteration_failure else "",
            )
        return outcome

    def execute_action(
        self, action: Callable[[SinkT], Any], operation: str = "operation"
    ) -> None:
        """Invoke *action* on every sink; raise ``AggregateFailure`` on any failure."""
        self.run(action, operation).raise_for_failures()

    def execute_query(
        self, query: Callable[[SinkT], ResultT], operation: str = "query"
    ) -> list[ResultT]:
        """Collect *query*'s result from every sink, in sink order.

        Partial results are discarded when any sink fails: the caller gets
        ``AggregateFailure`` instead.
        """
        outcome = self.run(query, operation)
        outcome.raise_for_failures()
        return list(outcome.results)

    def reconcile(
        self,
        query: Callable[[SinkT], Any],
        *,
        name: str,
        default: Any = None,
        on_divergence: DivergencePolicy = DivergencePolicy.FAIL,
    ) -> Any:
        """Query every sink and reduce the answers to one value."""
        with self._sync_root:
            values = self.execute_query(query, name)
        return reconcile(
            values, default=default, on_divergence=on_divergence, name=name
        )

    def close_sinks(self) -> None:
        """Close every sink when owning them; aggregate close failures."""
        if not self._owns_sinks:
            return
        self.execute_action(lambda sink: sink.close(), "close")
