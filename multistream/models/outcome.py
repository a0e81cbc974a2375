"""Fan-out outcome model — the result of one broadcast operation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from multistream.errors import AggregateFailure


class FanOutOutcome(BaseModel):
    """Per-sink results and failures collected from a single fan-out.

    ``attempted`` counts the sinks the operation was invoked on; every
    attempted sink contributes exactly one entry to either ``results`` or
    ``failures``.  ``iteration_failure`` is set when walking the sink
    collection itself failed, in which case fewer sinks may have been
    attempted than were registered.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    operation: str = "operation"
    attempted: int = 0
    results: list[Any] = []
    failures: list[Exception] = []
    iteration_failure: Exception | None = None

    @property
    def all_failures(self) -> list[Exception]:
        """Per-sink failures in sink order, followed by the iteration failure."""
        failures = list(self.failures)
        if self.iteration_failure is not None:
            failures.append(self.iteration_failure)
        return failures

    @property
    def succeeded(self) -> bool:
        return not self.failures and self.iteration_failure is None

    def raise_for_failures(self) -> None:
        """Raise ``AggregateFailure`` if anything failed, else return."""
        failures = self.all_failures
        if failures:
            raise AggregateFailure(
                f"{self.operation} failed for {len(failures)} of "
                f"{self.attempted} sink(s)",
                failures,
            )
