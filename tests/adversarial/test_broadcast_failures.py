"""Adversarial tests — broadcaster resilience under failure and contention.

These tests verify that:
1. Sinks raising assorted exception types never stop sibling sinks
2. A sink that starts failing mid-stream is isolated per batch
3. Concurrent broadcasts never interleave their per-sink calls
4. Broadcasters sharing a sync root serialise against each other
5. Sinks added during a broadcast are handled without corrupting state
"""

from __future__ import annotations

import io
import threading
import time

import pytest

from multistream.core.fanout import FanOut
from multistream.errors import AggregateFailure
from multistream.streams.aggregate import AggregateStreamWriter
from multistream.streams.aggregate_text import AggregateTextWriter

# ---------------------------------------------------------------------------
# Test sinks
# ---------------------------------------------------------------------------


class ExplodingSink:
    """A sink whose writes always raise the configured exception type."""

    def __init__(self, exc_type: type[Exception] = RuntimeError) -> None:
        self._exc_type = exc_type

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:
        raise self._exc_type("exploded!")

    def flush(self) -> None:
        pass


class SlowExplodingSink(io.BytesIO):
    """Succeeds N writes, then fails every write after that."""

    def __init__(self, fail_after: int = 2) -> None:
        super().__init__()
        self._fail_after = fail_after
        self._count = 0

    def write(self, data) -> int:
        self._count += 1
        if self._count > self._fail_after:
            raise OSError(f"failed on call {self._count}")
        return super().write(data)


class SleepySink:
    """Records which broadcast touched it, sleeping to widen race windows."""

    def __init__(self, journal: list[str]) -> None:
        self._journal = journal

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:
        self._journal.append(data.decode())
        time.sleep(0.002)
        return len(data)

    def flush(self) -> None:
        pass


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestExceptionVariety:
    @pytest.mark.parametrize(
        "exc_type", [RuntimeError, ValueError, OSError, KeyError, TypeError]
    )
    def test_any_exception_type_is_aggregated(self, exc_type):
        writer = AggregateStreamWriter()
        good = io.BytesIO()
        writer.add_sink(ExplodingSink(exc_type))
        writer.add_sink(good)

        with pytest.raises(AggregateFailure) as excinfo:
            writer.write(b"data")

        assert isinstance(excinfo.value.causes[0], exc_type)
        assert good.getvalue() == b"data"

    def test_all_sinks_failing_reports_every_cause(self):
        writer = AggregateStreamWriter()
        for exc_type in (RuntimeError, OSError, ValueError):
            writer.add_sink(ExplodingSink(exc_type))

        with pytest.raises(AggregateFailure) as excinfo:
            writer.write(b"x")

        assert [type(e) for e in excinfo.value.causes] == [
            RuntimeError, OSError, ValueError,
        ]

    def test_base_exceptions_are_not_swallowed(self):
        writer = AggregateStreamWriter()
        writer.add_sink(ExplodingSink(KeyboardInterrupt))  # type: ignore[arg-type]
        with pytest.raises(KeyboardInterrupt):
            writer.write(b"x")


class TestMidStreamFailure:
    def test_sink_failing_after_two_writes(self):
        writer = AggregateStreamWriter()
        flaky = SlowExplodingSink(fail_after=2)
        steady = io.BytesIO()
        writer.add_sink(flaky)
        writer.add_sink(steady)

        writer.write(b"a")
        writer.write(b"b")
        for chunk in (b"c", b"d"):
            with pytest.raises(AggregateFailure):
                writer.write(chunk)

        assert flaky.getvalue() == b"ab"
        assert steady.getvalue() == b"abcd"


class TestConcurrency:
    def test_broadcasts_never_interleave(self):
        journal: list[str] = []
        writer = AggregateStreamWriter()
        sink_count = 4
        for _ in range(sink_count):
            writer.add_sink(SleepySink(journal))

        def _broadcast(tag: str) -> None:
            for _ in range(5):
                writer.write(tag.encode())

        threads = [threading.Thread(target=_broadcast, args=(t,)) for t in "ABC"]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(journal) == 3 * 5 * sink_count
        for start in range(0, len(journal), sink_count):
            batch = journal[start : start + sink_count]
            assert len(set(batch)) == 1, f"interleaved batch: {batch}"

    def test_shared_sync_root_serialises_writers(self):
        journal: list[str] = []
        lock = threading.RLock()
        first = AggregateStreamWriter(sync_root=lock)
        second = AggregateStreamWriter(sync_root=lock)
        for writer in (first, second):
            for _ in range(3):
                writer.add_sink(SleepySink(journal))

        def _hammer(writer: AggregateStreamWriter, tag: str) -> None:
            for _ in range(5):
                writer.write(tag.encode())

        threads = [
            threading.Thread(target=_hammer, args=(first, "1")),
            threading.Thread(target=_hammer, args=(second, "2")),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for start in range(0, len(journal), 3):
            assert len(set(journal[start : start + 3])) == 1

    def test_text_writer_broadcasts_are_atomic(self):
        journal: list[str] = []

        class _TextJournal:
            def write(self, text: str) -> int:
                journal.append(text)
                time.sleep(0.001)
                return len(text)

            def flush(self) -> None:
                pass

        writer = AggregateTextWriter()
        for _ in range(3):
            writer.add_sink(_TextJournal())

        threads = [
            threading.Thread(target=lambda t=t: [writer.write(t) for _ in range(5)])
            for t in "xyz"
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for start in range(0, len(journal), 3):
            assert len(set(journal[start : start + 3])) == 1


class TestReentrancy:
    def test_sink_added_during_broadcast_is_included(self):
        fanout: FanOut = FanOut()
        late = io.BytesIO()

        class _Recruiter(io.BytesIO):
            def write(self, data) -> int:
                if late not in fanout.sinks:
                    fanout.add_sink(late)
                return super().write(data)

        fanout.add_sink(_Recruiter())
        fanout.execute_action(lambda s: s.write(b"z"), "write")

        assert late.getvalue() == b"z"
        assert len(fanout) == 2
