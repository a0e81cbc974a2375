"""Unit tests for the pydantic models (ErasePlan, FanOutOutcome)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from multistream.errors import AggregateFailure
from multistream.models.erase import FILL_PATTERNS, ErasePlan
from multistream.models.outcome import FanOutOutcome


class TestErasePlan:
    def test_defaults(self):
        plan = ErasePlan()
        assert plan.pass_count == 1
        assert plan.block_size == 8192
        assert plan.flush_after_write is True

    @pytest.mark.parametrize(
        ("pass_index", "expected"),
        [(0, 0xFF), (1, 0x00), (2, 0x97), (3, 0xFF), (4, 0x00), (5, 0x97)],
    )
    def test_fill_byte_cycles(self, pass_index, expected):
        assert ErasePlan.fill_byte(pass_index) == expected

    def test_patterns_constant(self):
        assert FILL_PATTERNS == (0xFF, 0x00, 0x97)

    def test_block_is_filled(self):
        plan = ErasePlan(block_size=4)
        assert plan.block(2) == b"\x97\x97\x97\x97"

    @pytest.mark.parametrize(
        ("length", "expected"),
        [(0, (0, 0)), (3, (0, 3)), (4, (1, 0)), (10, (2, 2))],
    )
    def test_layout(self, length, expected):
        assert ErasePlan(block_size=4).layout(length) == expected

    def test_negative_pass_count_rejected(self):
        with pytest.raises(ValidationError):
            ErasePlan(pass_count=-1)

    def test_zero_block_size_rejected(self):
        with pytest.raises(ValidationError):
            ErasePlan(block_size=0)

    def test_frozen(self):
        plan = ErasePlan()
        with pytest.raises(ValidationError):
            plan.block_size = 1


class TestFanOutOutcome:
    def test_empty_outcome_succeeds(self):
        outcome = FanOutOutcome()
        assert outcome.succeeded
        assert outcome.all_failures == []
        outcome.raise_for_failures()

    def test_all_failures_orders_iteration_failure_last(self):
        sink_error = OSError("sink")
        walk_error = RuntimeError("walk")
        outcome = FanOutOutcome(
            attempted=1, failures=[sink_error], iteration_failure=walk_error
        )
        assert outcome.all_failures == [sink_error, walk_error]

    def test_raise_carries_causes(self):
        error = OSError("disk full")
        outcome = FanOutOutcome(operation="flush", attempted=1, failures=[error])
        with pytest.raises(AggregateFailure) as excinfo:
            outcome.raise_for_failures()
        assert excinfo.value.causes == [error]
