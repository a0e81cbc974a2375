"""Divergence policies for reconciling per-sink values."""

from __future__ import annotations

from enum import Enum


class DivergencePolicy(str, Enum):
    """What to do when sinks report more than one distinct value."""

    FAIL = "fail"
    ACCEPT_FIRST = "accept_first"
