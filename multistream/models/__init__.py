"""Pydantic models and enums shared across multistream."""

from multistream.models.erase import FILL_PATTERNS, ErasePlan
from multistream.models.outcome import FanOutOutcome
from multistream.models.policy import DivergencePolicy

__all__ = ["FILL_PATTERNS", "DivergencePolicy", "ErasePlan", "FanOutOutcome"]
