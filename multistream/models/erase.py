"""Overwrite plan for the secure erase stream."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Fill byte per pass, selected by ``pass_index % 3``.
FILL_PATTERNS: tuple[int, int, int] = (0xFF, 0x00, 0x97)


class ErasePlan(BaseModel):
    """Immutable overwrite parameters: pass count, block size, flush mode."""

    model_config = ConfigDict(frozen=True)

    pass_count: int = Field(default=1, ge=0)
    block_size: int = Field(default=8192, ge=1)
    flush_after_write: bool = True

    @staticmethod
    def fill_byte(pass_index: int) -> int:
        """Return the fill byte used for the given zero-based pass."""
        return FILL_PATTERNS[pass_index % len(FILL_PATTERNS)]

    def block(self, pass_index: int) -> bytes:
        """Return one full block of the pass's fill byte."""
        return bytes([self.fill_byte(pass_index)]) * self.block_size

    def layout(self, length: int) -> tuple[int, int]:
        """Split *length* into ``(full_block_count, remainder)``."""
        return divmod(length, self.block_size)
