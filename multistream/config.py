"""Library and CLI configuration — env-driven.

Settings are read from ``MULTISTREAM_*`` environment variables or a
``.env`` file in the working directory.  They only supply *defaults*:
every class accepts explicit constructor arguments that take precedence.

Examples
--------
Override via environment::

    export MULTISTREAM_ERASE_PASS_COUNT=3
    export MULTISTREAM_ERASE_BLOCK_SIZE=65536
    export MULTISTREAM_DIVERGENCE_POLICY=accept_first
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from multistream.models.erase import ErasePlan
from multistream.models.policy import DivergencePolicy


class MultistreamConfig(BaseSettings):
    """Defaults for broadcasters, the secure erase stream and the CLI."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MULTISTREAM_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging (applied by the CLI only; the library installs no handlers)
    log_level: str = "WARNING"

    # Secure erase
    erase_pass_count: int = Field(default=1, ge=0)
    erase_block_size: int = Field(default=8192, ge=1)
    erase_flush_after_write: bool = True

    # Broadcasters
    divergence_policy: DivergencePolicy = DivergencePolicy.FAIL

    # CLI
    tee_chunk_size: int = Field(default=65536, ge=1)

    def erase_plan(self) -> ErasePlan:
        """Return the configured overwrite plan."""
        return ErasePlan(
            pass_count=self.erase_pass_count,
            block_size=self.erase_block_size,
            flush_after_write=self.erase_flush_after_write,
        )


# Module-level singleton; import as `from multistream.config import config`
config = MultistreamConfig()
