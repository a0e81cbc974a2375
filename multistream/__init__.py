"""multistream: fan-out stream broadcasting and secure erase.

v0.1.0:
  - FanOut engine: ordered broadcast to N sinks with aggregated failures
  - Explicit reconciliation of per-sink values (DivergencePolicy)
  - AggregateStreamWriter / AggregateTextWriter (io-compatible broadcasters)
  - SecureEraseStream: multi-pass deterministic overwrite + delete on close
  - StreamWrapper pass-through and self-deleting TempFileStream
  - Env-driven config (MULTISTREAM_*) and a Typer CLI (shred, tee)
"""

__version__ = "0.1.0"
__description__ = "Fan-out stream broadcasting and secure erase for Python streams"

from multistream.core.fanout import FanOut
from multistream.core.reconcile import reconcile
from multistream.errors import (
    AggregateFailure,
    ConsistencyFailure,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from multistream.models.policy import DivergencePolicy
from multistream.streams import (
    AggregateStreamWriter,
    AggregateTextWriter,
    SecureEraseStream,
    StreamWrapper,
    TempFileStream,
)

__all__ = [
    "AggregateFailure",
    "AggregateStreamWriter",
    "AggregateTextWriter",
    "ConsistencyFailure",
    "DivergencePolicy",
    "FanOut",
    "InvalidArgumentError",
    "SecureEraseStream",
    "StreamWrapper",
    "TempFileStream",
    "UnsupportedOperationError",
    "reconcile",
    "__version__",
]
