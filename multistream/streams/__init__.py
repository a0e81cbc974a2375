"""Stream decorators: broadcasters, pass-through wrapper, secure erase.

* ``AggregateStreamWriter`` / ``AggregateTextWriter`` fan every write out
  to all registered sinks and aggregate per-sink failures.
* ``StreamWrapper`` forwards every call to one backing stream.
* ``SecureEraseStream`` overwrites and deletes its backing content on close.
* ``TempFileStream`` is a temporary file that deletes itself on close.
"""

from multistream.streams.aggregate import AggregateStreamWriter
from multistream.streams.aggregate_text import AggregateTextWriter
from multistream.streams.destroyable import SecureEraseStream
from multistream.streams.tempfile_stream import TempFileStream
from multistream.streams.wrapper import StreamWrapper

__all__ = [
    "AggregateStreamWriter",
    "AggregateTextWriter",
    "SecureEraseStream",
    "StreamWrapper",
    "TempFileStream",
]
