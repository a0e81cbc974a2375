"""TempFileStream — a read/write temporary file deleted on close."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from multistream.streams.wrapper import StreamWrapper

logger = logging.getLogger(__name__)


class TempFileStream(StreamWrapper):
    """Create a fresh temporary file and remove it when the stream closes.

    ``name`` reports the file's path, so the stream can back a
    ``SecureEraseStream`` that overwrites and deletes it.
    """

    def __init__(
        self,
        *,
        suffix: str = "",
        prefix: str = "ms-",
        dir: str | os.PathLike[str] | None = None,
        buffer_size: int = 4096,
    ) -> None:
        fd, path = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=dir)
        try:
            handle = open(fd, "w+b", buffering=buffer_size)
        except Exception:
            os.close(fd)
            os.unlink(path)
            raise
        super().__init__(handle)
        self._path = Path(path)
        logger.debug("Created temp file %s", self._path)

    @property
    def name(self) -> str:
        return str(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        """Close the file, then delete it if it still exists."""
        if self._closed or self._base is None:
            return
        try:
            super().close()
        finally:
            self._delete()

    def _delete(self) -> None:
        if not self._path.exists():
            return
        self._path.unlink(missing_ok=True)
        logger.debug("Deleted temp file %s", self._path)
