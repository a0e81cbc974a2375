"""SecureEraseStream — overwrite backing content before it is released.

On teardown the whole backing content is overwritten ``pass_count`` times,
block by block, with a deterministic fill byte per pass (``0xFF``,
``0x00``, ``0x97``, repeating), and the backing file is then deleted if
the backing stream is an on-disk file.

Teardown order:

1. flush the backing stream,
2. overwrite (only if the backing stream is open, seekable and writable;
   otherwise the whole destructive step, deletion included, is skipped;
   an append-mode stream is refused with ``UnsupportedOperationError``),
3. close the backing stream,
4. delete the backing file (skipped if it no longer exists).

``close()`` raises teardown failures (one as is, several as
``AggregateFailure``); ``finalize()`` logs and swallows them.
Both run the destructive step at most once.
"""

from __future__ import annotations

import io
import logging
from contextlib import AbstractContextManager
from typing import Any

from pydantic import ValidationError

from multistream.config import config
from multistream.errors import (
    AggregateFailure,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from multistream.models.erase import ErasePlan
from multistream.streams._helpers import (
    backing_path,
    is_append_mode,
    measure_length,
    write_all,
)
from multistream.streams.wrapper import StreamWrapper

logger = logging.getLogger(__name__)


class SecureEraseStream(StreamWrapper):
    """A pass-through stream that destroys its backing content on close.

    Parameters
    ----------
    base_stream:
        The already-open backing stream.
    pass_count:
        Number of overwrite passes (``>= 0``).  Defaults to
        ``config.erase_pass_count``.
    block_size:
        Size in bytes of each overwrite write (``>= 1``).  Defaults to
        ``config.erase_block_size``.
    flush_after_write:
        Flush the backing stream after every block.  Defaults to
        ``config.erase_flush_after_write``.
    """

    def __init__(
        self,
        base_stream: Any,
        pass_count: int | None = None,
        block_size: int | None = None,
        flush_after_write: bool | None = None,
        *,
        sync_root: AbstractContextManager[Any] | None = None,
    ) -> None:
        defaults = config.erase_plan()
        try:
            plan = ErasePlan(
                pass_count=defaults.pass_count if pass_count is None else pass_count,
                block_size=defaults.block_size if block_size is None else block_size,
                flush_after_write=(
                    defaults.flush_after_write
                    if flush_after_write is None
                    else flush_after_write
                ),
            )
        except ValidationError as exc:
            raise InvalidArgumentError(str(exc)) from exc

        super().__init__(base_stream, sync_root=sync_root)
        self._plan = plan
        self._destroyed = False

    @property
    def plan(self) -> ErasePlan:
        return self._plan

    @property
    def pass_count(self) -> int:
        return self._plan.pass_count

    @property
    def block_size(self) -> int:
        return self._plan.block_size

    @property
    def flush_after_write(self) -> bool:
        return self._plan.flush_after_write

    @property
    def destroyed(self) -> bool:
        """True once the overwrite-and-delete step has run."""
        return self._destroyed

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Erase, close and delete; raise the first failure."""
        self._teardown(strict=True)

    def finalize(self) -> None:
        """Erase, close and delete; log failures instead of raising."""
        self._teardown(strict=False)

    def _teardown(self, *, strict: bool) -> None:
        if self._closed or self._base is None:
            return
        self._closed = True

        base = self._base
        errors: list[Exception] = []
        with self._sync_root:
            try:
                erasable = self._is_erasable(base)
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)
                erasable = False
            if erasable:
                try:
                    base.flush()
                except Exception as exc:  # noqa: BLE001
                    errors.append(exc)
                try:
                    self._overwrite(base)
                except Exception as exc:  # noqa: BLE001
                    errors.append(exc)
            try:
                base.close()
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)
            if erasable:
                try:
                    self._delete_backing_file(base)
                except Exception as exc:  # noqa: BLE001
                    errors.append(exc)
            self._destroyed = erasable

        if not errors:
            return
        if strict:
            if len(errors) == 1:
                raise errors[0]
            raise AggregateFailure("secure erase teardown failed", errors)
        for exc in errors:
            logger.warning(
                "Secure erase teardown of %r failed: %s", base, exc, exc_info=exc
            )

    @staticmethod
    def _is_erasable(base: Any) -> bool:
        if getattr(base, "closed", False):
            logger.warning("Backing stream %r already closed; nothing erased", base)
            return False
        if not (base.seekable() and base.writable()):
            return False
        if is_append_mode(base):
            raise UnsupportedOperationError(
                f"backing stream {base!r} is in append mode and cannot be overwritten"
            )
        return True

    def _overwrite(self, base: Any) -> None:
        plan = self._plan
        length = measure_length(base)
        full_blocks, remainder = plan.layout(length)

        for pass_index in range(plan.pass_count):
            base.seek(0, io.SEEK_SET)
            block = plan.block(pass_index)
            for _ in range(full_blocks):
                write_all(base, block)
                if plan.flush_after_write:
                    base.flush()
            if remainder:
                write_all(base, block[:remainder])
                if plan.flush_after_write:
                    base.flush()

        logger.debug(
            "Overwrote %d bytes in %d pass(es) of %d-byte blocks",
            length,
            plan.pass_count,
            plan.block_size,
        )

    @staticmethod
    def _delete_backing_file(base: Any) -> None:
        path = backing_path(base)
        if path is None:
            return
        if not path.is_file():
            logger.debug("Backing file %s already gone", path)
            return
        path.unlink(missing_ok=True)
        logger.debug("Deleted backing file %s", path)
