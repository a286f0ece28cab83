"""Service slot exclusivity. Non-blocking; the OS drops a dead holder's lock."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from filelock import FileLock, Timeout

_LOGGER = logging.getLogger(__name__)


class SlotLock:
    """Held OS-level lock on one service slot."""

    def __init__(self, holder_path: Path, flock: FileLock) -> None:
        """Wrap an acquired lock.

        Args:
            holder_path: Lock file inside the slot directory.
            flock: Already-acquired file lock.
        """
        self.holder_path = holder_path
        self._flock = flock

    @property
    def is_held(self) -> bool:
        """Return whether this handle still holds the slot."""
        return self._flock.is_locked

    def release(self) -> None:
        """Release the slot. Safe to call more than once."""
        if self._flock.is_locked:
            self._flock.release(force=True)
            _LOGGER.debug("Released slot lock %s", self.holder_path)

    def __enter__(self) -> SlotLock:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


def try_lock_slot(holder_path: Path) -> SlotLock | None:
    """Try once to take the slot lock at holder_path.

    The slot directory must already exist. Contention is a normal outcome
    and yields None rather than raising.

    Args:
        holder_path: Lock file path inside the slot directory.

    Returns:
        Held SlotLock, or None when another live holder owns the slot.
    """
    # thread_local=False: acquired on a worker thread, released from anywhere
    flock = FileLock(str(holder_path), thread_local=False)
    try:
        flock.acquire(timeout=0)
    except Timeout:
        _LOGGER.debug("Slot lock busy %s", holder_path)
        return None
    return SlotLock(holder_path, flock)
