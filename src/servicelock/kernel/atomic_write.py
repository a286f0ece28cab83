"""Record publication: replace a slot's data file without exposing partial writes."""

from __future__ import annotations

import os
import uuid
from pathlib import Path


def _sync_directory(directory: Path) -> None:
    """Flush the slot directory entry so the rename survives a crash."""
    try:
        dir_fd = os.open(str(directory), os.O_RDONLY)
    except OSError:
        return  # platforms without directory handles (Windows)
    try:
        os.fsync(dir_fd)
    except OSError:
        pass
    finally:
        os.close(dir_fd)


def publish_record_bytes(slot_path: Path, record_path: Path, payload: bytes) -> None:
    """Replace record_path with payload in one rename.

    The staging file sits next to the record inside the slot, so readers of
    record_path observe either the previous record or the complete new one.
    Only the current slot holder may call this.

    Args:
        slot_path: Slot directory holding the record.
        record_path: Record file to replace.
        payload: Already-encoded record content.
    """
    staging = slot_path / f".{record_path.name}.{os.getpid()}.{uuid.uuid4().hex[:8]}"
    try:
        fd = os.open(str(staging), os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
        try:
            view = memoryview(payload)
            while view:
                view = view[os.write(fd, view) :]
            os.fsync(fd)
        finally:
            os.close(fd)
        os.replace(staging, record_path)
        _sync_directory(slot_path)
    finally:
        staging.unlink(missing_ok=True)
