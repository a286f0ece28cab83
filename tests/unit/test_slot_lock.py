"""Slot exclusivity: contention, release and crash recovery."""

import subprocess
import sys
from pathlib import Path

import pytest
from filelock import FileLock

from servicelock.kernel.slot_lock import try_lock_slot

_HOLD_AND_DIE = """
import os
import sys

from filelock import FileLock

lock = FileLock(sys.argv[1])
lock.acquire(timeout=0)
print("held", flush=True)
sys.stdin.read()
os._exit(0)
"""


@pytest.fixture
def holder_path(tmp_path: Path) -> Path:
    """Lock file inside an existing slot directory."""
    slot = tmp_path / "proxy.lock"
    slot.mkdir()
    return slot / "holder"


@pytest.mark.unit
def test_second_attempt_fails_while_held(holder_path: Path) -> None:
    """At most one holder at a time; contention returns None."""
    first = try_lock_slot(holder_path)
    assert first is not None
    try:
        assert try_lock_slot(holder_path) is None
    finally:
        first.release()


@pytest.mark.unit
def test_release_frees_slot_and_is_idempotent(holder_path: Path) -> None:
    """Released slots can be reacquired; double release is harmless."""
    first = try_lock_slot(holder_path)
    assert first is not None
    assert first.is_held
    first.release()
    first.release()
    assert not first.is_held

    with try_lock_slot(holder_path) as second:
        assert second is not None
        assert second.is_held
    assert not second.is_held


@pytest.mark.unit
def test_foreign_holder_blocks_until_dropped(holder_path: Path) -> None:
    """A lock held directly on the primitive blocks; dropping it frees the slot."""
    foreign = FileLock(str(holder_path))
    foreign.acquire()
    assert try_lock_slot(holder_path) is None

    foreign.release()
    reclaimed = try_lock_slot(holder_path)
    assert reclaimed is not None
    reclaimed.release()


@pytest.mark.unit
def test_lock_from_dead_process_is_reclaimed(holder_path: Path) -> None:
    """A holder that exits without releasing does not keep the slot."""
    proc = subprocess.Popen(
        [sys.executable, "-c", _HOLD_AND_DIE, str(holder_path)],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        text=True,
    )
    try:
        assert proc.stdout is not None
        assert proc.stdout.readline().strip() == "held"
        assert try_lock_slot(holder_path) is None
    finally:
        proc.communicate(input="", timeout=30)

    reclaimed = try_lock_slot(holder_path)
    assert reclaimed is not None
    reclaimed.release()
