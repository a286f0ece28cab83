"""Record publication writes."""

import os
from pathlib import Path

import pytest

from servicelock.kernel.atomic_write import publish_record_bytes


@pytest.mark.unit
def test_publish_overwrites_and_leaves_no_staging_file(tmp_path: Path) -> None:
    """A second publish replaces the record; no staging files remain."""
    record = tmp_path / "data"
    publish_record_bytes(tmp_path, record, b'{"port":9000}')
    publish_record_bytes(tmp_path, record, b'{"port":9001}')

    assert record.read_bytes() == b'{"port":9001}'
    assert sorted(p.name for p in tmp_path.iterdir()) == ["data"]


@pytest.mark.unit
def test_publish_preserves_bytes_verbatim(tmp_path: Path) -> None:
    """Line endings and non-ASCII bytes are written as given."""
    record = tmp_path / "data"
    publish_record_bytes(tmp_path, record, "a\r\nbé".encode())
    assert record.read_bytes() == "a\r\nbé".encode()


@pytest.mark.unit
def test_publish_empty_payload(tmp_path: Path) -> None:
    """Empty payloads produce an empty record."""
    record = tmp_path / "data"
    publish_record_bytes(tmp_path, record, b"")
    assert record.read_bytes() == b""


@pytest.mark.unit
def test_failed_publish_keeps_old_record(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A failed rename removes the staging file and keeps the old record."""
    record = tmp_path / "data"
    record.write_bytes(b"old")

    def failing_replace(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)
    with pytest.raises(OSError, match="disk full"):
        publish_record_bytes(tmp_path, record, b"new")

    assert record.read_bytes() == b"old"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["data"]
