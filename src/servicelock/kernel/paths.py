"""Paths for the service registry. <config_root>/<namespace>/sites is the root."""

from pathlib import Path

SITES_DIR = "sites"
LOCK_SUFFIX = ".lock"
RECORD_FILENAME = "data"


def validate_segment(value: str, *, kind: str) -> str:
    """Return value if it is usable as a single path segment.

    Raises ValueError for empty values, "." / "..", or values containing a
    path separator, so no caller-supplied name can escape its parent.
    """
    if not value or value in {".", ".."}:
        raise ValueError(f"Invalid {kind}: {value!r}")
    if "/" in value or "\\" in value or "\x00" in value:
        raise ValueError(f"Invalid {kind} (path separator): {value!r}")
    return value


def get_sites_root(config_root: Path, namespace: str) -> Path:
    """Return path to <config_root>/<namespace>/sites."""
    return config_root / namespace / SITES_DIR


def get_registry_root(config_root: Path, namespace: str, identity: str) -> Path:
    """Return path to <config_root>/<namespace>/sites/<identity>/."""
    return get_sites_root(config_root, namespace) / identity


def get_slot_path(registry_root: Path, name: str) -> Path:
    """Return path to the service slot directory: registry_root/<name>.lock."""
    validate_segment(name, kind="service name")
    return registry_root / f"{name}{LOCK_SUFFIX}"


def get_record_path(slot_path: Path) -> Path:
    """Return path to the published record inside a slot: slot/data."""
    return slot_path / RECORD_FILENAME


def get_holder_path(slot_path: Path, lock_filename: str) -> Path:
    """Return path to the OS lock file held by the slot owner."""
    return slot_path / lock_filename


def service_name_from_entry(entry: str) -> str | None:
    """Recover a service name from a registry child name, or None if not a slot."""
    if not entry.endswith(LOCK_SUFFIX):
        return None
    name = entry[: -len(LOCK_SUFFIX)]
    return name or None
