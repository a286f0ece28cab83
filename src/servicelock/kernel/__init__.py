"""Kernel: identity, on-disk layout, slot locking and record writes."""

from servicelock.kernel.atomic_write import publish_record_bytes
from servicelock.kernel.digest import content_digest
from servicelock.kernel.identity import IdentityResolver
from servicelock.kernel.paths import (
    LOCK_SUFFIX,
    RECORD_FILENAME,
    SITES_DIR,
    get_record_path,
    get_registry_root,
    get_slot_path,
    service_name_from_entry,
)
from servicelock.kernel.slot_lock import SlotLock, try_lock_slot

__all__ = [
    "LOCK_SUFFIX",
    "RECORD_FILENAME",
    "SITES_DIR",
    "IdentityResolver",
    "SlotLock",
    "content_digest",
    "get_record_path",
    "get_registry_root",
    "get_slot_path",
    "publish_record_bytes",
    "service_name_from_entry",
    "try_lock_slot",
]
