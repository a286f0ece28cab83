"""Content digest used to derive registry identities (deterministic)."""

from __future__ import annotations

import hashlib


def content_digest(value: str) -> str:
    """Return hex-encoded MD5 digest of value's UTF-8 bytes.

    MD5 keeps the on-disk site directory names identical to the ones other
    tools already create for the same program path. Not used for security.

    Args:
        value: Identity seed, typically an absolute program path.

    Returns:
        32-character lowercase hex digest.
    """
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()
