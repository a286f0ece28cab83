"""Service registry: acquire, publish and discover per-service records.

Each program instance owns a registry location derived from its identity
seed. Every service under it gets a ``<name>.lock`` slot directory holding an
OS lock file (exclusivity) and a ``data`` record (published metadata). Records
are opaque strings; this layer never parses them.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from types import TracebackType

from servicelock.config import ServiceLockConfig
from servicelock.errors import PublishError, RegistryNotFoundError
from servicelock.kernel.atomic_write import publish_record_bytes
from servicelock.kernel.identity import IdentityResolver
from servicelock.kernel.paths import (
    get_holder_path,
    get_record_path,
    get_sites_root,
    get_slot_path,
    service_name_from_entry,
)
from servicelock.kernel.slot_lock import SlotLock, try_lock_slot

_LOGGER = logging.getLogger(__name__)


class ServiceLease:
    """Exclusive hold on one (identity, service name) slot."""

    def __init__(
        self,
        *,
        program_path: str,
        name: str,
        slot_path: Path,
        slot_lock: SlotLock,
    ) -> None:
        """Wrap a held slot lock.

        Args:
            program_path: Identity seed the slot belongs to.
            name: Service name.
            slot_path: Slot directory.
            slot_lock: Held lock for the slot.
        """
        self.program_path = program_path
        self.name = name
        self.slot_path = slot_path
        self._slot_lock = slot_lock

    @property
    def record_path(self) -> Path:
        """Return the published record path."""
        return get_record_path(self.slot_path)

    @property
    def is_held(self) -> bool:
        """Return whether the slot is still held."""
        return self._slot_lock.is_held

    def release(self) -> None:
        """Release the slot. The published record stays on disk."""
        self._slot_lock.release()

    async def __aenter__(self) -> ServiceLease:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


def _read_record(record_path: Path) -> str | None:
    """Read a record verbatim; any read failure means absent."""
    try:
        return record_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _list_slots(registry_root: Path) -> list[tuple[str, Path]]:
    """Return sorted (service name, slot directory) pairs under registry_root.

    Raises:
        FileNotFoundError: If registry_root does not exist.
    """
    slots = []
    for entry in registry_root.iterdir():
        name = service_name_from_entry(entry.name)
        if name is not None and entry.is_dir():
            slots.append((name, entry))
    return sorted(slots)


# Implicit holds taken by acquire_and_publish, keyed by slot directory.
# Module scope ties them to the process rather than to a registry object.
_PROCESS_HOLDS: dict[Path, ServiceLease] = {}
_PROCESS_HOLDS_LOCK = threading.Lock()


class ServiceRegistry:
    """Filesystem-mediated service discovery and mutual exclusion."""

    def __init__(
        self,
        config: ServiceLockConfig,
        *,
        resolver: IdentityResolver | None = None,
    ) -> None:
        """Create registry over one config root.

        Args:
            config: Explicit config (root, namespace, lock filename).
            resolver: Optional identity resolver; built from config when omitted.
        """
        self._config = config
        self._resolver = resolver or IdentityResolver(config)

    @property
    def config(self) -> ServiceLockConfig:
        """Return registry config."""
        return self._config

    def registry_root(self, program_path: str) -> Path:
        """Return the registry location for program_path."""
        return self._resolver.resolve(program_path)

    def slot_path(self, program_path: str, name: str) -> Path:
        """Return the slot directory for (program_path, name).

        Raises:
            ValueError: If name is not a single path segment.
        """
        return get_slot_path(self.registry_root(program_path), name)

    async def acquire(
        self,
        program_path: str,
        name: str,
        content: str,
    ) -> ServiceLease | None:
        """Take exclusive hold of a service slot and publish content into it.

        Args:
            program_path: Identity seed.
            name: Service name, e.g. ``proxy``.
            content: Opaque record payload.

        Returns:
            Held lease, or None when another live process holds the slot.

        Raises:
            PublishError: If content cannot be encoded, or the record cannot
                be written after acquisition.
        """
        slot_path = self.slot_path(program_path, name)
        record_path = get_record_path(slot_path)
        try:
            payload = content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise PublishError(name, str(record_path)) from exc

        slot_lock = await asyncio.to_thread(self._lock_slot, slot_path)
        if slot_lock is None:
            _LOGGER.debug("Service %r already held at %s", name, slot_path)
            return None
        lease = ServiceLease(
            program_path=program_path,
            name=name,
            slot_path=slot_path,
            slot_lock=slot_lock,
        )
        try:
            await asyncio.to_thread(self._write_record, lease, payload)
        except OSError as exc:
            lease.release()
            raise PublishError(name, str(record_path)) from exc
        return lease

    def _lock_slot(self, slot_path: Path) -> SlotLock | None:
        _LOGGER.debug("Creating service slot %s", slot_path)
        slot_path.mkdir(parents=True, exist_ok=True)
        return try_lock_slot(get_holder_path(slot_path, self._config.lock_filename))

    def _write_record(self, lease: ServiceLease, payload: bytes) -> None:
        _LOGGER.debug("Writing service record %s", lease.record_path)
        publish_record_bytes(lease.slot_path, lease.record_path, payload)

    async def acquire_and_publish(
        self,
        program_path: str,
        name: str,
        content: str,
    ) -> bool:
        """Acquire a slot, publish content, and keep holding it.

        The hold belongs to the process: it outlives this registry object and
        lasts until ``release``/``release_all`` or process exit.

        Args:
            program_path: Identity seed.
            name: Service name.
            content: Opaque record payload.

        Returns:
            True when this process now holds the slot, False under contention.

        Raises:
            PublishError: If the record cannot be published.
        """
        lease = await self.acquire(program_path, name, content)
        if lease is None:
            return False
        with _PROCESS_HOLDS_LOCK:
            _PROCESS_HOLDS[lease.slot_path] = lease
        _LOGGER.info("Registered service %r for %s", name, program_path)
        return True

    def release(self, program_path: str, name: str) -> bool:
        """Release a slot held via ``acquire_and_publish``.

        Returns:
            True if a held slot was released.
        """
        slot_path = self.slot_path(program_path, name)
        with _PROCESS_HOLDS_LOCK:
            lease = _PROCESS_HOLDS.pop(slot_path, None)
        if lease is None:
            return False
        lease.release()
        return True

    def release_all(self) -> None:
        """Release every implicit hold under this registry's config root."""
        sites_root = get_sites_root(self._config.config_root, self._config.namespace)
        with _PROCESS_HOLDS_LOCK:
            owned = [
                slot for slot in _PROCESS_HOLDS if slot.is_relative_to(sites_root)
            ]
            leases = [_PROCESS_HOLDS.pop(slot) for slot in owned]
        for lease in leases:
            lease.release()

    async def lookup(self, program_path: str, name: str) -> str | None:
        """Return the record last published for name, or None.

        Never acquires. Missing slot, missing record, unreadable record and a
        name that cannot denote a slot all yield None.
        """
        try:
            slot_path = self.slot_path(program_path, name)
        except ValueError:
            return None
        return await asyncio.to_thread(_read_record, get_record_path(slot_path))

    async def list_all(self, program_path: str) -> dict[str, str | None]:
        """Return every published service for program_path.

        Args:
            program_path: Identity seed.

        Returns:
            Mapping of service name to record content (None if unreadable).

        Raises:
            RegistryNotFoundError: If no service was ever registered for
                program_path.
        """
        registry_root = self.registry_root(program_path)
        try:
            slots = await asyncio.to_thread(_list_slots, registry_root)
        except FileNotFoundError as exc:
            raise RegistryNotFoundError(str(registry_root), program_path) from exc
        records = await asyncio.gather(
            *(
                asyncio.to_thread(_read_record, get_record_path(slot))
                for _, slot in slots
            )
        )
        names = [name for name, _ in slots]
        return dict(zip(names, records, strict=True))
