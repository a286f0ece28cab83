"""Deterministic service lock error contracts."""

from __future__ import annotations

from enum import StrEnum


class ServiceLockErrorCode(StrEnum):
    """Stable service lock error codes."""

    REGISTRY_NOT_FOUND = "registry_not_found"
    PUBLISH_FAILED = "publish_failed"
    CONFIG_INVALID = "config_invalid"


class ServiceLockError(RuntimeError):
    """Service lock failure with stable deterministic code."""

    def __init__(
        self,
        code: ServiceLockErrorCode,
        message: str,
        *,
        data: dict[str, object] | None = None,
    ) -> None:
        """Create service lock failure.

        Args:
            code: Stable error code.
            message: Human-readable error message.
            data: Optional structured payload for diagnostics.
        """
        super().__init__(message)
        self.code = code
        self.data = data or {}


class RegistryNotFoundError(ServiceLockError):
    """Raised when enumerating an identity that never registered a service."""

    def __init__(self, registry_root: str, program_path: str) -> None:
        """Create missing-registry failure.

        Args:
            registry_root: Registry location that does not exist.
            program_path: Identity seed the caller addressed.
        """
        super().__init__(
            ServiceLockErrorCode.REGISTRY_NOT_FOUND,
            f"No services registered for {program_path!r} ({registry_root})",
            data={"registry_root": registry_root, "program_path": program_path},
        )


class PublishError(ServiceLockError):
    """Raised when a record cannot be written after the slot was acquired."""

    def __init__(self, name: str, record_path: str) -> None:
        """Create publish failure.

        Args:
            name: Service name whose record failed to write.
            record_path: Record file path.
        """
        super().__init__(
            ServiceLockErrorCode.PUBLISH_FAILED,
            f"Failed to publish service {name!r} to {record_path}",
            data={"name": name, "record_path": record_path},
        )


class ConfigError(ServiceLockError):
    """Raised when service lock config cannot be decoded or validated."""

    def __init__(self, message: str) -> None:
        """Create config failure.

        Args:
            message: Human-readable error message.
        """
        super().__init__(ServiceLockErrorCode.CONFIG_INVALID, message)
