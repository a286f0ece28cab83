"""Identity resolver: program path -> shared registry location."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from servicelock.kernel.digest import content_digest
from servicelock.kernel.paths import get_registry_root

if TYPE_CHECKING:
    from servicelock.config import ServiceLockConfig


class IdentityResolver:
    """Map identity seeds to registry locations under one config root."""

    def __init__(self, config: ServiceLockConfig) -> None:
        """Store config dependency.

        Args:
            config: Config supplying root and namespace.
        """
        self._config = config

    @property
    def config(self) -> ServiceLockConfig:
        """Return the config this resolver was built with."""
        return self._config

    def identity(self, program_path: str) -> str:
        """Return the identity string for program_path."""
        return content_digest(program_path)

    def resolve(self, program_path: str) -> Path:
        """Return the registry location for program_path. Pure; no I/O.

        Args:
            program_path: String distinguishing the program instance.

        Returns:
            ``<config_root>/<namespace>/sites/<digest>``.
        """
        return get_registry_root(
            self._config.config_root,
            self._config.namespace,
            self.identity(program_path),
        )
