"""Filesystem-mediated service discovery and locking for sibling processes."""

from servicelock.bootstrap import build_registry, configure_logging
from servicelock.config import ServiceLockConfig, load_config, resolve_config_root
from servicelock.errors import (
    ConfigError,
    PublishError,
    RegistryNotFoundError,
    ServiceLockError,
    ServiceLockErrorCode,
)
from servicelock.kernel import IdentityResolver
from servicelock.registry import ServiceLease, ServiceRegistry

__all__ = [
    "ConfigError",
    "IdentityResolver",
    "PublishError",
    "RegistryNotFoundError",
    "ServiceLease",
    "ServiceLockConfig",
    "ServiceLockError",
    "ServiceLockErrorCode",
    "ServiceRegistry",
    "build_registry",
    "configure_logging",
    "load_config",
    "resolve_config_root",
]
