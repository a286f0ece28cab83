"""Service lock configuration loading."""

from servicelock.config.settings import (
    CONFIG_HOME_ENV,
    DEFAULT_NAMESPACE,
    ServiceLockConfig,
    load_config,
    resolve_config_root,
)

__all__ = [
    "CONFIG_HOME_ENV",
    "DEFAULT_NAMESPACE",
    "ServiceLockConfig",
    "load_config",
    "resolve_config_root",
]
