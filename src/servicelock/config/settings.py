"""Service lock config model and loading helpers."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from servicelock.errors import ConfigError
from servicelock.kernel.paths import validate_segment

CONFIG_HOME_ENV = "XDG_CONFIG_HOME"
DEFAULT_NAMESPACE = "gatsby"
DEFAULT_LOCK_FILENAME = "holder"


def resolve_config_root(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the per-user config root.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        ``$XDG_CONFIG_HOME`` when set and non-empty, else ``~/.config``.
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_HOME_ENV, "")
    if override:
        return Path(override)
    return Path.home() / ".config"


class ServiceLockConfig(BaseModel):
    """Explicit configuration threaded into resolver and registry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    config_root: Path
    namespace: str = DEFAULT_NAMESPACE
    lock_filename: str = DEFAULT_LOCK_FILENAME

    @model_validator(mode="after")
    def _validate_segments(self) -> ServiceLockConfig:
        """Namespace and lock filename must each be one path segment."""
        validate_segment(self.namespace, kind="namespace")
        validate_segment(self.lock_filename, kind="lock filename")
        if self.lock_filename.endswith(".lock"):
            raise ValueError("lock filename must not look like a service slot")
        return self

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> ServiceLockConfig:
        """Build config rooted at the environment-resolved config root.

        Args:
            environ: Environment mapping; defaults to ``os.environ``.
            **overrides: Extra field values (e.g. ``namespace``).

        Returns:
            Validated config.
        """
        return cls.model_validate(
            {"config_root": resolve_config_root(environ), **overrides}
        )


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid service lock config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid service lock config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid service lock config payload: root must be an object")
    return payload


def load_config(
    path: Path | None,
    environ: Mapping[str, str] | None = None,
) -> ServiceLockConfig:
    """Load service lock config, layering file overrides over the environment.

    Args:
        path: Optional YAML/JSON overrides file.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated config; environment defaults when the file is absent.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    payload: dict[str, object] = {}
    if path is not None and path.exists():
        payload = _decode_config_payload(path)
    payload.setdefault("config_root", resolve_config_root(environ))
    try:
        return ServiceLockConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid service lock config payload: {exc}") from exc
