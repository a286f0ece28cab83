"""Process-start wiring for hosts that publish or discover services."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from rich.logging import RichHandler

from servicelock.config import load_config
from servicelock.registry import ServiceRegistry

_CONSOLE_HANDLER: RichHandler | None = None


def configure_logging(level: int = logging.INFO) -> RichHandler:
    """Route service registration logs to a Rich console handler.

    Supervisors and spawned services call this once at startup; later calls
    return the handler installed by the first one and change nothing.

    Args:
        level: Root logger level applied on first call.

    Returns:
        The process-wide Rich handler.
    """
    global _CONSOLE_HANDLER  # noqa: PLW0603
    if _CONSOLE_HANDLER is None:
        _CONSOLE_HANDLER = RichHandler(show_path=False, rich_tracebacks=True)
        logging.basicConfig(
            level=level, format="%(message)s", handlers=[_CONSOLE_HANDLER]
        )
    return _CONSOLE_HANDLER


def build_registry(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServiceRegistry:
    """Resolve config once and build the process-wide registry.

    Args:
        config_path: Optional YAML/JSON overrides file.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Registry bound to the resolved config root.
    """
    config = load_config(config_path, environ)
    logging.getLogger(__name__).debug(
        "Service registry root %s/%s", config.config_root, config.namespace
    )
    return ServiceRegistry(config)
