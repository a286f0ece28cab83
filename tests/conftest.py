"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from servicelock.config import ServiceLockConfig
from servicelock.registry import ServiceRegistry


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """Temporary config root (stands in for $XDG_CONFIG_HOME)."""
    return tmp_path / "config"


@pytest.fixture
def config(config_root: Path) -> ServiceLockConfig:
    """Config rooted in the temporary config root."""
    return ServiceLockConfig(config_root=config_root)


@pytest.fixture
def registry(config: ServiceLockConfig) -> Iterator[ServiceRegistry]:
    """Registry whose held slots are released after each test."""
    reg = ServiceRegistry(config)
    yield reg
    reg.release_all()


@pytest.fixture
def other_registry(config: ServiceLockConfig) -> Iterator[ServiceRegistry]:
    """Second registry on the same root, standing in for a sibling process."""
    reg = ServiceRegistry(config)
    yield reg
    reg.release_all()


@pytest.fixture
def program_path(tmp_path: Path) -> str:
    """Absolute program path used as identity seed."""
    return str(tmp_path / "site")
