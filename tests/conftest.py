"""Pytest configuration for teddymocks tests."""

import os

import pytest

from teddymocks.config import TeddyMocksConfig

pytest_plugins = ["teddymocks.pytest_plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Clear TEDDYMOCKS_* variables so the host environment cannot leak in."""
    for name in list(os.environ):
        if name.startswith("TEDDYMOCKS_"):
            os.environ.pop(name)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolated_default_config(teddymocks_config: TeddyMocksConfig) -> TeddyMocksConfig:
    """Every test starts from the built-in default config."""
    return teddymocks_config
