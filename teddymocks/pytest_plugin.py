"""pytest fixtures for teddymocks.

Enable from a conftest.py:
    pytest_plugins = ["teddymocks.pytest_plugin"]

Fixtures:
- global_override: an open GlobalOverride scope for the duration of one test
- teddymocks_project_config: teddymocks.yaml from the pytest rootdir, loaded
  once per session (built-in defaults when the file is absent)
- teddymocks_config: installs the project config as the process-wide default
  for one test
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from teddymocks.config import TeddyMocksConfig, set_default_config
from teddymocks.config_loader import load_project_config
from teddymocks.infra.global_override import GlobalOverride

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def global_override() -> Iterator[type[GlobalOverride]]:
    """Open a global override scope; bindings are restored at teardown."""
    with GlobalOverride.scope() as scope:
        yield scope


@pytest.fixture(scope="session")
def teddymocks_project_config(request: pytest.FixtureRequest) -> TeddyMocksConfig:
    return load_project_config(request.config.rootpath)


@pytest.fixture
def teddymocks_config(
    teddymocks_project_config: TeddyMocksConfig,
) -> Iterator[TeddyMocksConfig]:
    """Install the project config as default, reset to env-derived after."""
    set_default_config(teddymocks_project_config)
    try:
        yield teddymocks_project_config
    finally:
        set_default_config(None)
