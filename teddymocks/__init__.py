"""teddymocks: stubs that record calls, answer canned values and assert counts."""

from .assertions import AssertionResult
from .config import TeddyMocksConfig, get_default_config, set_default_config
from .core.expectation import CallArguments
from .errors import (
    ConfigError,
    ConfigurationError,
    InvalidArgumentError,
    InvalidStateError,
    TeddyMocksError,
)
from .infra.global_override import GlobalOverride, GlobalStub
from .stub import Stub, StubConfiguration

__version__ = "0.1.0"
__all__ = [
    "AssertionResult",
    "CallArguments",
    "ConfigError",
    "ConfigurationError",
    "GlobalOverride",
    "GlobalStub",
    "InvalidArgumentError",
    "InvalidStateError",
    "Stub",
    "StubConfiguration",
    "TeddyMocksConfig",
    "TeddyMocksError",
    "__version__",
    "get_default_config",
    "set_default_config",
]
