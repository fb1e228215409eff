"""Core data types: expectations, interception modes and handle protocols."""

from .expectation import CallArguments, Expectation, arguments_match
from .modes import Mode, ModeState
from .protocols import AssertionHandle, ConfigurationHandle

__all__ = [
    "AssertionHandle",
    "CallArguments",
    "ConfigurationHandle",
    "Expectation",
    "Mode",
    "ModeState",
    "arguments_match",
]
