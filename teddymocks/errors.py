"""Exception taxonomy for teddymocks.

All library errors derive from TeddyMocksError so callers can catch the whole
family at once. The two precondition errors also derive from the matching
builtin (TypeError / RuntimeError) so existing handlers keep working.
"""

from __future__ import annotations


class TeddyMocksError(Exception):
    """Base exception for all teddymocks errors."""


class InvalidArgumentError(TeddyMocksError, TypeError):
    """Raised when an argument violates a call's precondition.

    Examples: building a Stub from something that is not a class, or a
    configuration pass that never called a method on the substitute.
    """


class InvalidStateError(TeddyMocksError, RuntimeError):
    """Raised when an operation requires a global override scope state.

    Replacing a global binding or building a GlobalStub outside an open
    scope raises this, as does opening a second scope while one is open.
    """


class ConfigError(TeddyMocksError):
    """Base exception for configuration errors.

    Raised when teddymocks.yaml or a TeddyMocksConfig has invalid content.
    """


class ConfigurationError(ConfigError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)
