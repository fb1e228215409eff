"""Configuration dataclass for teddymocks.

Provides TeddyMocksConfig for the defaults a Stub uses when the caller does not
say otherwise. Configuration can be constructed programmatically, loaded from
environment variables via from_env(), or read from teddymocks.yaml (see
config_loader).

Environment Variables:
    TEDDYMOCKS_VALIDATE_ARGUMENTS: Default argument validation for stubs() and
        asserts_that() ("true"/"false", default: true)
    TEDDYMOCKS_ARGUMENT_COMPARISON: "equality" or "identity" (default: equality)
    TEDDYMOCKS_SWALLOW_CONSTRUCTOR_ERRORS: Ignore failures of the original
        constructor when building a substitute ("true"/"false", default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from teddymocks.core.expectation import ARGUMENT_COMPARISONS, ArgumentComparison
from teddymocks.errors import ConfigurationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class TeddyMocksConfig:
    """Defaults applied by Stub and its handles.

    Attributes:
        validate_arguments: Whether stubs() and asserts_that() compare argument
            values when the caller passes validate_arguments=None.
            Env: TEDDYMOCKS_VALIDATE_ARGUMENTS (default: true)
        argument_comparison: How argument values are compared. "equality"
            accepts identical or == values, "identity" accepts only identical
            values. Env: TEDDYMOCKS_ARGUMENT_COMPARISON (default: equality)
        swallow_constructor_errors: Whether an exception raised by the original
            type's __init__ while building a substitute is logged and ignored.
            Env: TEDDYMOCKS_SWALLOW_CONSTRUCTOR_ERRORS (default: true)

    Example:
        config = TeddyMocksConfig(argument_comparison="identity")
        stub = Stub(Widget, config=config)
    """

    validate_arguments: bool = True
    argument_comparison: ArgumentComparison = "equality"
    swallow_constructor_errors: bool = True

    @classmethod
    def from_env(cls, *, validate: bool = True) -> TeddyMocksConfig:
        """Create TeddyMocksConfig from environment variables.

        Unset or empty variables fall back to the defaults. Unparseable
        booleans are reported by validation rather than guessed.

        Args:
            validate: If True (default), raise ConfigurationError on any errors.

        Returns:
            TeddyMocksConfig instance with values from environment or defaults.

        Raises:
            ConfigurationError: If validate=True and configuration is invalid.
        """
        errors: list[str] = []

        def read_bool(name: str, default: bool) -> bool:
            raw = os.environ.get(name, "").strip().lower()
            if not raw:
                return default
            if raw in _TRUE_VALUES:
                return True
            if raw in _FALSE_VALUES:
                return False
            errors.append(f"{name} must be a boolean, got: {raw!r}")
            return default

        validate_arguments = read_bool("TEDDYMOCKS_VALIDATE_ARGUMENTS", True)
        swallow = read_bool("TEDDYMOCKS_SWALLOW_CONSTRUCTOR_ERRORS", True)
        comparison = (
            os.environ.get("TEDDYMOCKS_ARGUMENT_COMPARISON", "").strip().lower()
            or "equality"
        )

        config = cls(
            validate_arguments=validate_arguments,
            argument_comparison=comparison,  # type: ignore[arg-type]
            swallow_constructor_errors=swallow,
        )

        if validate:
            errors.extend(config.validate())
            if errors:
                raise ConfigurationError(errors)

        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors: list[str] = []
        if self.argument_comparison not in ARGUMENT_COMPARISONS:
            allowed = ", ".join(ARGUMENT_COMPARISONS)
            errors.append(
                f"argument_comparison must be one of {allowed}, "
                f"got: {self.argument_comparison!r}"
            )
        for name in ("validate_arguments", "swallow_constructor_errors"):
            if not isinstance(getattr(self, name), bool):
                errors.append(f"{name} must be a boolean")
        return errors


_default_config: TeddyMocksConfig | None = None


def get_default_config() -> TeddyMocksConfig:
    """Return the process-wide default config, loading it from env on first use."""
    global _default_config
    if _default_config is None:
        _default_config = TeddyMocksConfig.from_env()
    return _default_config


def set_default_config(config: TeddyMocksConfig | None) -> None:
    """Replace the process-wide default config.

    Passing None resets it so the next get_default_config() reloads from env.
    """
    global _default_config
    if config is not None:
        errors = config.validate()
        if errors:
            raise ConfigurationError(errors)
    _default_config = config
