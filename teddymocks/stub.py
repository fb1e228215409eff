"""Stub facade: the fluent configure/assert workflow over a substitute.

Usage:
    stub = Stub(Calculator)
    stub.stubs(lambda c: c.add(1, 2)).and_returns(42)

    assert stub.object.add(1, 2) == 42
    assert stub.asserts_that(lambda c: c.add(1, 2)).was_called()

Calls made directly on stub.object are recorded and answered by the stub
when configured, otherwise by the original implementation. Calls made inside
a stubs()/asserts_that() closure define behaviour or query history instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from teddymocks.assertions import AssertionResult
from teddymocks.config import get_default_config
from teddymocks.core.modes import Mode
from teddymocks.engine import build_substitute
from teddymocks.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable

    from teddymocks.config import TeddyMocksConfig
    from teddymocks.core.expectation import CallArguments, Expectation
    from teddymocks.engine import SubstituteState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StubConfiguration:
    """Binds return behaviour to the method touched by one stubs() pass."""

    def __init__(self, expectation: Expectation) -> None:
        self.expectation = expectation

    def and_returns(self, value: Any) -> StubConfiguration:  # noqa: ANN401
        self.expectation.return_value = value
        return self

    def with_callback(
        self, callback: Callable[[CallArguments], Any]
    ) -> StubConfiguration:
        self.expectation.return_callback = callback
        return self


class Stub(Generic[T]):
    """Owns a substitute instance of a class and its expectations.

    Args:
        type_: The class to substitute.
        *args: Passed to the original __init__ when building the substitute.
        config: Defaults for argument validation, comparison and constructor
            errors. Falls back to get_default_config().
        **kwargs: Passed to the original __init__ when building the substitute.

    Raises:
        InvalidArgumentError: If type_ is not a class.
    """

    def __init__(
        self,
        type_: type[T],
        *args: Any,
        config: TeddyMocksConfig | None = None,
        **kwargs: Any,
    ) -> None:
        self.config = config if config is not None else get_default_config()
        self.type = type_
        self.object: T
        self.object, self._state = build_substitute(type_, self.config, args, kwargs)

    @property
    def state(self) -> SubstituteState:
        return self._state

    def _run_pass(
        self,
        mode: Mode,
        fn: Callable[[T], Any],
        validate_arguments: bool | None,
    ) -> Expectation | None:
        if validate_arguments is None:
            validate_arguments = self.config.validate_arguments
        self._state.last_expectation = None
        with self._state.mode.engage(mode, validate_arguments):
            fn(self.object)
        return self._state.last_expectation

    def stubs(
        self,
        configure_fn: Callable[[T], Any],
        validate_arguments: bool | None = None,
    ) -> StubConfiguration:
        """Configure the method called inside configure_fn.

        configure_fn is invoked once with the substitute. The method it calls,
        with the arguments it passes, becomes the stubbed signature; bind the
        answer with and_returns() or with_callback() on the result. The first
        matching call after configuration gets that answer; later matching
        calls reach the original method until it is configured again or its
        recorded calls are cleared.

        Args:
            configure_fn: Closure calling exactly one method on the substitute.
            validate_arguments: Whether later calls must match the captured
                argument values (True) or only their shape (False). None uses
                the config default.

        Raises:
            InvalidArgumentError: If configure_fn called no substitute method.
        """
        expectation = self._run_pass(
            Mode.CONFIGURING_STUB, configure_fn, validate_arguments
        )
        if expectation is None:
            raise InvalidArgumentError(
                f"stubs() closure did not call a method of {self.type.__name__}"
            )
        return StubConfiguration(expectation)

    def asserts_that(
        self,
        assert_fn: Callable[[T], Any],
        validate_arguments: bool | None = None,
    ) -> AssertionResult:
        """Query the recorded history of the method called inside assert_fn.

        Args:
            assert_fn: Closure calling one method on the substitute with the
                arguments to look for.
            validate_arguments: Whether recorded calls must match the queried
                argument values (True) or only their shape (False). None uses
                the config default.

        Returns:
            AssertionResult; all verdicts are False if the method was never
            stubbed or called.
        """
        expectation = self._run_pass(Mode.ASSERTING, assert_fn, validate_arguments)
        return AssertionResult(expectation)

    def calls_to(self, method_name: str) -> tuple[CallArguments, ...]:
        """Recorded argument lists for a method, oldest first."""
        expectation = self._state.expectations.get(method_name)
        if expectation is None:
            return ()
        return tuple(expectation.recorded_calls)

    def clear_stubbed_methods(self) -> None:
        """Return every method to original behaviour, keeping recorded calls."""
        self._state.clear_stubbing()
        logger.debug("Cleared stubbed methods of %s", self._state.type_name)

    def clear_recorded_methods(self) -> None:
        """Erase recorded calls, keeping configured return behaviour."""
        self._state.clear_recorded()
        logger.debug("Cleared recorded methods of %s", self._state.type_name)

    def clear(self) -> None:
        """Clear both stubbed behaviour and recorded calls."""
        self.clear_stubbed_methods()
        self.clear_recorded_methods()

    def __repr__(self) -> str:
        return f"Stub({self.type.__qualname__})"
