"""Structural protocols for the fluent stub and assertion handles.

Stub.stubs() returns something satisfying ConfigurationHandle and
Stub.asserts_that() returns something satisfying AssertionHandle. Code that
wraps or fakes a Stub can depend on these instead of the concrete classes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from teddymocks.core.expectation import CallArguments


@runtime_checkable
class ConfigurationHandle(Protocol):
    """Binds return behaviour to the method touched by a stubs() pass."""

    def and_returns(self, value: Any) -> ConfigurationHandle:  # noqa: ANN401
        """Answer matching calls with a fixed value."""
        ...

    def with_callback(
        self, callback: Callable[[CallArguments], Any]
    ) -> ConfigurationHandle:
        """Answer matching calls with callback(arguments).

        The callback takes precedence over a fixed return value.
        """
        ...


@runtime_checkable
class AssertionHandle(Protocol):
    """Boolean verdicts about the method touched by an asserts_that() pass.

    Every verdict is False (never an error) when the method was never
    stubbed or called.
    """

    def was_called(self) -> bool: ...

    def was_called_two_times(self) -> bool: ...

    def was_called_three_times(self) -> bool: ...

    def was_called_four_times(self) -> bool: ...

    def was_called_five_times(self) -> bool: ...

    def was_called_x_times(self, x: int) -> bool: ...

    def was_called_any_number_of_times(self) -> bool: ...

    def using_callback(self, predicate: Callable[[CallArguments], bool]) -> bool: ...
