"""Assertion evaluator returned by Stub.asserts_that().

Turns the match count computed during an assertion pass into boolean
verdicts. A method that was never stubbed or called has no Expectation;
every verdict is then False rather than an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from teddymocks.core.expectation import CallArguments, Expectation


class AssertionResult:
    """Verdicts about the method touched by one asserts_that() pass.

    The match count is captured when the assertion pass runs, so later calls
    on the substitute do not change an existing result.
    """

    def __init__(self, expectation: Expectation | None) -> None:
        self._expectation = expectation
        self._match_count = expectation.match_count if expectation else 0

    @property
    def match_count(self) -> int:
        """Recorded calls that matched the queried arguments."""
        return self._match_count

    @property
    def calls(self) -> tuple[CallArguments, ...]:
        """Every recorded argument list for the queried method."""
        if self._expectation is None:
            return ()
        return tuple(self._expectation.recorded_calls)

    def was_called(self) -> bool:
        return self.was_called_x_times(1)

    def was_called_two_times(self) -> bool:
        return self.was_called_x_times(2)

    def was_called_three_times(self) -> bool:
        return self.was_called_x_times(3)

    def was_called_four_times(self) -> bool:
        return self.was_called_x_times(4)

    def was_called_five_times(self) -> bool:
        return self.was_called_x_times(5)

    def was_called_x_times(self, x: int) -> bool:
        """True iff exactly x recorded calls matched."""
        if self._expectation is None:
            return False
        return self._match_count == x

    def was_called_any_number_of_times(self) -> bool:
        """True iff at least one recorded call matched."""
        if self._expectation is None:
            return False
        return self._match_count > 0

    def was_never_called(self) -> bool:
        """True iff no recorded call matched (including never touched)."""
        return self._match_count == 0

    def using_callback(self, predicate: Callable[[CallArguments], bool]) -> bool:
        """True iff predicate holds for any recorded call.

        The queried arguments play no part; every recorded call of the method
        is offered to the predicate until one satisfies it.
        """
        if self._expectation is None:
            return False
        return any(predicate(call) for call in self._expectation.recorded_calls)

    def __repr__(self) -> str:
        name = self._expectation.method_name if self._expectation else None
        return f"AssertionResult(method={name!r}, match_count={self._match_count})"
