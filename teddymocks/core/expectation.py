"""Per-method expectation records and argument matching.

An Expectation combines two independent pieces of state for one method of
one substitute instance:

- Configured stub behaviour: the argument list captured when the method was
  stubbed, whether arguments participate in matching, and the fixed return
  value or callback used to answer matching calls.
- Observed history: every argument list the method was called with while the
  substitute was not asserting.

The two halves are cleared independently (clear_stubbing / clear_recorded).

Key types:
- CallArguments: a tuple of positional arguments carrying keywords in .kwargs
- Expectation: configured behaviour plus recorded calls for one method
- arguments_match(): the matching rule shared by stubbing and assertion
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

ArgumentComparison = Literal["equality", "identity"]

ARGUMENT_COMPARISONS: tuple[ArgumentComparison, ...] = ("equality", "identity")


class CallArguments(tuple):
    """The argument list of a single call.

    Behaves as the tuple of positional arguments (so ``args[0]`` and
    ``len(args)`` work as expected) and carries keyword arguments in
    ``kwargs``. Callbacks and predicates receive one CallArguments.
    """

    kwargs: Mapping[str, Any]

    def __new__(
        cls, args: tuple[Any, ...] = (), kwargs: Mapping[str, Any] | None = None
    ) -> CallArguments:
        self = super().__new__(cls, args)
        self.kwargs = dict(kwargs or {})
        return self

    def __repr__(self) -> str:
        parts = [repr(a) for a in self]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"CallArguments({', '.join(parts)})"


def _values_equal(
    expected: object, actual: object, comparison: ArgumentComparison
) -> bool:
    if expected is actual:
        return True
    if comparison == "identity":
        return False
    return bool(expected == actual)


def arguments_match(
    expected: CallArguments,
    actual: CallArguments,
    *,
    validate_arguments: bool,
    comparison: ArgumentComparison = "equality",
) -> bool:
    """Check whether two argument lists match.

    Lists match iff they have the same number of positional arguments and the
    same keyword names. When validate_arguments is True every positional and
    keyword value must also compare equal under the comparison policy;
    otherwise the shape alone decides.

    Args:
        expected: The captured (stub) or queried (assertion) argument list.
        actual: A recorded argument list.
        validate_arguments: Whether values participate in matching.
        comparison: "equality" (identity or ==) or "identity" (is only).

    Returns:
        True if the lists match.
    """
    if len(expected) != len(actual):
        return False
    if expected.kwargs.keys() != actual.kwargs.keys():
        return False
    if not validate_arguments:
        return True

    for want, got in zip(expected, actual, strict=True):
        if not _values_equal(want, got, comparison):
            return False
    for key, want in expected.kwargs.items():
        if not _values_equal(want, actual.kwargs[key], comparison):
            return False
    return True


@dataclass
class Expectation:
    """Configured behaviour and call history for one method.

    Attributes:
        method_name: Name of the method this expectation belongs to.
        expected_arguments: Argument list captured when the method was stubbed,
            or None if the method is not configured.
        validate_arguments: Whether argument values participate in matching
            against expected_arguments.
        return_value: Fixed value returned by matching calls.
        return_callback: Computes the return value from the call's
            CallArguments. Takes precedence over return_value.
        recorded_calls: Every argument list observed outside assertion mode,
            in call order.
        match_count: Number of recorded calls that matched the most recent
            assertion query.
        configured_at: Length of recorded_calls when the stub was last
            configured. Only calls recorded after it count towards answering.
    """

    method_name: str
    comparison: ArgumentComparison = "equality"
    expected_arguments: CallArguments | None = None
    validate_arguments: bool = True
    return_value: Any = None
    return_callback: Callable[[CallArguments], Any] | None = None
    recorded_calls: list[CallArguments] = field(default_factory=list)
    match_count: int = 0
    configured_at: int = 0

    @property
    def is_configured(self) -> bool:
        return self.expected_arguments is not None

    def configure(self, arguments: CallArguments, validate_arguments: bool) -> None:
        """Capture a new stub signature, discarding previous return behaviour."""
        self.expected_arguments = arguments
        self.validate_arguments = validate_arguments
        self.configured_at = len(self.recorded_calls)
        self.return_value = None
        self.return_callback = None

    def record(self, arguments: CallArguments) -> None:
        self.recorded_calls.append(arguments)

    def count_matches(
        self, arguments: CallArguments, *, validate_arguments: bool
    ) -> int:
        """Count recorded calls matching an argument list."""
        return sum(
            1
            for recorded in self.recorded_calls
            if arguments_match(
                arguments,
                recorded,
                validate_arguments=validate_arguments,
                comparison=self.comparison,
            )
        )

    def match(self, arguments: CallArguments, *, validate_arguments: bool) -> int:
        """Compute and store match_count for an assertion query."""
        self.match_count = self.count_matches(
            arguments, validate_arguments=validate_arguments
        )
        return self.match_count

    def answers(self, arguments: CallArguments) -> bool:
        """Check whether the configured stub answers the call just recorded.

        The call must match the captured arguments and be the only call
        recorded since configuration that does; later matching calls reach
        the original method.
        """
        if self.expected_arguments is None:
            return False
        if not arguments_match(
            self.expected_arguments,
            arguments,
            validate_arguments=self.validate_arguments,
            comparison=self.comparison,
        ):
            return False
        matches = sum(
            1
            for recorded in self.recorded_calls[self.configured_at :]
            if arguments_match(
                self.expected_arguments,
                recorded,
                validate_arguments=self.validate_arguments,
                comparison=self.comparison,
            )
        )
        return matches == 1

    def get_return_value(self, arguments: CallArguments) -> Any:  # noqa: ANN401
        if self.return_callback is not None:
            return self.return_callback(arguments)
        return self.return_value

    def clear_stubbing(self) -> None:
        self.expected_arguments = None
        self.validate_arguments = True
        self.return_value = None
        self.return_callback = None

    def clear_recorded(self) -> None:
        self.recorded_calls = []
        self.match_count = 0
        self.configured_at = 0
