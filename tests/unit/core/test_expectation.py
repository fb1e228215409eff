"""Unit tests for Expectation and argument matching."""

import pytest

from teddymocks.core.expectation import CallArguments, Expectation, arguments_match


class _AlwaysEqual:
    def __eq__(self, other: object) -> bool:
        return True

    __hash__ = object.__hash__


class TestCallArguments:
    def test_behaves_as_positional_tuple(self) -> None:
        args = CallArguments((1, "a"), {"flag": True})
        assert args == (1, "a")
        assert len(args) == 2
        assert args[1] == "a"
        assert args.kwargs == {"flag": True}

    def test_kwargs_default_empty(self) -> None:
        assert CallArguments((1,)).kwargs == {}

    def test_repr_includes_keywords(self) -> None:
        assert repr(CallArguments((1,), {"x": 2})) == "CallArguments(1, x=2)"


class TestArgumentsMatch:
    def test_equal_values_match(self) -> None:
        assert arguments_match(
            CallArguments((1, 2)), CallArguments((1, 2)), validate_arguments=True
        )

    def test_different_values_do_not_match(self) -> None:
        assert not arguments_match(
            CallArguments((1, 2)), CallArguments((1, 3)), validate_arguments=True
        )

    def test_different_length_never_matches(self) -> None:
        assert not arguments_match(
            CallArguments((1,)), CallArguments((1, 2)), validate_arguments=False
        )

    def test_validation_disabled_compares_shape_only(self) -> None:
        assert arguments_match(
            CallArguments((1, 2)), CallArguments(("x", None)), validate_arguments=False
        )

    def test_keyword_names_must_agree(self) -> None:
        assert not arguments_match(
            CallArguments((), {"a": 1}),
            CallArguments((), {"b": 1}),
            validate_arguments=False,
        )

    def test_keyword_values_validated(self) -> None:
        expected = CallArguments((), {"a": 1})
        assert arguments_match(
            expected, CallArguments((), {"a": 1}), validate_arguments=True
        )
        assert not arguments_match(
            expected, CallArguments((), {"a": 2}), validate_arguments=True
        )

    def test_equality_comparison_accepts_equal_distinct_objects(self) -> None:
        assert arguments_match(
            CallArguments(([1, 2],)), CallArguments(([1, 2],)), validate_arguments=True
        )

    def test_identity_comparison_rejects_equal_distinct_objects(self) -> None:
        assert not arguments_match(
            CallArguments(([1, 2],)),
            CallArguments(([1, 2],)),
            validate_arguments=True,
            comparison="identity",
        )

    def test_identity_comparison_accepts_same_object(self) -> None:
        shared = [1, 2]
        assert arguments_match(
            CallArguments((shared,)),
            CallArguments((shared,)),
            validate_arguments=True,
            comparison="identity",
        )

    def test_custom_eq_is_honoured(self) -> None:
        assert arguments_match(
            CallArguments((_AlwaysEqual(),)),
            CallArguments((object(),)),
            validate_arguments=True,
        )


class TestExpectation:
    def test_unconfigured_never_answers(self) -> None:
        expectation = Expectation("m")
        assert not expectation.is_configured
        assert not expectation.answers(CallArguments(()))

    def test_configured_answers_matching_call(self) -> None:
        expectation = Expectation("m")
        expectation.configure(CallArguments((1,)), validate_arguments=True)
        expectation.record(CallArguments((1,)))
        assert expectation.answers(CallArguments((1,)))
        expectation.record(CallArguments((2,)))
        assert not expectation.answers(CallArguments((2,)))

    def test_answers_only_single_match_since_configure(self) -> None:
        expectation = Expectation("m")
        expectation.record(CallArguments((1,)))
        expectation.configure(CallArguments((1,)), validate_arguments=True)
        assert expectation.configured_at == 1

        expectation.record(CallArguments((1,)))
        assert expectation.answers(CallArguments((1,)))
        expectation.record(CallArguments((1,)))
        assert not expectation.answers(CallArguments((1,)))

    def test_clear_recorded_resets_answer_window(self) -> None:
        expectation = Expectation("m")
        expectation.configure(CallArguments((1,)), validate_arguments=True)
        expectation.record(CallArguments((1,)))
        expectation.record(CallArguments((1,)))
        expectation.clear_recorded()
        assert expectation.configured_at == 0
        expectation.record(CallArguments((1,)))
        assert expectation.answers(CallArguments((1,)))

    def test_callback_takes_precedence(self) -> None:
        expectation = Expectation("m")
        expectation.return_value = "fixed"
        expectation.return_callback = lambda args: args[0] * 10
        assert expectation.get_return_value(CallArguments((3,))) == 30

    def test_count_matches(self) -> None:
        expectation = Expectation("m")
        for value in (1, 2, 1, 1):
            expectation.record(CallArguments((value,)))
        assert expectation.count_matches(CallArguments((1,)), validate_arguments=True) == 3
        assert expectation.count_matches(CallArguments((9,)), validate_arguments=False) == 4

    def test_match_stores_match_count(self) -> None:
        expectation = Expectation("m")
        expectation.record(CallArguments(("a",)))
        assert expectation.match(CallArguments(("a",)), validate_arguments=True) == 1
        assert expectation.match_count == 1

    def test_configure_keeps_recorded_calls(self) -> None:
        expectation = Expectation("m")
        expectation.record(CallArguments((1,)))
        expectation.return_value = "old"
        expectation.configure(CallArguments((2,)), validate_arguments=False)
        assert expectation.recorded_calls == [CallArguments((1,))]
        assert expectation.return_value is None
        assert expectation.validate_arguments is False

    def test_clears_are_independent(self) -> None:
        expectation = Expectation("m")
        expectation.configure(CallArguments((1,)), validate_arguments=True)
        expectation.return_value = 5
        expectation.record(CallArguments((1,)))

        expectation.clear_recorded()
        assert expectation.recorded_calls == []
        assert expectation.return_value == 5

        expectation.record(CallArguments((1,)))
        expectation.clear_stubbing()
        assert not expectation.is_configured
        assert expectation.return_value is None
        assert len(expectation.recorded_calls) == 1

    @pytest.mark.parametrize("comparison", ["equality", "identity"])
    def test_comparison_policy_applies_to_answers(self, comparison: str) -> None:
        expectation = Expectation("m", comparison=comparison)  # type: ignore[arg-type]
        expectation.configure(CallArguments(([1],)), validate_arguments=True)
        call = CallArguments(([1],))
        expectation.record(call)
        assert expectation.answers(call) is (comparison == "equality")
