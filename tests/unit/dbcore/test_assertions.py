"""Tests for the checked assertion primitives."""

import logging

import pytest

from dbcore.assertions import (
    ensure,
    ensure_ctx,
    ensuref,
    require,
    require_ctx,
    requiref,
)
from dbcore.errors import (
    ContractViolationError,
    PostconditionError,
    PreconditionError,
)
from dbcore.types import ContractKind


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_positive(n):
    return n > 0


class IsLongerThan:
    def __init__(self, min_len):
        self.min_len = min_len

    def run(self, s):
        return len(s) > self.min_len


class FormatSpy:
    """Records every attempt to format or stringify it."""

    def __init__(self):
        self.calls = 0

    def __format__(self, spec):
        self.calls += 1
        return "spy"

    def __str__(self):
        self.calls += 1
        return "spy"


# ---------------------------------------------------------------------------
# Boolean form
# ---------------------------------------------------------------------------


class TestBooleanForm:
    def test_true_condition_passes(self):
        require(True, "never shown")
        ensure(1 + 1 == 2, "never shown")

    def test_false_require_raises_precondition_error(self):
        with pytest.raises(PreconditionError, match="Division by zero"):
            require(0 != 0, "Division by zero")

    def test_false_ensure_raises_postcondition_error(self):
        with pytest.raises(PostconditionError, match="Result must be valid"):
            ensure(False, "Result must be valid")

    def test_violation_carries_kind_and_message(self):
        with pytest.raises(PreconditionError) as exc_info:
            require(False, "boom")
        assert exc_info.value.kind is ContractKind.PRECONDITION
        assert exc_info.value.message == "boom"
        assert str(exc_info.value) == "boom"

    def test_violations_are_assertion_errors(self):
        with pytest.raises(AssertionError):
            ensure(False, "boom")
        assert issubclass(PreconditionError, ContractViolationError)
        assert issubclass(PostconditionError, ContractViolationError)

    def test_truthiness_is_used_for_non_bool_conditions(self):
        require([1], "non-empty list is truthy")
        with pytest.raises(PreconditionError):
            require([], "empty list is falsy")

    def test_non_string_message_is_a_type_error(self):
        with pytest.raises(TypeError, match="expects a str message"):
            require(True, 42)

    def test_forgotten_message_in_validator_form_is_a_type_error(self):
        with pytest.raises(TypeError, match="validator form"):
            require(10, is_positive)

    def test_wrong_arity_is_a_type_error(self):
        with pytest.raises(TypeError):
            require(True)
        with pytest.raises(TypeError):
            ensure(1, is_positive, "msg", "extra")

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dbcore.assertions"):
            with pytest.raises(PreconditionError):
                require(False, "logged message")
        assert "precondition" in caplog.text
        assert "logged message" in caplog.text


# ---------------------------------------------------------------------------
# Validator form
# ---------------------------------------------------------------------------


class TestValidatorForm:
    def test_plain_function_validator(self):
        require(10, is_positive, "10 should be positive")
        ensure(1, is_positive, "1 should be positive")

    def test_run_capability_validator(self):
        longer_than_5 = IsLongerThan(5)
        require("hello world", longer_than_5, "string should be longer than 5")
        ensure("a long string", longer_than_5, "string should be longer than 5")

    def test_failing_validator_raises_with_message(self):
        with pytest.raises(PreconditionError, match="Value must be positive"):
            require(-3, is_positive, "Value must be positive")
        with pytest.raises(PostconditionError, match="too short"):
            ensure("abc", IsLongerThan(5), "too short")

    @pytest.mark.parametrize("value", [-2, 0, 3])
    def test_function_and_object_validators_agree(self, value):
        class PositiveObject:
            def run(self, n):
                return n > 0

        outcomes = []
        for validator in (is_positive, PositiveObject(), lambda n: n > 0):
            try:
                require(value, validator, "positive")
            except PreconditionError:
                outcomes.append(False)
            else:
                outcomes.append(True)

        assert outcomes == [value > 0] * 3

    def test_validator_is_called_with_value(self):
        seen = []

        def record(v):
            seen.append(v)
            return True

        require("payload", record, "msg")
        assert seen == ["payload"]

    def test_validator_exception_propagates_unwrapped(self):
        def broken(_):
            raise ValueError("validator exploded")

        with pytest.raises(ValueError, match="validator exploded"):
            require(1, broken, "msg")

    def test_unsupported_validator_shape_is_a_type_error(self):
        with pytest.raises(TypeError, match="callable or expose a 'run'"):
            require(1, 42, "msg")

    def test_non_string_message_is_a_type_error(self):
        with pytest.raises(TypeError, match="expects a str message"):
            ensure(1, is_positive, None)


# ---------------------------------------------------------------------------
# Formatted form
# ---------------------------------------------------------------------------


class TestFormattedForm:
    def test_passing_check_never_formats(self):
        spy = FormatSpy()
        requiref(True, "value {}", spy)
        ensuref(True, "value {} {s}", spy, s=spy)
        assert spy.calls == 0

    def test_failing_check_formats_message(self):
        with pytest.raises(
            PreconditionError,
            match="Insufficient funds: requested 150, available 100",
        ):
            requiref(150 <= 100, "Insufficient funds: requested {}, available {}", 150, 100)

    def test_ensuref_supports_keyword_arguments(self):
        with pytest.raises(PostconditionError, match="expected 50, got 51"):
            ensuref(False, "expected {expected}, got {actual}", expected=50, actual=51)

    def test_failing_check_formats_once(self):
        spy = FormatSpy()
        with pytest.raises(PreconditionError, match="value spy"):
            requiref(False, "value {}", spy)
        assert spy.calls == 1


# ---------------------------------------------------------------------------
# Context form
# ---------------------------------------------------------------------------


class TestContextForm:
    def test_require_ctx_wraps_expression(self):
        x, y = 5, 3
        with pytest.raises(PreconditionError) as exc_info:
            require_ctx(x < y, "x < y")
        assert exc_info.value.message == "Precondition failed: x < y"

    def test_ensure_ctx_wraps_expression(self):
        with pytest.raises(PostconditionError) as exc_info:
            ensure_ctx(False, "result >= 0")
        assert exc_info.value.message == "Postcondition failed: result >= 0"

    def test_passing_ctx_checks(self):
        require_ctx(True, "True")
        ensure_ctx(3 > 2, "3 > 2")
