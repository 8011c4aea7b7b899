"""Tests for validator dispatch and the stock validators."""

from dataclasses import FrozenInstanceError

import pytest

from dbcore.validators import InRange, LongerThan, Positive, Validator, as_predicate


class RangeValidator:
    def __init__(self, lo, hi):
        self.lo = lo
        self.hi = hi

    def run(self, value):
        return self.lo <= value <= self.hi


class TestAsPredicate:
    def test_plain_function_is_returned_as_is(self):
        def check(v):
            return v == 1

        assert as_predicate(check) is check

    def test_run_method_is_preferred(self):
        validator = RangeValidator(2, 200)
        predicate = as_predicate(validator)
        assert predicate(84) is True
        assert predicate(201) is False

    def test_run_wins_over_call(self):
        class Both:
            def __call__(self, value):
                return False

            def run(self, value):
                return True

        assert as_predicate(Both())(0) is True

    def test_validator_class_is_rejected(self):
        with pytest.raises(TypeError, match="pass an instance"):
            as_predicate(RangeValidator)

    def test_builtin_type_is_accepted_as_callable(self):
        predicate = as_predicate(bool)
        assert predicate(1) is True
        assert predicate(0) is False

    def test_non_callable_is_rejected(self):
        with pytest.raises(TypeError, match="got str"):
            as_predicate("not a validator")

    def test_protocol_matches_run_objects(self):
        assert isinstance(RangeValidator(0, 1), Validator)
        assert not isinstance(lambda v: True, Validator)


class TestStockValidators:
    @pytest.mark.parametrize("value,expected", [(1, True), (0, False), (-5, False)])
    def test_positive(self, value, expected):
        assert Positive().run(value) is expected

    @pytest.mark.parametrize("value,expected", [(2, True), (200, True), (1, False), (201, False)])
    def test_in_range_is_inclusive(self, value, expected):
        assert InRange(2, 200).run(value) is expected

    def test_longer_than(self):
        longer_than_5 = LongerThan(5)
        assert longer_than_5.run("hello world") is True
        assert longer_than_5.run("hello") is False

    def test_stock_validators_are_immutable(self):
        with pytest.raises(FrozenInstanceError):
            InRange(1, 2).min = 0
