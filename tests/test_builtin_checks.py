"""Tests for the built-in check functions."""

import math

import pytest

from fieldforge.validation import validate
from fieldforge.validation.errors import RuleConfigurationError
from fieldforge.validation.types import ErrorRecord
from fieldforge.validation.validators.builtin import (
    BUILTIN_CHECKS,
    EMAIL_PATTERN,
    is_present,
    MAX_INTEGER_DIGITS,
    max_length,
    max_number,
    measure,
    min_length,
    min_number,
    natural,
    natural_positive,
    numeric,
    required,
    string,
    to_integer,
    to_number,
    valid_email,
)


# =============================================================================
# Presence
# =============================================================================


class TestIsPresent:
    @pytest.mark.parametrize("value", [None, False, "", 0, 0.0, math.nan, [], {}])
    def test_absent_values(self, value):
        assert not is_present(value)

    @pytest.mark.parametrize("value", ["0", " ", "a", 1, -1, 0.5, True, [0], {"a": 1}])
    def test_present_values(self, value):
        assert is_present(value)


class TestAbsentValuesPass:
    """Every rule except required lets an absent value through."""

    @pytest.mark.parametrize("value", [None, "", 0, False])
    def test_unparameterized_rules(self, value):
        for check in (natural, natural_positive, numeric, string, valid_email):
            assert check(value, "Field") is None

    @pytest.mark.parametrize("value", [None, "", 0, False])
    def test_parameterized_rules(self, value):
        for check in (min_number, max_number, min_length, max_length):
            assert check(value, "5", "Field") is None

    @pytest.mark.parametrize("value", [None, "", 0, False])
    def test_required_fails(self, value):
        result = required(value, "Name")
        assert isinstance(result, ErrorRecord)
        assert result.rule == "required"
        assert result.message == "The Name is required!"


# =============================================================================
# Coercion helpers
# =============================================================================


class TestCoercion:
    def test_to_integer(self):
        assert to_integer("42") == 42
        assert to_integer(" -3 ") == -3
        assert to_integer("+7") == 7
        assert to_integer(5) == 5
        assert to_integer(4.0) == 4
        assert to_integer(4.5) is None
        assert to_integer("1.5") is None
        assert to_integer("12abc") is None
        assert to_integer(True) is None

    def test_to_number(self):
        assert to_number("3.5") == 3.5
        assert to_number(".5") == 0.5
        assert to_number("1e3") == 1000.0
        assert to_number(7) == 7.0
        assert to_number("abc") is None
        assert to_number("inf") is None
        assert to_number("1e999") is None
        assert to_number(math.inf) is None
        assert to_number(False) is None
        assert to_number("1_000") is None

    def test_integer_text_past_digit_limit(self):
        assert to_integer("9" * MAX_INTEGER_DIGITS) == int("9" * MAX_INTEGER_DIGITS)
        assert to_integer("9" * 5000) is None
        assert to_integer("-" + "9" * 5000) is None

    def test_int_too_large_for_float(self):
        assert to_number(10**400) is None
        assert to_number(-(10**400)) is None
        assert is_present(10**400)

    def test_measure_huge_int(self):
        assert measure(10**5000) == 5001
        assert measure(10**5000 - 1) == 5000
        assert measure(-(10**5000)) == 5002


# =============================================================================
# Individual checks
# =============================================================================


class TestNatural:
    def test_negative_fails(self):
        assert natural("-1", "Age") is not None

    def test_zero_string_passes(self):
        assert natural("0", "Age") is None

    def test_positive_passes(self):
        assert natural("12", "Age") is None
        assert natural(12, "Age") is None

    def test_not_an_integer_fails(self):
        result = natural("abc", "Age")
        assert result.message == "The Age must be a natural integer!"


class TestNaturalPositive:
    def test_zero_string_fails(self):
        result = natural_positive("0", "Qty")
        assert result.message == "The Qty must be a positive integer!"

    def test_one_passes(self):
        assert natural_positive("1", "Qty") is None

    def test_negative_fails(self):
        assert natural_positive(-4, "Qty") is not None


class TestNumeric:
    @pytest.mark.parametrize("value", ["1", "-2.5", "1e5", 3, 2.75, " 4 "])
    def test_numbers_pass(self, value):
        assert numeric(value, "Price") is None

    @pytest.mark.parametrize("value", ["abc", "1.2.3", "NaN", "Infinity", True, [1]])
    def test_non_numbers_fail(self, value):
        assert numeric(value, "Price").message == "The Price must be a number!"


class TestNumberBounds:
    def test_min_number(self):
        result = min_number("3", "5", "Score")
        assert result.message == "The Score must be minimum 5!"
        assert result.parameter == "5"
        assert min_number("5", "5", "Score") is None
        assert min_number(10, "5", "Score") is None

    def test_min_number_compares_numerically(self):
        assert min_number("10", "9", "Score") is None

    def test_max_number(self):
        result = max_number("11", "10", "Score")
        assert result.message == "The Score must be maximum 10!"
        assert max_number("10", "10", "Score") is None

    def test_non_numeric_value_is_left_to_numeric_rule(self):
        assert min_number("abc", "5", "Score") is None
        assert max_number("abc", "5", "Score") is None

    def test_non_numeric_parameter_raises(self):
        with pytest.raises(RuleConfigurationError) as exc:
            min_number("3", "five", "Score")
        assert exc.value.rule_name == "minNumber"


class TestStr:
    def test_string_passes(self):
        assert string("hello", "Name") is None

    def test_number_fails(self):
        assert string(12, "Name").message == "The Name must be a string!"


class TestLengthBounds:
    def test_min_length_fails_short_value(self):
        result = min_length("abcd", "5", "Code")
        assert result.rule == "minLength"
        assert result.message == "The Code must be at least 5 characters!"

    def test_min_length_boundary(self):
        assert min_length("abcde", "5", "Code") is None

    def test_max_length(self):
        result = max_length("abcdef", "5", "Code")
        assert result.message == "The Code must be maximum 5 characters!"
        assert max_length("abcde", "5", "Code") is None

    def test_numbers_measured_as_text(self):
        assert min_length(1234, "5", "Pin") is not None
        assert min_length(12345, "5", "Pin") is None

    def test_bad_parameter_raises(self):
        with pytest.raises(RuleConfigurationError):
            max_length("abc", "-1", "Code")
        with pytest.raises(RuleConfigurationError):
            max_length("abc", "2.5", "Code")


class TestValidEmail:
    @pytest.mark.parametrize(
        "email",
        [
            "user.name+tag@sub.domain.co",
            "test@example.com",
            '"john doe"@example.org',
            "admin@[192.168.0.1]",
        ],
    )
    def test_valid(self, email):
        assert valid_email(email, "Email") is None

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "a@b",
            "@missing-local.com",
            "user@domain.c",
            "two..dots@example.com",
            "user name@example.com",
            "user@example.com\n",
        ],
    )
    def test_invalid(self, email):
        assert valid_email(email, "Email").message == "The Email must be a valid email!"

    def test_non_string_fails(self):
        assert valid_email(12, "Email") is not None

    def test_pattern_is_exposed(self):
        assert EMAIL_PATTERN.fullmatch("x@y.io")


class TestMessageOverride:
    def test_override_used_with_placeholders(self):
        result = min_length("ab", "3", "Nick", "#fieldLabel# needs #fieldSize#+ chars")
        assert result.message == "Nick needs 3+ chars"

    def test_record_field_is_left_for_validator(self):
        assert required(None, "Name").field == ""


def test_builtin_table_covers_every_rule():
    assert {rule.value for rule in BUILTIN_CHECKS} == {
        "required",
        "natural",
        "naturalPositive",
        "numeric",
        "minNumber",
        "maxNumber",
        "str",
        "minLength",
        "maxLength",
        "validEmail",
    }


class TestOversizedValues:
    def test_long_integer_text_fails_natural(self):
        errors = validate({"data": {"n": "9" * 5000}, "rules": {"n": "natural"}})
        assert errors == ["The n must be a natural integer!"]

    def test_huge_int_is_not_a_number(self):
        errors = validate(
            {"data": {"n": 10**400}, "rules": {"n": "numeric|minNumber:1|maxNumber:5"}}
        )
        assert errors == ["The n must be a number!"]

    def test_huge_int_is_still_natural(self):
        assert validate({"data": {"n": 10**400}, "rules": {"n": "naturalPositive"}}) == []

    def test_huge_int_length(self):
        request = {"data": {"n": 10**5000}, "rules": {"n": "minLength:5000|maxLength:5000"}}
        assert validate(request) == ["The n must be maximum 5000 characters!"]
