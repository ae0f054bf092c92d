"""Built-in check functions.

Every check has one of two signatures:

    check(value, label, message=None)
    check(value, parameter, label, message=None)

and returns None when the value passes or an ErrorRecord when it fails.
The record's ``field`` is left empty; the validator attributes it.

Absent values pass every check except ``required``. "Absent" is decided by
``is_present`` and by nothing else.
"""

import math
import re
from typing import Any, Mapping

from fieldforge.validation.errors import RuleConfigurationError
from fieldforge.validation.messages import default_template, render_message
from fieldforge.validation.types import CheckFn, ErrorRecord, RuleName


# =============================================================================
# Patterns
# =============================================================================

# Local part: dot-separated atoms without specials, or a quoted string.
# Domain: bracketed IPv4 literal, or labels ending in a 2+ letter TLD.
EMAIL_PATTERN = re.compile(
    r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))"
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])"
    r"|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)

INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")

NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")

# Integer text longer than this is not treated as an integer. Matches the
# default integer string conversion limit of current interpreters.
MAX_INTEGER_DIGITS = 4300


# =============================================================================
# Presence and coercion helpers
# =============================================================================


def is_present(value: Any) -> bool:
    """Decide whether a field value counts as supplied.

    Absent: None, False, "", numeric zero, NaN, and empty collections.
    Whitespace-only strings and the string "0" are present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, (str, list, tuple, dict, set, frozenset)):
        return len(value) > 0
    return True


def to_integer(value: Any) -> int | None:
    """Coerce a value to int, or return None if it is not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value):
        if len(value.strip().lstrip("+-")) > MAX_INTEGER_DIGITS:
            return None
        try:
            return int(value)
        except ValueError:
            # interpreter limit lowered below MAX_INTEGER_DIGITS
            return None
    return None


def to_number(value: Any) -> float | None:
    """Coerce a value to a finite float, or return None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str) and NUMERIC_PATTERN.fullmatch(value):
        number = float(value)
    else:
        return None
    return number if math.isfinite(number) else None


def measure(value: Any) -> int:
    """Character length of a value; non-sized values are measured as text."""
    try:
        return len(value)
    except TypeError:
        pass
    try:
        return len(str(value))
    except ValueError:
        # ints past the integer string conversion limit
        return _digit_count(value)


def _digit_count(value: int) -> int:
    magnitude = abs(value)
    digits = int(magnitude.bit_length() * math.log10(2)) + 1
    if 10 ** (digits - 1) > magnitude:
        digits -= 1
    return digits + (1 if value < 0 else 0)


def _number_parameter(rule: RuleName, parameter: Any) -> float:
    number = to_number(parameter)
    if number is None:
        raise RuleConfigurationError(
            rule.value, f"parameter must be a number, got {parameter!r}"
        )
    return number


def _length_parameter(rule: RuleName, parameter: Any) -> int:
    length = to_integer(parameter)
    if length is None or length < 0:
        raise RuleConfigurationError(
            rule.value, f"parameter must be a non-negative integer, got {parameter!r}"
        )
    return length


def fail(
    rule: RuleName,
    label: str,
    message: str | None = None,
    size: Any = None,
) -> ErrorRecord:
    """Build the ErrorRecord for a failed built-in rule."""
    template = message or default_template(rule.value)
    return ErrorRecord(
        rule=rule.value,
        field="",
        label=label,
        message=render_message(template, label, size),
        parameter=None if size is None else str(size),
    )


# =============================================================================
# Checks
# =============================================================================


def required(value: Any, label: str, message: str | None = None) -> ErrorRecord | None:
    if not is_present(value):
        return fail(RuleName.REQUIRED, label, message)
    return None


def natural(value: Any, label: str, message: str | None = None) -> ErrorRecord | None:
    if not is_present(value):
        return None
    number = to_integer(value)
    if number is None or number < 0:
        return fail(RuleName.NATURAL, label, message)
    return None


def natural_positive(value: Any, label: str, message: str | None = None) -> ErrorRecord | None:
    if not is_present(value):
        return None
    number = to_integer(value)
    if number is None or number < 1:
        return fail(RuleName.NATURAL_POSITIVE, label, message)
    return None


def numeric(value: Any, label: str, message: str | None = None) -> ErrorRecord | None:
    if is_present(value) and to_number(value) is None:
        return fail(RuleName.NUMERIC, label, message)
    return None


def min_number(
    value: Any, scale: Any, label: str, message: str | None = None
) -> ErrorRecord | None:
    """Fail when the value is numerically below ``scale``.

    Non-numeric values pass here; the ``numeric`` rule reports them.
    """
    bound = _number_parameter(RuleName.MIN_NUMBER, scale)
    if not is_present(value):
        return None
    number = to_number(value)
    if number is not None and number < bound:
        return fail(RuleName.MIN_NUMBER, label, message, scale)
    return None


def max_number(
    value: Any, scale: Any, label: str, message: str | None = None
) -> ErrorRecord | None:
    """Fail when the value is numerically above ``scale``."""
    bound = _number_parameter(RuleName.MAX_NUMBER, scale)
    if not is_present(value):
        return None
    number = to_number(value)
    if number is not None and number > bound:
        return fail(RuleName.MAX_NUMBER, label, message, scale)
    return None


def string(value: Any, label: str, message: str | None = None) -> ErrorRecord | None:
    if is_present(value) and not isinstance(value, str):
        return fail(RuleName.STR, label, message)
    return None


def min_length(
    value: Any, length: Any, label: str, message: str | None = None
) -> ErrorRecord | None:
    bound = _length_parameter(RuleName.MIN_LENGTH, length)
    if is_present(value) and measure(value) < bound:
        return fail(RuleName.MIN_LENGTH, label, message, length)
    return None


def max_length(
    value: Any, length: Any, label: str, message: str | None = None
) -> ErrorRecord | None:
    bound = _length_parameter(RuleName.MAX_LENGTH, length)
    if is_present(value) and measure(value) > bound:
        return fail(RuleName.MAX_LENGTH, label, message, length)
    return None


def valid_email(value: Any, label: str, message: str | None = None) -> ErrorRecord | None:
    if not is_present(value):
        return None
    if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
        return fail(RuleName.VALID_EMAIL, label, message)
    return None


BUILTIN_CHECKS: Mapping[RuleName, CheckFn] = {
    RuleName.REQUIRED: required,
    RuleName.NATURAL: natural,
    RuleName.NATURAL_POSITIVE: natural_positive,
    RuleName.NUMERIC: numeric,
    RuleName.MIN_NUMBER: min_number,
    RuleName.MAX_NUMBER: max_number,
    RuleName.STR: string,
    RuleName.MIN_LENGTH: min_length,
    RuleName.MAX_LENGTH: max_length,
    RuleName.VALID_EMAIL: valid_email,
}
