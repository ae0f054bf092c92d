"""Built-in check functions for fieldforge.

This package provides the checks that back the built-in rule names.
"""

from fieldforge.validation.validators.builtin import (
    BUILTIN_CHECKS,
    EMAIL_PATTERN,
    is_present,
    max_length,
    max_number,
    min_length,
    min_number,
    natural,
    natural_positive,
    numeric,
    required,
    string,
    valid_email,
)

__all__ = [
    "BUILTIN_CHECKS",
    "EMAIL_PATTERN",
    "is_present",
    "max_length",
    "max_number",
    "min_length",
    "min_number",
    "natural",
    "natural_positive",
    "numeric",
    "required",
    "string",
    "valid_email",
]
