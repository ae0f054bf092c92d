"""fieldforge validation engine.

This module provides the rule-string validation pipeline:
- Parser: splits "required|minLength:5" into rule invocations
- Checks: one built-in function per rule name
- Validator: resolves rules, runs checks, shapes the errors

Usage:
    from fieldforge.validation import validate

    errors = validate({
        "data": {"name": "Al"},
        "rules": {"name": "required|minLength:3"},
        "labels": {"name": "Name"},
    })
    # ["The Name must be at least 3 characters!"]
"""

from fieldforge.validation.errors import (
    RuleConfigurationError,
    RuleError,
    RuleSyntaxError,
    UnknownRuleError,
)
from fieldforge.validation.messages import (
    MESSAGE_CATALOG,
    merge_catalog,
    render_message,
)
from fieldforge.validation.parser import parse_invocation, parse_rules
from fieldforge.validation.registry import CheckTable
from fieldforge.validation.services import CompiledCheck, Validator, validate
from fieldforge.validation.types import (
    CheckFn,
    ErrorMode,
    ErrorRecord,
    RuleInvocation,
    RuleName,
    ValidationRequest,
)
from fieldforge.validation.validators import BUILTIN_CHECKS, is_present

__all__ = [
    # Types
    "CheckFn",
    "ErrorMode",
    "ErrorRecord",
    "RuleInvocation",
    "RuleName",
    "ValidationRequest",
    # Errors
    "RuleConfigurationError",
    "RuleError",
    "RuleSyntaxError",
    "UnknownRuleError",
    # Messages
    "MESSAGE_CATALOG",
    "merge_catalog",
    "render_message",
    # Parsing and dispatch
    "parse_invocation",
    "parse_rules",
    "CheckTable",
    "BUILTIN_CHECKS",
    "is_present",
    # Services
    "CompiledCheck",
    "Validator",
    "validate",
]
