"""Configuration failures raised by the validation engine.

Field values that fail a rule are never exceptions; they are returned as
ErrorRecords. The exceptions here signal a broken rule configuration and
abort the whole ``make`` call.
"""

from typing import Iterable


class RuleError(Exception):
    """Base class for rule configuration failures."""


class RuleSyntaxError(RuleError):
    """A rule string could not be split into rule tokens."""

    def __init__(self, rule_string: str, reason: str):
        self.rule_string = rule_string
        self.reason = reason
        super().__init__(f"Invalid rule string '{rule_string}': {reason}")


class UnknownRuleError(RuleError):
    """A rule name has neither a built-in check nor a registered callback."""

    def __init__(self, rule_name: str, available: Iterable[str] = ()):
        self.rule_name = rule_name
        self.available = sorted(available)
        message = f"Rule '{rule_name}' is not registered."
        if self.available:
            message += " Available rules: " + ", ".join(self.available)
        super().__init__(message)


class RuleConfigurationError(RuleError):
    """A known rule was invoked with an unusable configuration.

    Raised for a missing or malformed parameter on a parameterized rule,
    and for callbacks returning something other than None, a string or
    an ErrorRecord.
    """

    def __init__(self, rule_name: str, message: str):
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}': {message}")
