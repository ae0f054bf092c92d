"""Core types for the fieldforge validation engine.

This module defines the types shared by the parser, the check functions and
the validator:
- RuleName / ErrorMode: the closed vocabularies of the rule-string language
- RuleInvocation: one parsed ``name[:parameter]`` token
- ErrorRecord: a single field-value failure
- ValidationRequest: the request contract consumed by ``Validator.make``
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Mapping, Union


class RuleName(str, Enum):
    """Built-in rule names recognized by the rule-string language."""

    REQUIRED = "required"
    NATURAL = "natural"
    NATURAL_POSITIVE = "naturalPositive"
    NUMERIC = "numeric"
    MIN_NUMBER = "minNumber"
    MAX_NUMBER = "maxNumber"
    STR = "str"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    VALID_EMAIL = "validEmail"

    @classmethod
    def parameterized(cls) -> frozenset["RuleName"]:
        """Rules whose token must carry a ``:parameter`` segment."""
        return frozenset(
            {cls.MIN_NUMBER, cls.MAX_NUMBER, cls.MIN_LENGTH, cls.MAX_LENGTH}
        )

    @property
    def takes_parameter(self) -> bool:
        return self in RuleName.parameterized()


class ErrorMode(Enum):
    """Shape of the errors returned by ``Validator.make``.

    SIMPLE: every failure is the rendered message string
    EXTENDED: every failure is a ``{error, field, message}`` dict
    """

    SIMPLE = "simple"
    EXTENDED = "extended"

    @classmethod
    def from_flag(cls, flag: Any) -> "ErrorMode":
        """Interpret the request's error-mode flag.

        Only the literal token ``"extended"`` switches to structured errors;
        every other value, including ``True``, means simple mode.
        """
        if flag is cls.EXTENDED or flag == cls.EXTENDED.value:
            return cls.EXTENDED
        return cls.SIMPLE


@dataclass(frozen=True)
class RuleInvocation:
    """A single parsed rule token.

    Attributes:
        name: Rule name as written (built-in or caller-registered)
        parameter: Raw parameter text after the first ``:``, or None
    """

    name: str
    parameter: str | None = None

    @property
    def has_parameter(self) -> bool:
        return self.parameter is not None

    def __str__(self) -> str:
        if self.parameter is None:
            return self.name
        return f"{self.name}:{self.parameter}"


@dataclass(frozen=True)
class ErrorRecord:
    """A single field-value failure.

    Attributes:
        rule: Name of the rule that failed
        field: Field name the failure belongs to
        label: Display label used when rendering the message
        message: Rendered, human-readable message
        parameter: Rule parameter text, for parameterized rules
    """

    rule: str
    field: str
    label: str
    message: str
    parameter: str | None = None

    def for_field(self, field_name: str) -> "ErrorRecord":
        """Return a copy attributed to ``field_name``."""
        if self.field == field_name:
            return self
        return replace(self, field=field_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.rule,
            "field": self.field,
            "message": self.message,
        }


# A check returns None when the value passes. Built-ins return an ErrorRecord;
# caller callbacks may also return the failure message as a plain string.
CheckResult = Union[ErrorRecord, str, None]
CheckFn = Callable[..., CheckResult]

# Rendered output of Validator.make: strings (simple) or dicts (extended).
RenderedError = Union[str, dict[str, Any]]


@dataclass
class ValidationRequest:
    """Everything one ``make`` call needs.

    Attributes:
        data: Field name -> raw value (missing fields are treated as absent)
        rules: Field name -> rule string; iteration order is output order
        messages: Rule name -> template overriding the catalog default
        labels: Field name -> display label (falls back to the field name)
        callbacks: Rule name -> check function replacing or adding a rule
        error_mode: SIMPLE (strings) or EXTENDED (dicts)
    """

    data: Mapping[str, Any] = field(default_factory=dict)
    rules: Mapping[str, str] = field(default_factory=dict)
    messages: Mapping[str, str] = field(default_factory=dict)
    labels: Mapping[str, str] = field(default_factory=dict)
    callbacks: Mapping[str, CheckFn] = field(default_factory=dict)
    error_mode: ErrorMode = ErrorMode.SIMPLE

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ValidationRequest":
        """Create a request from its wire shape.

        The error-mode flag is read from ``extendedErrors`` and, failing that,
        from ``errors``.
        """
        flag = payload.get("extendedErrors", payload.get("errors"))
        return cls(
            data=payload.get("data") or {},
            rules=payload.get("rules") or {},
            messages=payload.get("messages") or {},
            labels=payload.get("labels") or {},
            callbacks=payload.get("callbacks") or {},
            error_mode=ErrorMode.from_flag(flag),
        )
