"""Validation service for fieldforge.

The Validator binds the message catalog and the check functions together:
1. compile: parse every field's rule string and resolve each rule to a check
2. collect: run the compiled checks in declaration order, keeping failures
3. make: shape the failures as strings or ``{error, field, message}`` dicts

Compilation finishes before any check runs, so a configuration failure
aborts the call without partial results.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from fieldforge.validation.errors import RuleConfigurationError
from fieldforge.validation.messages import FALLBACK_TEMPLATE, merge_catalog, render_message
from fieldforge.validation.parser import parse_rules
from fieldforge.validation.registry import CheckTable
from fieldforge.validation.types import (
    CheckFn,
    CheckResult,
    ErrorMode,
    ErrorRecord,
    RenderedError,
    RuleInvocation,
    RuleName,
    ValidationRequest,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledCheck:
    """One (field, rule) pair, resolved and ready to run."""

    field: str
    label: str
    invocation: RuleInvocation
    check: CheckFn
    builtin: bool

    @property
    def passes_parameter(self) -> bool:
        """Whether the parameter is passed positionally to the check.

        Built-ins decide by rule name; callbacks get it when the token has one.
        """
        if self.builtin:
            return RuleName(self.invocation.name).takes_parameter
        return self.invocation.has_parameter


class Validator:
    """Runs rule strings against field values.

    Messages, callbacks and the error mode are fixed at construction;
    the instance keeps no state between ``make`` calls.

    Example:
        validator = Validator(error_mode=ErrorMode.EXTENDED)
        errors = validator.make({
            "data": {"email": "nope"},
            "rules": {"email": "required|validEmail"},
        })
    """

    def __init__(
        self,
        messages: Mapping[str, str] | None = None,
        callbacks: Mapping[str, CheckFn] | None = None,
        error_mode: ErrorMode | str | None = ErrorMode.SIMPLE,
    ):
        self.error_mode = ErrorMode.from_flag(error_mode)
        self.catalog = merge_catalog(messages)
        self.checks = CheckTable.with_overrides(callbacks)

    @classmethod
    def from_request(cls, request: ValidationRequest) -> "Validator":
        return cls(
            messages=request.messages,
            callbacks=request.callbacks,
            error_mode=request.error_mode,
        )

    @property
    def extended(self) -> bool:
        return self.error_mode is ErrorMode.EXTENDED

    def rule_names(self) -> list[str]:
        """All rule names this validator can dispatch."""
        return self.checks.names()

    def compile(
        self,
        rules: Mapping[str, str],
        labels: Mapping[str, str] | None = None,
    ) -> list[CompiledCheck]:
        """Parse and resolve every rule, in declaration order.

        Raises:
            RuleSyntaxError: A rule string is malformed
            UnknownRuleError: A rule has no built-in or callback
            RuleConfigurationError: A parameterized built-in has no parameter
        """
        labels = labels or {}
        compiled: list[CompiledCheck] = []

        for field_name, rule_string in rules.items():
            label = labels.get(field_name) or field_name
            for invocation in parse_rules(rule_string):
                check = self.checks.resolve(invocation.name)
                builtin = self.checks.is_builtin(invocation.name)
                if (
                    builtin
                    and RuleName(invocation.name).takes_parameter
                    and not invocation.parameter
                ):
                    raise RuleConfigurationError(
                        invocation.name,
                        f"a parameter is required (e.g. '{invocation.name}:5') "
                        f"on field '{field_name}'",
                    )
                compiled.append(
                    CompiledCheck(
                        field=field_name,
                        label=label,
                        invocation=invocation,
                        check=check,
                        builtin=builtin,
                    )
                )

        return compiled

    def collect(self, request: ValidationRequest | Mapping[str, Any]) -> list[ErrorRecord]:
        """Run the request's rules and return the failures as ErrorRecords."""
        if not isinstance(request, ValidationRequest):
            request = ValidationRequest.from_dict(request)

        compiled = self.compile(request.rules, request.labels)
        records: list[ErrorRecord] = []

        for item in compiled:
            value = request.data.get(item.field)
            message = self._template_for(item.invocation.name, request)
            result = self._invoke(item, value, message)
            record = self._to_record(item, result, message)
            logger.debug(
                "Rule '%s' on field '%s': %s",
                item.invocation,
                item.field,
                "pass" if record is None else "fail",
            )
            if record is not None:
                records.append(record)

        logger.debug(
            "Validated %d field(s) with %d rule(s): %d failure(s)",
            len(request.rules),
            len(compiled),
            len(records),
        )
        return records

    def make(self, request: ValidationRequest | Mapping[str, Any]) -> list[RenderedError]:
        """Validate a request and return its failures in declaration order.

        Returns:
            Message strings in simple mode, ``{error, field, message}`` dicts
            in extended mode. Empty when every rule passes.
        """
        return [self.render(record) for record in self.collect(request)]

    def render(self, record: ErrorRecord) -> RenderedError:
        if self.extended:
            return record.to_dict()
        return record.message

    def _template_for(self, rule_name: str, request: ValidationRequest) -> str | None:
        """Per-request override, then the instance catalog."""
        return request.messages.get(rule_name) or self.catalog.get(rule_name)

    def _invoke(self, item: CompiledCheck, value: Any, message: str | None) -> CheckResult:
        if item.passes_parameter:
            return item.check(value, item.invocation.parameter, item.label, message)
        return item.check(value, item.label, message)

    def _to_record(
        self,
        item: CompiledCheck,
        result: CheckResult,
        message: str | None,
    ) -> ErrorRecord | None:
        """Normalize a check's return value to an ErrorRecord or None."""
        if result is None:
            return None
        if isinstance(result, ErrorRecord):
            return result.for_field(item.field)
        if isinstance(result, str):
            return ErrorRecord(
                rule=item.invocation.name,
                field=item.field,
                label=item.label,
                message=result or render_message(
                    message or FALLBACK_TEMPLATE, item.label, item.invocation.parameter
                ),
                parameter=item.invocation.parameter,
            )
        raise RuleConfigurationError(
            item.invocation.name,
            f"check returned {type(result).__name__}; expected None, str or ErrorRecord",
        )


def validate(request: ValidationRequest | Mapping[str, Any]) -> list[RenderedError]:
    """Validate a request with a Validator built for it.

    Accepts either a ValidationRequest or its wire-shaped dict.
    """
    if not isinstance(request, ValidationRequest):
        request = ValidationRequest.from_dict(request)
    return Validator.from_request(request).make(request)
