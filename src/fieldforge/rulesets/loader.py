"""
rulesets/loader.py - YAML ruleset files for fieldforge.

A ruleset file stores the static half of a validation request::

    rules:
      email: required|validEmail
      age: natural|maxNumber:130
    labels:
      email: E-mail address
    messages:
      required: "Please fill in #fieldLabel#."
    errors: extended

Files are checked in two passes: JSON Schema validation of the document
shape, then a semantic pass that parses every rule string against the
built-in rules. Unknown rule names are only warnings, since a caller may
register callbacks for them.

Usage:
    from fieldforge.rulesets import load_ruleset

    ruleset = load_ruleset(Path("signup.yaml"))
    errors = validate(ruleset.request_for({"email": "x@example.com"}))
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from fieldforge.validation.errors import RuleError
from fieldforge.validation.parser import parse_rules
from fieldforge.validation.registry import CheckTable
from fieldforge.validation.types import CheckFn, ErrorMode, RuleName, ValidationRequest

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "ruleset.schema.json"


@dataclass
class RulesetIssue:
    """A single finding for a ruleset file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "rules/email"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


class RulesetError(Exception):
    """A ruleset file could not be loaded."""

    def __init__(self, file: Path, issues: list[RulesetIssue]):
        self.file = file
        self.issues = issues
        details = "; ".join(issue.message for issue in issues)
        super().__init__(f"Invalid ruleset {file}: {details}")


@dataclass
class Ruleset:
    """Rules, labels and messages loaded from a ruleset file."""

    rules: dict[str, str]
    labels: dict[str, str] = field(default_factory=dict)
    messages: dict[str, str] = field(default_factory=dict)
    error_mode: ErrorMode = ErrorMode.SIMPLE
    source: Path | None = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any], source: Path | None = None) -> Ruleset:
        return cls(
            rules=dict(doc.get("rules") or {}),
            labels=dict(doc.get("labels") or {}),
            messages=dict(doc.get("messages") or {}),
            error_mode=ErrorMode.from_flag(doc.get("errors")),
            source=source,
        )

    def request_for(
        self,
        data: Mapping[str, Any],
        *,
        callbacks: Mapping[str, CheckFn] | None = None,
        error_mode: ErrorMode | None = None,
    ) -> ValidationRequest:
        """Build a request validating ``data`` against this ruleset."""
        return ValidationRequest(
            data=data,
            rules=self.rules,
            messages=self.messages,
            labels=self.labels,
            callbacks=callbacks or {},
            error_mode=error_mode or self.error_mode,
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    return "/".join(str(p) for p in error.absolute_path)


def _read_document(path: Path) -> tuple[Any, list[RulesetIssue]]:
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        return None, [RulesetIssue(file=path, message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return None, [RulesetIssue(file=path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return None, [
            RulesetIssue(file=path, message="File is empty or contains only whitespace")
        ]
    return raw, []


def _semantic_issues(path: Path, doc: Mapping[str, Any]) -> list[RulesetIssue]:
    """Parse each rule string and check it against the built-in rules."""
    issues: list[RulesetIssue] = []
    builtins = CheckTable.builtins()

    for field_name, rule_string in doc.get("rules", {}).items():
        location = f"rules/{field_name}"
        try:
            invocations = parse_rules(rule_string)
        except RuleError as exc:
            issues.append(RulesetIssue(file=path, message=str(exc), path=location))
            continue

        for invocation in invocations:
            if invocation.name not in builtins:
                issues.append(
                    RulesetIssue(
                        file=path,
                        message=f"Rule '{invocation.name}' is not built in; "
                        "a callback must be registered for it",
                        path=location,
                        severity="warning",
                    )
                )
            elif RuleName(invocation.name).takes_parameter and not invocation.parameter:
                issues.append(
                    RulesetIssue(
                        file=path,
                        message=f"Rule '{invocation.name}' requires a parameter",
                        path=location,
                    )
                )

    for field_name in doc.get("labels", {}):
        if field_name not in doc.get("rules", {}):
            issues.append(
                RulesetIssue(
                    file=path,
                    message=f"Label for '{field_name}' has no rules",
                    path=f"labels/{field_name}",
                    severity="warning",
                )
            )

    return issues


def _check_document(path: Path) -> tuple[Any, list[RulesetIssue]]:
    """Read a ruleset once and return the parsed document with its issues."""
    raw, issues = _read_document(path)
    if issues:
        return raw, issues

    validator = Draft202012Validator(_load_schema())
    for error in sorted(validator.iter_errors(raw), key=lambda e: list(e.path)):
        issues.append(
            RulesetIssue(file=path, message=error.message, path=_json_path(error))
        )
    if issues:
        return raw, issues

    return raw, _semantic_issues(path, raw)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def check_ruleset_file(path: Path) -> list[RulesetIssue]:
    """
    Validate a ruleset YAML file.

    Args:
        path: Path to the ruleset file.

    Returns:
        A list of :class:`RulesetIssue` objects (empty on success).
        Semantic checks only run when the document matches the schema.
    """
    _, issues = _check_document(path)
    return issues


def load_ruleset(path: Path) -> Ruleset:
    """
    Load and validate a ruleset file.

    Warnings are logged; errors raise.

    Raises:
        RulesetError: If the file is unreadable, malformed or invalid.
    """
    doc, issues = _check_document(path)
    errors = [i for i in issues if i.severity == "error"]
    if errors:
        raise RulesetError(path, errors)

    for issue in issues:
        logger.warning("%s", issue)

    ruleset = Ruleset.from_dict(doc, source=path)
    logger.debug("Loaded ruleset %s with %d field(s)", path, len(ruleset.rules))
    return ruleset


def load_data_file(path: Path) -> dict[str, Any]:
    """
    Load field values from a JSON or YAML file.

    Raises:
        RulesetError: If the file does not contain a mapping.
    """
    raw, issues = _read_document(path)
    if issues:
        raise RulesetError(path, issues)
    if not isinstance(raw, dict):
        raise RulesetError(
            path,
            [RulesetIssue(file=path, message="Data file must contain a mapping of field values")],
        )
    return raw
