"""YAML ruleset files: rules, labels and messages kept outside the code."""

from fieldforge.rulesets.loader import (
    Ruleset,
    RulesetError,
    RulesetIssue,
    check_ruleset_file,
    load_data_file,
    load_ruleset,
)

__all__ = [
    "Ruleset",
    "RulesetError",
    "RulesetIssue",
    "check_ruleset_file",
    "load_data_file",
    "load_ruleset",
]
