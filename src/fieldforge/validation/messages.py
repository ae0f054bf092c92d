"""Message catalog and placeholder templating.

Supported placeholders:
- #fieldLabel# - the field's display label (or its name)
- #fieldSize#  - the rule parameter, for parameterized rules

Every occurrence of a placeholder is replaced, not only the first one.
"""

from types import MappingProxyType
from typing import Mapping

from fieldforge.validation.types import RuleName

LABEL_PLACEHOLDER = "#fieldLabel#"
SIZE_PLACEHOLDER = "#fieldSize#"

MESSAGE_CATALOG: Mapping[str, str] = MappingProxyType(
    {
        RuleName.REQUIRED.value: "The #fieldLabel# is required!",
        RuleName.NATURAL.value: "The #fieldLabel# must be a natural integer!",
        RuleName.NATURAL_POSITIVE.value: "The #fieldLabel# must be a positive integer!",
        RuleName.NUMERIC.value: "The #fieldLabel# must be a number!",
        RuleName.MIN_NUMBER.value: "The #fieldLabel# must be minimum #fieldSize#!",
        RuleName.MAX_NUMBER.value: "The #fieldLabel# must be maximum #fieldSize#!",
        RuleName.STR.value: "The #fieldLabel# must be a string!",
        RuleName.MIN_LENGTH.value: "The #fieldLabel# must be at least #fieldSize# characters!",
        RuleName.MAX_LENGTH.value: "The #fieldLabel# must be maximum #fieldSize# characters!",
        RuleName.VALID_EMAIL.value: "The #fieldLabel# must be a valid email!",
    }
)

# Used for caller-registered rules that have neither a catalog entry nor an
# override and whose callback only signals failure.
FALLBACK_TEMPLATE = "The #fieldLabel# is invalid!"


def render_message(template: str, label: str, size: object | None = None) -> str:
    """Substitute placeholders in a message template.

    Args:
        template: Template containing #fieldLabel# / #fieldSize# tokens
        label: Display label for #fieldLabel#
        size: Rule parameter for #fieldSize#; the token is left as-is when None

    Returns:
        The rendered message
    """
    message = template.replace(LABEL_PLACEHOLDER, label)
    if size is not None:
        message = message.replace(SIZE_PLACEHOLDER, str(size))
    return message


def merge_catalog(overrides: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Return a read-only catalog with per-call overrides applied.

    Empty override templates are ignored and the default is kept.
    """
    merged = dict(MESSAGE_CATALOG)
    for rule_name, template in (overrides or {}).items():
        if template:
            merged[rule_name] = template
    return MappingProxyType(merged)


def default_template(rule_name: str) -> str:
    return MESSAGE_CATALOG.get(rule_name, FALLBACK_TEMPLATE)
