"""Rule-string parser.

Grammar::

    rules      := invocation ("|" invocation)*
    invocation := name [":" parameter]

Parsing is purely syntactic. Whether a name is known, and whether it needs
a parameter, is decided at dispatch time by the validator.
"""

from fieldforge.validation.errors import RuleSyntaxError
from fieldforge.validation.types import RuleInvocation

RULE_SEPARATOR = "|"
PARAMETER_SEPARATOR = ":"


def parse_invocation(token: str, rule_string: str | None = None) -> RuleInvocation:
    """Parse a single ``name[:parameter]`` token.

    Only the first ``:`` separates name from parameter, so parameters may
    themselves contain colons.
    """
    token = token.strip()
    if not token:
        raise RuleSyntaxError(rule_string if rule_string is not None else token, "empty rule")

    if PARAMETER_SEPARATOR not in token:
        return RuleInvocation(name=token)

    name, _, parameter = token.partition(PARAMETER_SEPARATOR)
    name = name.strip()
    if not name:
        raise RuleSyntaxError(
            rule_string if rule_string is not None else token,
            f"missing rule name before '{PARAMETER_SEPARATOR}{parameter}'",
        )
    return RuleInvocation(name=name, parameter=parameter.strip())


def parse_rules(rule_string: str) -> tuple[RuleInvocation, ...]:
    """Split a field's rule string into ordered invocations.

    Example:
        >>> parse_rules("required|minLength:5|str")
        (RuleInvocation(name='required', parameter=None),
         RuleInvocation(name='minLength', parameter='5'),
         RuleInvocation(name='str', parameter=None))

    A blank rule string yields no invocations.

    Raises:
        RuleSyntaxError: If the string is not a str, or contains an empty token
    """
    if not isinstance(rule_string, str):
        raise RuleSyntaxError(repr(rule_string), "rule string must be a str")
    if not rule_string.strip():
        return ()

    return tuple(
        parse_invocation(token, rule_string)
        for token in rule_string.split(RULE_SEPARATOR)
    )
