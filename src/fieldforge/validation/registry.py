"""Check dispatch table for fieldforge.

A CheckTable maps rule names to check functions. It is built once per
Validator from the built-in checks plus the caller's callbacks and is
read-only afterwards.
"""

import logging
from types import MappingProxyType
from typing import Iterator, Mapping

from fieldforge.validation.errors import UnknownRuleError
from fieldforge.validation.types import CheckFn, RuleName
from fieldforge.validation.validators.builtin import BUILTIN_CHECKS

logger = logging.getLogger(__name__)

_BUILTIN_NAMES = frozenset(rule.value for rule in RuleName)


class CheckTable(Mapping[str, CheckFn]):
    """Read-only mapping of rule name to check function.

    Example:
        table = CheckTable.with_overrides({"postcode": check_postcode})
        check = table.resolve("postcode")
    """

    def __init__(
        self,
        checks: Mapping[str, CheckFn],
        overridden: frozenset[str] = frozenset(),
    ):
        self._checks = MappingProxyType(dict(checks))
        self._overridden = overridden

    @classmethod
    def builtins(cls) -> "CheckTable":
        """Table containing only the built-in checks."""
        return cls({rule.value: check for rule, check in BUILTIN_CHECKS.items()})

    @classmethod
    def with_overrides(cls, callbacks: Mapping[str, CheckFn] | None = None) -> "CheckTable":
        """Built-ins, with callbacks replacing or adding rules.

        Raises:
            TypeError: If a callback is not callable
        """
        checks: dict[str, CheckFn] = {
            rule.value: check for rule, check in BUILTIN_CHECKS.items()
        }
        overridden = set()
        for name, callback in (callbacks or {}).items():
            if not callable(callback):
                raise TypeError(f"Callback for rule '{name}' is not callable")
            if name in checks:
                logger.warning("Callback replaces built-in rule '%s'", name)
            checks[name] = callback
            overridden.add(name)
        return cls(checks, frozenset(overridden))

    def resolve(self, name: str) -> CheckFn:
        """Get the check registered for ``name``.

        Raises:
            UnknownRuleError: If the name has no check
        """
        try:
            return self._checks[name]
        except KeyError:
            raise UnknownRuleError(name, self._checks.keys()) from None

    def is_builtin(self, name: str) -> bool:
        """True if ``name`` resolves to an unmodified built-in check."""
        return name in _BUILTIN_NAMES and name not in self._overridden

    def names(self) -> list[str]:
        return sorted(self._checks)

    def __getitem__(self, name: str) -> CheckFn:
        return self._checks[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._checks)

    def __len__(self) -> int:
        return len(self._checks)
