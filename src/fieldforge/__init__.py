"""fieldforge - declarative field validation from compact rule strings."""

from fieldforge.validation import (
    ErrorMode,
    ErrorRecord,
    RuleError,
    ValidationRequest,
    Validator,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "ErrorMode",
    "ErrorRecord",
    "RuleError",
    "ValidationRequest",
    "Validator",
    "validate",
    "__version__",
]
