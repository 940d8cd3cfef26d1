"""Error types for run condition evaluation.

Evaluators return booleans for expected outcomes (a missing file is a
plain ``False``). These errors are for misconfiguration only:
- Form validators: return ValidationError values, never raise
- Evaluators: raise ConfigurationError when a setting slipped through
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ValidationError:
    """Validation error with field, error message, and value.

    Attributes:
        field: The field name that failed validation.
        error: Description of the validation error.
        value: The value that failed validation.
    """

    field: str
    error: str
    value: Any

    def __str__(self) -> str:
        return f"ValidationError: {self.field} - {self.error} (got {self.value!r})"


class ConditionError(Exception):
    """Base exception for run condition failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(ConditionError):
    """Configuration error (malformed length, unknown operator, etc).

    Raised when a condition is evaluated with settings that configuration-time
    validation should have rejected.

    Attributes:
        message: Description of the error.
        field: Optional field name that failed.
        value: Optional offending value.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.field = field
        self.value = value

    @classmethod
    def from_validation(cls, error: ValidationError) -> "ConfigurationError":
        """Promote a validator result to a raised error."""
        return cls(error.error, field=error.field, value=error.value)
