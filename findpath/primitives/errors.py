"""Error types for findpath.

Checkers return outcomes instead of raising for candidates that fail
validation. These errors are for exceptional cases only:
- Configuration: the search spec itself is unusable (bad field, bad YAML)
- Internal: an invariant of the resolver was broken (a bug, not user input)
"""

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass
class ValidationError:
    """Validation error with field, error message, and value.

    Attributes:
        field: Dotted location of the field that failed validation.
        error: Description of the validation error.
        value: The value that failed validation.
    """

    field: str
    error: str
    value: Any

    def __str__(self) -> str:
        return f"ValidationError: {self.field} - {self.error} (got {self.value!r})"


class FindPathError(Exception):
    """Base exception for path resolution failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(FindPathError):
    """Search spec is missing a field, has an invalid value, or can't be read.

    Raised before any candidate is probed.

    Attributes:
        message: Description of the error.
        field: Optional field name that failed.
        errors: Individual validation problems, if known.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[List[ValidationError]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.field = field
        self.errors = list(errors or [])


class InternalError(FindPathError):
    """An internal invariant was violated.

    Always a bug in findpath, never a problem with the user's search spec.
    """
