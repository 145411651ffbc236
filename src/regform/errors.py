"""Regform exception hierarchy.

Field validation failures are values (``ValidationResult.errors``), never
exceptions. These types cover misuse of the form API, bad configuration,
and transport failures.
"""

from dataclasses import dataclass


class RegformError(Exception):
    """Base for all regform-specific errors."""


class ConfigurationError(RegformError):
    """Raised when ``FormConfig`` values are invalid."""


class UnknownFieldError(RegformError):
    """Raised when a field name is not part of the form."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown form field: {field!r}")


class FieldTypeError(RegformError):
    """Raised when a value has the wrong type for its field."""

    def __init__(self, field: str, expected: type, value: object) -> None:
        self.field = field
        self.expected = expected
        self.value = value
        super().__init__(
            f"Field {field!r} expects {expected.__name__}, got {type(value).__name__}"
        )


@dataclass(frozen=True, slots=True)
class TransportError(RegformError):
    """No usable response was obtained from the registration endpoint.

    Covers connection failures, timeouts, and bodies that are not JSON.
    """

    detail: str = ""

    def __str__(self) -> str:
        return self.detail or "transport failure"
