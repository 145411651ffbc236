"""Built-in validation rules for regform fields.

Every rule is built by a factory that takes the failure message::

    def min_length(n: int, message: str | None = None) -> Validator:
        def check(value: FieldValue) -> str | None:
            if len(value) < n:
                return message or f"Must be at least {n} characters"
            return None
        return check

A validator returns an error message on failure, or ``None`` on success.
Custom validators follow the same protocol — any callable matching
``(FieldValue) -> str | None`` works with ``validate()``.
"""

from collections.abc import Callable

# Text fields carry ``str``; the agreement checkbox carries ``bool``
type FieldValue = str | bool

# Type alias for a validator function
type Validator = Callable[[FieldValue], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str | None = None) -> Validator:
    """Field must be present: a non-empty string, or ``True``."""

    def check(value: FieldValue) -> str | None:
        if value is None or value is False or value == "":
            return message or "This field is required"
        return None

    return check


def accepted(message: str | None = None) -> Validator:
    """Boolean field must be exactly ``True`` (a ticked checkbox)."""

    def check(value: FieldValue) -> str | None:
        if value is not True:
            return message or "Must be accepted"
        return None

    return check


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int, message: str | None = None) -> Validator:
    """String must be at most *n* characters."""

    def check(value: FieldValue) -> str | None:
        if len(str(value)) > n:
            return message or f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int, message: str | None = None) -> Validator:
    """String must be at least *n* characters."""

    def check(value: FieldValue) -> str | None:
        if len(str(value)) < n:
            return message or f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str, message: str | None = None) -> Validator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: FieldValue) -> str | None:
        if value not in allowed:
            options = ", ".join(sorted(allowed))
            return message or f"Must be one of: {options}"
        return None

    return check
