"""Validation result — immutable outcome of one validation pass."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from regform.validation.rules import FieldValue

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating form data against a rule set.

    ``Valid`` when ``errors`` is empty, ``Invalid(errors)`` otherwise.
    The result is falsy when invalid, so you can write::

        result = validate(data, rules)
        if not result:
            show(result.errors)

    ``data`` contains the values of the fields that passed.

    ``errors`` maps each failing field to the message of the first rule
    it violated::

        {"username": "Username must be at least 3 characters"}
    """

    data: Mapping[str, FieldValue] = field(default=_EMPTY)
    errors: Mapping[str, str] = field(default=_EMPTY)

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
