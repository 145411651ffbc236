"""Form validation — composable rules, exhaustive results.

Usage::

    from regform.validation import validate, required, min_length, one_of

    result = validate(data, {
        "username": [required("Username is required"), min_length(3)],
        "favFood": [required(), one_of("pizza", "spaghetti")],
    })
    if not result:
        # result.errors == {"username": "Must be at least 3 characters"}
        ...

Every field's rule chain runs, whatever happens to the other fields.
Within one field the chain stops at the first failing rule.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from types import MappingProxyType

from regform.validation.result import ValidationResult
from regform.validation.rules import (
    FieldValue,
    Validator,
    accepted,
    max_length,
    min_length,
    one_of,
    required,
)

__all__ = [
    "FieldValue",
    "ValidationEngine",
    "ValidationResult",
    "Validator",
    "accepted",
    "make_engine",
    "max_length",
    "min_length",
    "one_of",
    "required",
    "validate",
    "validate_async",
]

type RuleSet = Mapping[str, Sequence[Validator]]

# Asynchronous validation boundary used by the revalidation controller
type ValidationEngine = Callable[[Mapping[str, FieldValue]], Awaitable[ValidationResult]]


def validate(
    data: Mapping[str, FieldValue],
    rules: RuleSet,
) -> ValidationResult:
    """Validate data against a set of rules.

    Args:
        data: Mapping of field names to values. Missing fields are
            validated as the empty string.
        rules: Mapping of field names to ordered validators. Each
            validator returns an error message on failure, or ``None``.

    Returns:
        A ``ValidationResult`` with ``.data`` (values of passing fields)
        and ``.errors`` (field → first violated message).
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, FieldValue] = {}

    for field_name, validators in rules.items():
        value = data.get(field_name, "")

        for validator in validators:
            error = validator(value)
            if error is not None:
                errors[field_name] = error
                break
        else:
            cleaned[field_name] = value

    return ValidationResult(data=MappingProxyType(cleaned), errors=MappingProxyType(errors))


async def validate_async(
    data: Mapping[str, FieldValue],
    rules: RuleSet,
) -> ValidationResult:
    """Validate on the next event-loop turn.

    The rules are pure, but callers treat validation as a suspension
    point: the result is delivered after the current event finishes.
    """
    snapshot = dict(data)
    await asyncio.sleep(0)
    return validate(snapshot, rules)


def make_engine(rules: RuleSet) -> ValidationEngine:
    """Bind a rule set into a ``ValidationEngine``."""

    async def engine(data: Mapping[str, FieldValue]) -> ValidationResult:
        return await validate_async(data, rules)

    return engine
