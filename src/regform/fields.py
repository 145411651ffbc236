"""Form fields — names, defaults, value types, and the wire payload."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from regform.errors import FieldTypeError, UnknownFieldError
from regform.validation import FieldValue

# Field name -> initial value. Names double as the JSON payload keys.
DEFAULTS: Mapping[str, FieldValue] = MappingProxyType({
    "username": "",
    "favLanguage": "",
    "favFood": "",
    "agreement": False,
})

FIELD_NAMES: tuple[str, ...] = tuple(DEFAULTS)


def check_field(field: str) -> None:
    """Raise ``UnknownFieldError`` unless *field* belongs to the form."""
    if field not in DEFAULTS:
        raise UnknownFieldError(field)


def check_value(field: str, value: object) -> FieldValue:
    """Return *value* if its type matches the field's default, else raise."""
    check_field(field)
    expected = type(DEFAULTS[field])
    if type(value) is not expected:
        raise FieldTypeError(field, expected, value)
    return value  # type: ignore[return-value]


def to_payload(data: Mapping[str, FieldValue]) -> dict[str, Any]:
    """Serialize form data as the registration request body.

    Always exactly the four form fields, in declaration order.
    """
    return {name: data.get(name, DEFAULTS[name]) for name in FIELD_NAMES}
