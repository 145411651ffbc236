"""Regform — a registration form core with race-free async validation.

Keeps four fields (username, favorite language, favorite food,
agreement) validated as the user types, shows errors only for fields the
user has touched, and submits the form as JSON once it is valid.

Basic usage::

    from regform import RegistrationForm

    async with RegistrationForm() as form:
        form.set_field_value("username", "alice")
        form.set_field_value("favLanguage", "rust")
        form.set_field_value("favFood", "pizza")
        form.set_field_value("agreement", True)
        status = await form.submit()
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Failed",
    "FieldTypeError",
    "FormConfig",
    "FormSnapshot",
    "FormStore",
    "Idle",
    "Pending",
    "RegformError",
    "RegistrationForm",
    "Succeeded",
    "TransportError",
    "UnknownFieldError",
    "ValidationResult",
    "validate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import regform`` fast (httpx is only loaded when needed).
    """
    if name == "RegistrationForm":
        from regform.form import RegistrationForm

        return RegistrationForm

    if name == "FormConfig":
        from regform.config import FormConfig

        return FormConfig

    if name in ("FormSnapshot", "FormStore"):
        from regform import store as _store

        return getattr(_store, name)

    if name in ("Idle", "Pending", "Succeeded", "Failed"):
        from regform import status as _status

        return getattr(_status, name)

    if name in ("ValidationResult", "validate"):
        from regform import validation as _validation

        return getattr(_validation, name)

    if name in (
        "ConfigurationError",
        "FieldTypeError",
        "RegformError",
        "TransportError",
        "UnknownFieldError",
    ):
        from regform import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
