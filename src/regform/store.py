"""Form state store — the single source of truth for one form instance.

Holds field values, the latest validation outcome, touched flags, and the
submission status. Readers take a ``FormSnapshot``: one immutable,
consistent view of all of it. Every mutation goes through the store.

Components:

- ``FormSnapshot``: Immutable view handed to presenters and controllers.
- ``FormChange``: Emitted to subscribers whenever field values change.
- ``FormStore``: The store itself.

Ordering:
    Every value change (and every reset) takes a new snapshot version.
    A validation result is applied only if it was computed for the
    current version; results for older versions are discarded, however
    late they arrive. This is what keeps a slow pass for stale data from
    overwriting the outcome for newer data.

Concurrency:
    One store per form, used from a single event loop. Listeners are
    called synchronously, in subscription order, before the mutating
    call returns.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from regform.fields import DEFAULTS, check_field, check_value
from regform.status import IDLE, Pending, SubmissionStatus
from regform.touched import TouchedTracker, visible_errors
from regform.validation import FieldValue, ValidationResult

logger = logging.getLogger("regform.store")

_NO_ERRORS: Mapping[str, str] = MappingProxyType({})


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FormSnapshot:
    """Everything a presenter needs to draw the form, at one version.

    Attributes:
        data: Current field values.
        errors: Field → message from the most recently applied
            validation pass (not filtered by touched).
        touched: Field → whether the user has interacted with it.
        is_valid: True iff the most recently applied pass had no errors.
            False before the first pass resolves.
        status: Submission lifecycle state.
        version: Snapshot version of ``data``.
        validated_version: Version the applied errors were computed for,
            or ``-1`` before the first pass.
    """

    data: Mapping[str, FieldValue]
    errors: Mapping[str, str]
    touched: Mapping[str, bool]
    is_valid: bool
    status: SubmissionStatus
    version: int
    validated_version: int = -1

    @property
    def is_settled(self) -> bool:
        """True when the errors describe the current ``data``."""
        return self.validated_version == self.version

    @property
    def visible_errors(self) -> dict[str, str]:
        """Errors for touched fields only."""
        return visible_errors(self.touched, self.errors)

    def visible_error(self, field: str) -> str | None:
        """The message to show under *field*, or None."""
        if not self.touched.get(field, False):
            return None
        return self.errors.get(field)

    @property
    def can_submit(self) -> bool:
        """Whether the submit affordance should be enabled."""
        return self.is_valid and not isinstance(self.status, Pending)


@dataclass(frozen=True, slots=True)
class FormChange:
    """Emitted after field values change.

    Attributes:
        version: The new snapshot version.
        data: The field values at that version.
        changed_fields: Fields whose values changed (all fields on reset).
    """

    version: int
    data: Mapping[str, FieldValue]
    changed_fields: frozenset[str]


type ChangeListener = Callable[[FormChange], None]


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class FormStore:
    """Mutable form state with version-checked validation results.

    Usage::

        store = FormStore()
        unsubscribe = store.subscribe(on_change)
        store.set_field_value("username", "alice")   # on_change(FormChange(version=1, ...))
        store.apply_validation_result(1, result)      # applied
        store.apply_validation_result(0, old_result)  # stale, discarded
    """

    __slots__ = (
        "_data",
        "_errors",
        "_is_valid",
        "_listeners",
        "_snapshot",
        "_status",
        "_touched",
        "_validated_version",
        "_version",
    )

    def __init__(self) -> None:
        self._data: dict[str, FieldValue] = dict(DEFAULTS)
        self._errors: Mapping[str, str] = _NO_ERRORS
        self._is_valid = False
        self._touched = TouchedTracker(DEFAULTS)
        self._status: SubmissionStatus = IDLE
        self._version = 0
        self._validated_version = -1
        self._listeners: list[ChangeListener] = []
        self._snapshot: FormSnapshot | None = None

    # -- Reading --

    @property
    def snapshot(self) -> FormSnapshot:
        """The current state as one immutable snapshot."""
        if self._snapshot is None:
            self._snapshot = FormSnapshot(
                data=MappingProxyType(dict(self._data)),
                errors=self._errors,
                touched=self._touched.as_mapping(),
                is_valid=self._is_valid,
                status=self._status,
                version=self._version,
                validated_version=self._validated_version,
            )
        return self._snapshot

    @property
    def version(self) -> int:
        return self._version

    # -- Subscriptions --

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Call *listener* after every value change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, changed_fields: frozenset[str]) -> None:
        event = FormChange(
            version=self._version,
            data=MappingProxyType(dict(self._data)),
            changed_fields=changed_fields,
        )
        for listener in list(self._listeners):
            listener(event)

    # -- Mutations --

    def set_field_value(self, field: str, value: FieldValue) -> None:
        """Store a new value for *field*, mark it touched, and notify subscribers.

        Raises:
            UnknownFieldError: *field* is not part of the form.
            FieldTypeError: *value* has the wrong type for *field*.
        """
        value = check_value(field, value)
        self._data[field] = value
        self._touched.mark(field)
        self._version += 1
        self._snapshot = None
        logger.debug("set %s (version %d)", field, self._version)
        self._emit(frozenset({field}))

    def mark_touched(self, field: str) -> None:
        """Mark *field* touched (the user left it). Idempotent."""
        check_field(field)
        if self._touched.mark(field):
            self._snapshot = None

    def apply_validation_result(self, version: int, result: ValidationResult) -> bool:
        """Apply *result* if it was computed for the current version.

        Returns True if applied, False if discarded as stale.
        """
        if version != self._version:
            logger.debug(
                "discarding stale validation result for version %d (current %d)",
                version,
                self._version,
            )
            return False
        self._errors = MappingProxyType(dict(result.errors))
        self._is_valid = result.is_valid
        self._validated_version = version
        self._snapshot = None
        return True

    def set_status(self, status: SubmissionStatus) -> None:
        """Record a submission lifecycle transition."""
        if status != self._status:
            logger.debug("submission status %r -> %r", self._status, status)
            self._status = status
            self._snapshot = None

    def reset(self) -> None:
        """Restore initial values, clear touched flags and errors.

        Takes a new version, so in-flight validation of the old values
        becomes stale, and notifies subscribers so the empty form is
        validated again. The submission status is left alone.
        """
        self._data = dict(DEFAULTS)
        self._touched.reset()
        self._errors = _NO_ERRORS
        self._is_valid = False
        self._version += 1
        self._snapshot = None
        logger.debug("reset (version %d)", self._version)
        self._emit(frozenset(DEFAULTS))
