"""Touched tracking — has the user interacted with a field yet?

A field becomes touched on its first value change or the first time the
user leaves it, and stays touched until the form is reset. Errors are
only shown for touched fields, so a fresh form never greets the user
with a wall of "required" messages.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType


class TouchedTracker:
    """Per-field touched flags, monotonic between resets."""

    __slots__ = ("_touched",)

    def __init__(self, fields: Iterable[str]) -> None:
        self._touched: dict[str, bool] = dict.fromkeys(fields, False)

    def mark(self, field: str) -> bool:
        """Mark *field* touched. Returns True if it was not touched before."""
        if self._touched[field]:
            return False
        self._touched[field] = True
        return True

    def is_touched(self, field: str) -> bool:
        return self._touched[field]

    def reset(self) -> None:
        """Clear every flag."""
        for field in self._touched:
            self._touched[field] = False

    def as_mapping(self) -> Mapping[str, bool]:
        """Read-only copy of the current flags."""
        return MappingProxyType(dict(self._touched))


def visible_errors(
    touched: Mapping[str, bool],
    errors: Mapping[str, str],
) -> dict[str, str]:
    """Errors the user should see: failing fields that are also touched."""
    return {field: message for field, message in errors.items() if touched.get(field, False)}
