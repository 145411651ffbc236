"""Tests for regform.touched — touched flags and error visibility."""

from regform.fields import FIELD_NAMES
from regform.touched import TouchedTracker, visible_errors


class TestTouchedTracker:
    def test_starts_untouched(self) -> None:
        tracker = TouchedTracker(FIELD_NAMES)
        assert dict(tracker.as_mapping()) == dict.fromkeys(FIELD_NAMES, False)

    def test_mark_reports_first_touch_only(self) -> None:
        tracker = TouchedTracker(FIELD_NAMES)
        assert tracker.mark("username") is True
        assert tracker.mark("username") is False
        assert tracker.is_touched("username")

    def test_mark_leaves_other_fields(self) -> None:
        tracker = TouchedTracker(FIELD_NAMES)
        tracker.mark("favFood")
        assert not tracker.is_touched("username")

    def test_reset_clears_all(self) -> None:
        tracker = TouchedTracker(FIELD_NAMES)
        for name in FIELD_NAMES:
            tracker.mark(name)
        tracker.reset()
        assert not any(tracker.as_mapping().values())

    def test_mapping_is_a_copy(self) -> None:
        tracker = TouchedTracker(FIELD_NAMES)
        before = tracker.as_mapping()
        tracker.mark("username")
        assert before["username"] is False


class TestVisibleErrors:
    def test_untouched_errors_hidden(self) -> None:
        touched = dict.fromkeys(FIELD_NAMES, False)
        assert visible_errors(touched, {"username": "Username is required"}) == {}

    def test_touched_error_shown(self) -> None:
        touched = {**dict.fromkeys(FIELD_NAMES, False), "username": True}
        errors = {"username": "Username is required", "favFood": "Favorite food is required"}
        assert visible_errors(touched, errors) == {"username": "Username is required"}

    def test_touched_without_error(self) -> None:
        touched = dict.fromkeys(FIELD_NAMES, True)
        assert visible_errors(touched, {}) == {}
