from __future__ import annotations

from datetime import time

import pytest

from calm_calendar.domain import EventForm, ToastStatus
from calm_calendar.services.validation import (
    INVALID_DATE,
    INVALID_TIME_RANGE,
    REQUIRED_FIELDS_MISSING,
    FormValidator,
    form_time_errors,
)
from calm_calendar.utils.time_validation import END_TIME_ERROR, START_TIME_ERROR, TimeErrors, time_error_messages


class TestTimeErrorMessages:
    def test_valid_range(self):
        assert time_error_messages("09:00", "10:00") == TimeErrors()

    def test_start_after_end(self):
        errors = time_error_messages("10:00", "09:00")
        assert errors.start_time_error == START_TIME_ERROR
        assert errors.end_time_error == END_TIME_ERROR

    def test_equal_times_are_invalid(self):
        assert time_error_messages("10:00", "10:00").has_errors

    @pytest.mark.parametrize(("start", "end"), [("", "10:00"), ("09:00", ""), ("", ""), (None, "10:00")])
    def test_empty_input_skips_comparison(self, start, end):
        assert not time_error_messages(start, end).has_errors

    def test_accepts_time_objects(self):
        assert time_error_messages(time(9), time(8)).has_errors


def _form(**overrides) -> EventForm:
    values = dict(title="회의", date="2024-10-15", start_time="09:00", end_time="10:00")
    values.update(overrides)
    return EventForm(**values)


class TestFormValidator:
    @pytest.fixture
    def validator(self, toasts):
        return FormValidator(toasts.append)

    def test_accepts_complete_form(self, validator, toasts):
        assert validator.validate(_form())
        assert toasts == []

    @pytest.mark.parametrize("field", ["title", "date", "start_time", "end_time"])
    def test_required_fields(self, validator, toasts, field):
        assert not validator.validate(_form(**{field: ""}))
        assert [toast.title for toast in toasts] == [REQUIRED_FIELDS_MISSING]
        assert toasts[0].status is ToastStatus.ERROR

    def test_time_range(self, validator, toasts):
        assert not validator.validate(_form(start_time="15:00", end_time="14:00"))
        assert [toast.title for toast in toasts] == [INVALID_TIME_RANGE]

    def test_unparseable_time_counts_as_time_error(self, validator, toasts):
        assert form_time_errors(_form(start_time="25:00")).has_errors
        assert not validator.validate(_form(start_time="25:00"))
        assert [toast.title for toast in toasts] == [INVALID_TIME_RANGE]

    def test_bad_date(self, validator, toasts):
        assert not validator.validate(_form(date="2024-13-45"))
        assert [toast.title for toast in toasts] == [INVALID_DATE]
