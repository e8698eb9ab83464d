from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain import EventForm, EventValidationError, Toast, ToastSink, ToastStatus
from ..utils.time_validation import END_TIME_ERROR, START_TIME_ERROR, TimeErrors, time_error_messages

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MISSING = "필수 정보를 모두 입력해주세요."
INVALID_TIME_RANGE = "시간 설정을 확인해주세요."
INVALID_DATE = "날짜 형식을 확인해주세요."


def form_time_errors(form: EventForm) -> TimeErrors:
    try:
        return time_error_messages(form.start_time, form.end_time)
    except ValueError:
        # Unparseable input counts as a time error on both fields.
        return TimeErrors(start_time_error=START_TIME_ERROR, end_time_error=END_TIME_ERROR)


@dataclass(slots=True)
class FormValidator:
    sink: ToastSink
    duration_ms: int = 3000

    def _reject(self, title: str) -> bool:
        logger.debug("Event form rejected: %s", title)
        self.sink(Toast(title=title, status=ToastStatus.ERROR, duration=self.duration_ms, is_closable=True))
        return False

    def validate(self, form: EventForm) -> bool:
        if not (form.title.strip() and form.date and form.start_time and form.end_time):
            return self._reject(REQUIRED_FIELDS_MISSING)
        if form_time_errors(form).has_errors:
            return self._reject(INVALID_TIME_RANGE)
        try:
            form.to_event()
        except EventValidationError:
            return self._reject(INVALID_DATE)
        return True
