from __future__ import annotations

from datetime import date
from typing import Dict, Mapping, Optional

from ..utils.dates import format_date

HOLIDAY_RECORD: Dict[str, str] = {
    "2024-01-01": "신정",
    "2024-02-09": "설날",
    "2024-02-10": "설날",
    "2024-02-11": "설날",
    "2024-03-01": "삼일절",
    "2024-05-05": "어린이날",
    "2024-06-06": "현충일",
    "2024-08-15": "광복절",
    "2024-09-16": "추석",
    "2024-09-17": "추석",
    "2024-09-18": "추석",
    "2024-10-03": "개천절",
    "2024-10-09": "한글날",
    "2024-12-25": "크리스마스",
}


def holidays_for_month(day: date, record: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Return the ``YYYY-MM-DD -> name`` holidays falling in ``day``'s month."""

    prefix = format_date(day, 1)[:-2]
    source = HOLIDAY_RECORD if record is None else record
    return {key: name for key, name in source.items() if key.startswith(prefix)}
