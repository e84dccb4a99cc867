"""Schedule document codec.

Converts between the persisted JSON shape ({"openingHours": ..., "specialDays": ...})
and the immutable Schedule model. Weekday values stored in the legacy string
form ("Cerrado" or "HH:MM-HH:MM,HH:MM-HH:MM") are upgraded to the structured
form before any engine operation sees them.
"""
import json
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from hours.domain.DayPlan import DayPlan
from hours.domain.Schedule import Schedule
from hours.domain.Shift import Shift
from hours.domain.SpecialDay import SpecialDay
from hours.domain.TimeRange import TimeRange
from hours.domain.WeekPlan import WeekPlan
from hours.domain.Weekday import Weekday, WEEK
from hours.utilities.constants import (
    BREAKFAST, BUILTIN_TEMPLATES, DINNER, GENERIC_SHIFT_EMOJI, GENERIC_SHIFT_NAME, LEGACY_CLOSED, LUNCH
)
from hours.utilities.errors import ScheduleFormatError
from hours.utilities.validators import ScheduleDocument

logger = logging.getLogger(__name__)


def _classify_legacy_range(start_hour: int, index: int) -> Tuple[str, str, Optional[str]]:
    """Guess (name, emoji, color) for a legacy range from its start hour."""
    if 7 <= start_hour < 12:
        template = BREAKFAST
    elif 12 <= start_hour < 17:
        template = LUNCH
    elif start_hour >= 19 or start_hour < 2:
        template = DINNER
    else:
        return GENERIC_SHIFT_NAME.format(n=index + 1), GENERIC_SHIFT_EMOJI, None
    tpl = BUILTIN_TEMPLATES[template]
    return template, tpl["emoji"], tpl["color"]


def upgrade_legacy_day(weekday: Weekday, value: str) -> DayPlan:
    """Turn 'Cerrado' or 'HH:MM-HH:MM,...' into a structured DayPlan."""
    if value.strip().lower() == LEGACY_CLOSED.lower():
        return DayPlan()
    shifts = []
    for index, chunk in enumerate(value.split(',')):
        start, _, end = chunk.strip().partition('-')
        if not start.strip() or not end.strip():
            continue
        time_range = TimeRange.of(start, end)
        name, emoji, color = _classify_legacy_range(time_range.start.hour, index)
        shifts.append(Shift(
            id=f"{weekday.key}-{index}",
            name=name,
            label=emoji,
            range=time_range,
            color=color,
            is_custom=False,
        ))
    return DayPlan(enabled=bool(shifts), shifts=tuple(shifts))


def schedule_from_document(document: Any) -> Schedule:
    """Decode a persisted document; any malformation fails the whole load."""
    if not isinstance(document, dict):
        raise ScheduleFormatError("Invalid schedule format: expected a JSON object")
    try:
        doc = ScheduleDocument.model_validate(document)
    except ValidationError as e:
        raise ScheduleFormatError(f"Invalid schedule format: {e.error_count()} validation error(s)") from e

    try:
        days: Dict[Weekday, DayPlan] = {}
        for key, value in doc.openingHours.items():
            weekday = Weekday.from_key(key)
            if weekday in days:
                raise ValueError(f"Weekday {weekday.label} appears twice")
            if value is None:
                days[weekday] = DayPlan()
            elif isinstance(value, str):
                days[weekday] = upgrade_legacy_day(weekday, value)
            else:
                days[weekday] = DayPlan.from_dict(value.model_dump())
        week = WeekPlan.from_mapping({wd: days.get(wd, DayPlan()) for wd in WEEK})
        special_days = [SpecialDay.from_dict(sd.model_dump()) for sd in doc.specialDays]
        return Schedule(week, tuple(special_days))
    except ScheduleFormatError:
        raise
    except ValueError as e:
        raise ScheduleFormatError(f"Invalid schedule format: {e}") from e


def schedule_from_json(text: str) -> Schedule:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ScheduleFormatError(f"Invalid schedule format: {e.msg}") from e
    return schedule_from_document(document)


def schedule_to_document(schedule: Schedule) -> Dict[str, Any]:
    return {
        "openingHours": {wd.key: day.to_dict() for wd, day in schedule.week.items()},
        "specialDays": [sd.to_dict() for sd in schedule.special_days],
    }


__all__ = ['schedule_from_document', 'schedule_from_json', 'schedule_to_document', 'upgrade_legacy_day']
