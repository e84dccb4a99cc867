"""Special-day management: at most one exception per date.

Adding a second special day for a date that already has one is a conflict
the caller must resolve explicitly (replace or abort); entries are never
merged.
"""
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple, Union
from uuid import uuid4
import logging

from hours.domain.Schedule import Schedule
from hours.domain.Shift import Shift
from hours.domain.SpecialDay import SpecialDay, SpecialDayType
from hours.domain.TimeRange import TimeRange
from hours.utilities.constants import DATE_FORMAT
from hours.utilities.errors import SpecialDayConflict

logger = logging.getLogger(__name__)

REPLACE = "replace"
ABORT = "abort"


def new_special_day(day: Union[date, str], name: str, kind: Union[SpecialDayType, str],
                    hours: Union[TimeRange, str, None] = None,
                    override_shifts: Iterable[Shift] = ()) -> SpecialDay:
    """Build a SpecialDay with a generated id.

    ``hours`` is only kept for special_hours and event days, override
    shifts only for special_hours days.
    """
    if isinstance(day, str):
        day = datetime.strptime(day, DATE_FORMAT).date()
    if not name or not name.strip():
        raise ValueError("Special day name is required")
    kind = SpecialDayType(kind)
    if isinstance(hours, str):
        hours = TimeRange.parse(hours) if hours.strip() else None
    if kind is SpecialDayType.CLOSED:
        hours = None
    shifts = tuple(override_shifts) if kind is SpecialDayType.SPECIAL_HOURS else ()
    return SpecialDay(
        id=f"special-{uuid4().hex[:12]}",
        date=day,
        name=name.strip(),
        type=kind,
        hours=hours,
        override_shifts=shifts,
    )


def add_special_day(schedule: Schedule, special_day: SpecialDay,
                    on_conflict: Optional[str] = None) -> Schedule:
    """Add ``special_day`` to the schedule.

    If another entry already covers the date: ``on_conflict=None`` raises
    SpecialDayConflict, ``"replace"`` swaps the old entry out and
    ``"abort"`` returns the schedule unchanged.
    """
    existing = schedule.special_day_for(special_day.date)
    if existing is None:
        return schedule.with_special_days(schedule.special_days + (special_day,))
    if on_conflict == REPLACE:
        logger.info("Replacing special day %s (%s) on %s", existing.id, existing.name, existing.date)
        kept = [sd for sd in schedule.special_days if sd.id != existing.id]
        return schedule.with_special_days(kept + [special_day])
    if on_conflict == ABORT:
        return schedule
    raise SpecialDayConflict(existing)


def remove_special_day(schedule: Schedule, special_day_id: str) -> Schedule:
    return schedule.with_special_days(sd for sd in schedule.special_days if sd.id != special_day_id)


def split_special_days(special_days: Iterable[SpecialDay],
                       today: Optional[date] = None) -> Tuple[List[SpecialDay], List[SpecialDay]]:
    """Return (upcoming, past) lists sorted by date; today counts as upcoming."""
    today = today or date.today()
    ordered = sorted(special_days, key=lambda sd: sd.date)
    upcoming = [sd for sd in ordered if sd.date >= today]
    past = [sd for sd in ordered if sd.date < today]
    return upcoming, past


__all__ = ['new_special_day', 'add_special_day', 'remove_special_day', 'split_special_days',
           'REPLACE', 'ABORT']
