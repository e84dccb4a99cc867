"""Exception resolution.

Layers the special day (if any) for a date on top of the weekly plan and
returns the EffectiveDay: whether the venue is open and which shifts apply.

Precedence:
  - closed        -> always closed, whatever the weekly plan says
  - special_hours -> override shifts replace the day; without overrides the
                     regular shifts overlapping the special window are kept whole
  - event         -> regular shifts overlapping the event window are dropped,
                     open state follows the weekly plan
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple, Union

from hours.domain.Schedule import Schedule
from hours.domain.Shift import Shift
from hours.domain.SpecialDay import SpecialDay, SpecialDayType
from hours.domain.TimeRange import TimeOfDay
from hours.domain.WeekPlan import WeekPlan
from hours.domain.Weekday import Weekday
from hours.logic.overlap.engine import overlaps


@dataclass(frozen=True)
class EffectiveDay:
    date: date
    is_open: bool
    shifts: Tuple[Shift, ...] = ()
    reason: Optional[SpecialDay] = None

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_date(self.date)

    @property
    def has_bookable_shifts(self) -> bool:
        """Open with at least one shift (open-but-empty is allowed by the resolver)."""
        return self.is_open and bool(self.shifts)


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def resolve(week: WeekPlan, special_days: Iterable[SpecialDay], day: Union[date, datetime]) -> EffectiveDay:
    day = _as_date(day)
    base = week[Weekday.from_date(day)]
    exception = next((sd for sd in special_days if sd.date == day), None)

    if exception is None:
        return EffectiveDay(day, base.enabled, base.shifts if base.enabled else ())

    if exception.type is SpecialDayType.CLOSED:
        return EffectiveDay(day, False, (), exception)

    if exception.type is SpecialDayType.SPECIAL_HOURS:
        if exception.override_shifts:
            shifts = exception.override_shifts
        elif exception.hours is not None:
            shifts = tuple(s for s in base.shifts if overlaps(s.range, exception.hours))
        else:
            shifts = base.shifts
        return EffectiveDay(day, True, shifts, exception)

    # event: carve the window out of the regular day
    if exception.hours is not None:
        shifts = tuple(s for s in base.shifts if not overlaps(s.range, exception.hours))
    else:
        shifts = base.shifts
    return EffectiveDay(day, base.enabled, shifts if base.enabled else (), exception)


def resolve_schedule(schedule: Schedule, day: Union[date, datetime]) -> EffectiveDay:
    return resolve(schedule.week, schedule.special_days, day)


def resolve_upcoming(week: WeekPlan, special_days: Iterable[SpecialDay], start: date,
                     days: int = 7) -> List[EffectiveDay]:
    """Resolve ``days`` consecutive dates beginning at ``start``."""
    special_days = list(special_days)
    start = _as_date(start)
    return [resolve(week, special_days, start + timedelta(days=i)) for i in range(days)]


def find_shift_at(effective: EffectiveDay, moment: Union[str, TimeOfDay]) -> Optional[Shift]:
    """First effective shift running at ``moment`` (start inclusive, end exclusive)."""
    if not effective.is_open:
        return None
    t = TimeOfDay.parse(moment)
    for shift in effective.shifts:
        if shift.range.is_empty:
            continue
        if shift.range.contains(t) and t != shift.end:
            return shift
    return None


__all__ = ['EffectiveDay', 'resolve', 'resolve_schedule', 'resolve_upcoming', 'find_shift_at']
