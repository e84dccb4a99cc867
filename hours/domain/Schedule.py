"""Schedule aggregate: the weekly plan plus its special days, validated and persisted together."""
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Tuple

from hours.domain.SpecialDay import SpecialDay
from hours.domain.WeekPlan import WeekPlan


@dataclass(frozen=True)
class Schedule:
    week: WeekPlan = field(default_factory=WeekPlan.closed)
    special_days: Tuple[SpecialDay, ...] = ()

    def __post_init__(self):
        if not isinstance(self.special_days, tuple):
            object.__setattr__(self, 'special_days', tuple(self.special_days))
        seen = set()
        for sd in self.special_days:
            if sd.date in seen:
                raise ValueError(f"More than one special day for {sd.date.isoformat()}")
            seen.add(sd.date)

    def special_day_for(self, day: date) -> Optional[SpecialDay]:
        for sd in self.special_days:
            if sd.date == day:
                return sd
        return None

    def with_week(self, week: WeekPlan) -> "Schedule":
        return replace(self, week=week)

    def with_special_days(self, special_days) -> "Schedule":
        return replace(self, special_days=tuple(special_days))


__all__ = ['Schedule']
