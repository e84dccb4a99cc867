"""WeekPlan domain entity: the recurring schedule, one DayPlan per weekday (always all 7)."""
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Mapping, Tuple

from hours.domain.DayPlan import DayPlan
from hours.domain.Weekday import Weekday, WEEK
from hours.utilities.errors import IncompleteWeekError


@dataclass(frozen=True)
class WeekPlan:
    days: Tuple[DayPlan, ...]

    def __post_init__(self):
        if not isinstance(self.days, tuple):
            object.__setattr__(self, 'days', tuple(self.days))
        if len(self.days) != len(WEEK):
            raise IncompleteWeekError(f"A week plan needs {len(WEEK)} days, got {len(self.days)}")

    @classmethod
    def closed(cls) -> "WeekPlan":
        """Default plan for a restaurant that has not configured anything yet."""
        return cls(tuple(DayPlan() for _ in WEEK))

    @classmethod
    def from_mapping(cls, mapping: Mapping[Weekday, DayPlan]) -> "WeekPlan":
        missing = [d.label for d in WEEK if d not in mapping]
        if missing:
            raise IncompleteWeekError(f"Week plan is missing: {', '.join(missing)}")
        return cls(tuple(mapping[d] for d in WEEK))

    def __getitem__(self, weekday: Weekday) -> DayPlan:
        return self.days[Weekday(weekday)]

    def __iter__(self) -> Iterator[Weekday]:
        return iter(WEEK)

    def items(self) -> Iterator[Tuple[Weekday, DayPlan]]:
        return zip(WEEK, self.days)

    def with_day(self, weekday: Weekday, day: DayPlan) -> "WeekPlan":
        days = list(self.days)
        days[Weekday(weekday)] = day
        return WeekPlan(tuple(days))

    def map_days(self, fn: Callable[[Weekday, DayPlan], DayPlan]) -> "WeekPlan":
        return WeekPlan(tuple(fn(wd, day) for wd, day in self.items()))

    def to_mapping(self) -> Dict[Weekday, DayPlan]:
        return dict(self.items())


__all__ = ['WeekPlan']
