"""DayPlan domain entity: one weekday's venue hours plus its ordered shift list.

Every mutator returns a new DayPlan; instances are never modified in place.
Shift ids are generated here, never supplied by callers in the normal flow.
"""
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple, Union
import logging

from hours.domain.Shift import Shift, new_shift_id
from hours.domain.TimeRange import TimeOfDay, TimeRange
from hours.utilities.constants import DEFAULT_TEMPLATE

logger = logging.getLogger(__name__)


def sort_shifts_by_time(shifts: Iterable[Shift]) -> Tuple[Shift, ...]:
    """Stable sort by start time (plain minutes since midnight)."""
    return tuple(sorted(shifts, key=lambda s: s.start.to_minutes()))


@dataclass(frozen=True)
class DayPlan:
    enabled: bool = False
    venue_range: Optional[TimeRange] = None
    shifts: Tuple[Shift, ...] = ()

    def __post_init__(self):
        if not isinstance(self.shifts, tuple):
            object.__setattr__(self, 'shifts', tuple(self.shifts))
        ids = [s.id for s in self.shifts]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate shift ids in day: {ids}")

    @property
    def shift_ids(self):
        return {s.id for s in self.shifts}

    @property
    def is_open_for_service(self) -> bool:
        return self.enabled and bool(self.shifts)

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        for shift in self.shifts:
            if shift.id == shift_id:
                return shift
        return None

    def toggle_enabled(self, id_prefix: str = "shift") -> "DayPlan":
        """Flip ``enabled``; switching on an empty day inserts the default shift."""
        if not self.enabled and not self.shifts:
            default = Shift.from_template(DEFAULT_TEMPLATE, new_shift_id(id_prefix))
            return replace(self, enabled=True, shifts=(default,))
        return replace(self, enabled=not self.enabled)

    def add_shift(self, source: Union[str, Shift], id_prefix: str = "shift") -> "DayPlan":
        """Append a shift built from a template name or cloned from ``source``.

        The copy always gets a fresh id, the list is re-sorted by start time
        and the day is marked enabled.
        """
        shift_id = new_shift_id(id_prefix, self.shift_ids)
        if isinstance(source, Shift):
            shift = source.with_id(shift_id)
        else:
            shift = Shift.from_template(source, shift_id)
        return replace(self, enabled=True, shifts=sort_shifts_by_time(self.shifts + (shift,)))

    def update_shift(self, shift_id: str, *, name: Optional[str] = None, label: Optional[str] = None,
                     color: Optional[str] = None, start: Union[str, TimeOfDay, None] = None,
                     end: Union[str, TimeOfDay, None] = None) -> "DayPlan":
        """Patch one shift; the list is re-sorted only when its start time changes."""
        target = self.get_shift(shift_id)
        if target is None:
            logger.debug("update_shift: no shift %s in day, nothing to do", shift_id)
            return self
        new_start = TimeOfDay.parse(start) if start is not None else target.start
        new_end = TimeOfDay.parse(end) if end is not None else target.end
        updated = replace(
            target,
            name=name if name is not None else target.name,
            label=label if label is not None else target.label,
            color=color if color is not None else target.color,
            range=TimeRange(new_start, new_end),
        )
        shifts = tuple(updated if s.id == shift_id else s for s in self.shifts)
        if new_start != target.start:
            shifts = sort_shifts_by_time(shifts)
        return replace(self, shifts=shifts)

    def remove_shift(self, shift_id: str) -> "DayPlan":
        """Remove a shift; a day left without shifts is no longer open."""
        remaining = tuple(s for s in self.shifts if s.id != shift_id)
        if len(remaining) == len(self.shifts):
            return self
        return replace(self, shifts=remaining, enabled=self.enabled and bool(remaining))

    def with_venue_range(self, venue_range: Optional[TimeRange]) -> "DayPlan":
        return replace(self, venue_range=venue_range)

    def cloned(self, id_prefix: str = "shift") -> "DayPlan":
        """Deep copy with a fresh id for every shift."""
        fresh = []
        for shift in self.shifts:
            fresh.append(shift.with_id(new_shift_id(id_prefix, (s.id for s in fresh))))
        return replace(self, shifts=tuple(fresh))

    @staticmethod
    def from_dict(data) -> "DayPlan":
        '''Creates a DayPlan from its structured persisted form.'''
        open_time, close_time = data.get("openTime"), data.get("closeTime")
        venue = TimeRange.of(open_time, close_time) if open_time and close_time else None
        return DayPlan(
            enabled=bool(data.get("enabled", False)),
            venue_range=venue,
            shifts=tuple(Shift.from_dict(s) for s in data.get("shifts") or []),
        )

    def to_dict(self):
        d = {"enabled": self.enabled}
        if self.venue_range is not None:
            d["openTime"] = str(self.venue_range.start)
            d["closeTime"] = str(self.venue_range.end)
        d["shifts"] = [s.to_dict() for s in self.shifts]
        return d


__all__ = ['DayPlan', 'sort_shifts_by_time']
