"""SpecialDay domain entity: a date-keyed exception to the weekly plan."""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple

from hours.domain.Shift import Shift
from hours.domain.TimeRange import TimeRange
from hours.utilities.constants import DATE_FORMAT


class SpecialDayType(str, Enum):
    CLOSED = "closed"
    SPECIAL_HOURS = "special_hours"
    EVENT = "event"


@dataclass(frozen=True)
class SpecialDay:
    id: str
    date: date
    name: str
    type: SpecialDayType
    hours: Optional[TimeRange] = None
    override_shifts: Tuple[Shift, ...] = ()

    def __post_init__(self):
        if not isinstance(self.override_shifts, tuple):
            object.__setattr__(self, 'override_shifts', tuple(self.override_shifts or ()))
        if not isinstance(self.type, SpecialDayType):
            object.__setattr__(self, 'type', SpecialDayType(self.type))

    @staticmethod
    def from_dict(data) -> "SpecialDay":
        hours = data.get("hours")
        return SpecialDay(
            id=str(data["id"]),
            date=datetime.strptime(data["date"], DATE_FORMAT).date(),
            name=data["name"],
            type=SpecialDayType(data["type"]),
            hours=TimeRange.parse(hours) if hours else None,
            override_shifts=tuple(Shift.from_dict(s) for s in data.get("shifts") or []),
        )

    def to_dict(self):
        d = {
            "id": self.id,
            "date": self.date.strftime(DATE_FORMAT),
            "name": self.name,
            "type": self.type.value,
        }
        if self.hours is not None:
            d["hours"] = str(self.hours)
        if self.override_shifts:
            d["shifts"] = [s.to_dict() for s in self.override_shifts]
        return d


__all__ = ['SpecialDay', 'SpecialDayType']
