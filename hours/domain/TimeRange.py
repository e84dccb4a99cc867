"""Wall-clock time primitives: TimeOfDay and TimeRange (with overnight wraparound).

All times are restaurant-local; there is no timezone handling.
"""
import re
from dataclasses import dataclass
from typing import Union

from hours.utilities.constants import MINUTES_PER_DAY

_TIME_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*$')


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int
    minute: int = 0

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Minute out of range: {self.minute}")

    @classmethod
    def parse(cls, text: Union[str, "TimeOfDay"]) -> "TimeOfDay":
        """Parse 'HH:MM' (a single-digit hour is accepted)."""
        if isinstance(text, TimeOfDay):
            return text
        match = _TIME_RE.match(text or '')
        if not match:
            raise ValueError(f"Invalid time (expected HH:MM): {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_minutes(cls, total: int) -> "TimeOfDay":
        total %= MINUTES_PER_DAY
        return cls(total // 60, total % 60)

    def to_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class TimeRange:
    """Interval between two wall-clock times.

    When ``end`` is earlier than ``start`` the range crosses midnight, so
    20:00-02:00 lasts six hours. ``start == end`` is a degenerate range.
    """
    start: TimeOfDay
    end: TimeOfDay

    @classmethod
    def of(cls, start: Union[str, TimeOfDay], end: Union[str, TimeOfDay]) -> "TimeRange":
        return cls(TimeOfDay.parse(start), TimeOfDay.parse(end))

    @classmethod
    def parse(cls, text: str) -> "TimeRange":
        """Parse 'HH:MM-HH:MM'."""
        parts = (text or '').split('-')
        if len(parts) != 2:
            raise ValueError(f"Invalid time range (expected HH:MM-HH:MM): {text!r}")
        return cls.of(parts[0], parts[1])

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def crosses_midnight(self) -> bool:
        return self.end < self.start

    @property
    def duration_minutes(self) -> int:
        if self.crosses_midnight:
            return (MINUTES_PER_DAY - self.start.to_minutes()) + self.end.to_minutes()
        return self.end.to_minutes() - self.start.to_minutes()

    def contains(self, moment: Union[str, TimeOfDay]) -> bool:
        """True if ``moment`` falls inside the range, both endpoints included."""
        t = TimeOfDay.parse(moment).to_minutes()
        start, end = self.start.to_minutes(), self.end.to_minutes()
        if self.crosses_midnight:
            return t >= start or t <= end
        return start <= t <= end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


__all__ = ['TimeOfDay', 'TimeRange']
