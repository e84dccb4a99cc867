"""Weekday domain value: closed, Monday-first enumeration of the seven days."""
from datetime import date
from enum import IntEnum
import unicodedata


def _fold(text: str) -> str:
    # lower-case and strip accents so "Miércoles" and "miercoles" match
    decomposed = unicodedata.normalize('NFKD', text.strip().lower())
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def key(self) -> str:
        """Day name used as key in the persisted document."""
        return _SPANISH_NAMES[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def next(self) -> "Weekday":
        return Weekday((self + 1) % 7)

    def previous(self) -> "Weekday":
        return Weekday((self - 1) % 7)

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        return cls(day.weekday())

    @classmethod
    def from_key(cls, key: str) -> "Weekday":
        """Parse a day name in Spanish or English (case and accent insensitive)."""
        try:
            return _BY_NAME[_fold(key)]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown weekday: {key!r}") from None


_SPANISH_NAMES = {
    Weekday.MONDAY: "Lunes",
    Weekday.TUESDAY: "Martes",
    Weekday.WEDNESDAY: "Miércoles",
    Weekday.THURSDAY: "Jueves",
    Weekday.FRIDAY: "Viernes",
    Weekday.SATURDAY: "Sábado",
    Weekday.SUNDAY: "Domingo",
}

_BY_NAME = {}
for _day in Weekday:
    _BY_NAME[_fold(_day.name)] = _day
    _BY_NAME[_fold(_SPANISH_NAMES[_day])] = _day

WEEK = tuple(Weekday)

__all__ = ['Weekday', 'WEEK']
