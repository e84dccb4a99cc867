"""Natural-language preview of a week plan, shown to the operator while editing.

Best effort only: it must return a sentence for any valid week, including a
fully closed one.
"""
from typing import Dict, List

from hours.domain.WeekPlan import WeekPlan
from hours.domain.Weekday import Weekday

_PHRASES: Dict[str, Dict[str, str]] = {
    'en': {
        'all_closed': "⚠️ The restaurant is closed every day",
        'every_day': "🟢 Open every day from {ranges}",
        'range': "{start} to {end}",
        'and': " and ",
        'open': "🟢 Open ",
        'weekdays': "Monday to Friday",
        'closed': " • 🔴 Closed ",
    },
    'es': {
        'all_closed': "⚠️ El restaurante está cerrado todos los días",
        'every_day': "🟢 Abierto todos los días de {ranges}",
        'range': "{start} a {end}",
        'and': " y ",
        'open': "🟢 Abierto ",
        'weekdays': "lunes a viernes",
        'closed': " • 🔴 Cerrado ",
    },
}

_WORKING_WEEK = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]


def _day_name(weekday: Weekday, language: str) -> str:
    return weekday.key if language == 'es' else weekday.label


def _same_times_every_day(week: WeekPlan) -> bool:
    def times(day):
        return [(s.start, s.end) for s in day.shifts]
    first = times(week[Weekday.MONDAY])
    return all(times(day) == first for _, day in week.items())


def summarize(week: WeekPlan, language: str = 'en') -> str:
    """Describe which days are open, collapsing identical weeks to one sentence."""
    phrases = _PHRASES.get(language, _PHRASES['en'])
    open_days: List[Weekday] = []
    closed_days: List[Weekday] = []
    for weekday, day in week.items():
        (open_days if day.is_open_for_service else closed_days).append(weekday)

    if not open_days:
        return phrases['all_closed']

    if len(open_days) == 7 and _same_times_every_day(week):
        ranges = phrases['and'].join(
            phrases['range'].format(start=s.start, end=s.end) for s in week[Weekday.MONDAY].shifts
        )
        return phrases['every_day'].format(ranges=ranges)

    names = [_day_name(d, language) for d in open_days]
    preview = phrases['open']
    if open_days == _WORKING_WEEK:
        preview += phrases['weekdays']
    elif len(names) >= 5:
        preview += ", ".join(names[:-1]) + phrases['and'] + names[-1]
    else:
        preview += ", ".join(names)

    if 0 < len(closed_days) <= 2:
        preview += phrases['closed'] + phrases['and'].join(_day_name(d, language) for d in closed_days)
    return preview


__all__ = ['summarize']
