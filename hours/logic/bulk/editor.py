"""Whole-week edits.

``apply_day_to_all`` is a destructive overwrite with no undo; callers are
expected to confirm with the operator before invoking it.
"""
from hours.domain.DayPlan import DayPlan
from hours.domain.TimeRange import TimeRange
from hours.domain.WeekPlan import WeekPlan
from hours.domain.Weekday import Weekday


def apply_day_to_all(week: WeekPlan, source: Weekday) -> WeekPlan:
    """Copy the source day's enabled flag, venue hours and shifts (fresh ids) to every weekday."""
    template = week[source]

    def copy_to(weekday: Weekday, _: DayPlan) -> DayPlan:
        return DayPlan(
            enabled=template.enabled,
            venue_range=template.venue_range,
            shifts=template.shifts,
        ).cloned(id_prefix=weekday.key)

    return week.map_days(copy_to)


def apply_venue_hours_to_all_open_days(week: WeekPlan, open_time, close_time) -> WeekPlan:
    """Set the venue opening hours on every enabled day; shifts are left as they are."""
    venue = TimeRange.of(open_time, close_time)
    return week.map_days(lambda _, day: day.with_venue_range(venue) if day.enabled else day)


__all__ = ['apply_day_to_all', 'apply_venue_hours_to_all_open_days']
