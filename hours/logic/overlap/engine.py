"""Interval primitives on a single linear 24-hour axis.

The axis starts at ``TIMELINE_START_HOUR`` (06:00 by default) so late-night
shifts such as 20:00-02:00 stay contiguous. Times before the axis start
belong to the next day.
"""
from typing import Tuple

from hours.domain.TimeRange import TimeOfDay, TimeRange
from hours.utilities.config import TIMELINE_START_HOUR
from hours.utilities.constants import MINUTES_PER_DAY


def to_linear_minutes(t: TimeOfDay, axis_start_hour: int = TIMELINE_START_HOUR) -> int:
    """Map ``t`` to minutes since the axis start (0..1439)."""
    minutes = t.to_minutes()
    if t.hour < axis_start_hour:
        minutes += MINUTES_PER_DAY
    return minutes - axis_start_hour * 60


def linear_span(r: TimeRange, axis_start_hour: int = TIMELINE_START_HOUR) -> Tuple[int, int]:
    """Return (start, end) of ``r`` on the axis with end >= start.

    A range that straddles the axis start itself (e.g. 05:00-07:00 on a
    06:00 axis) has its end pushed one day forward.
    """
    start = to_linear_minutes(r.start, axis_start_hour)
    end = to_linear_minutes(r.end, axis_start_hour)
    if r.is_empty:
        return start, start
    if end <= start:
        end += MINUTES_PER_DAY
    return start, end


def overlaps(a: TimeRange, b: TimeRange, axis_start_hour: int = TIMELINE_START_HOUR) -> bool:
    """True unless one range ends at or before the other starts.

    Ranges that only touch at an endpoint do not overlap, and a zero-length
    range overlaps nothing.
    """
    if a.is_empty or b.is_empty:
        return False
    a_start, a_end = linear_span(a, axis_start_hour)
    b_start, b_end = linear_span(b, axis_start_hour)
    # b may have been placed a day off relative to a when one of them straddles the axis start
    for shift in (0, -MINUTES_PER_DAY, MINUTES_PER_DAY):
        if not (a_end <= b_start + shift or a_start >= b_end + shift):
            return True
    return False


def within(inner: TimeRange, outer: TimeRange, axis_start_hour: int = TIMELINE_START_HOUR) -> bool:
    """True if ``inner`` lies entirely inside ``outer`` (endpoints may coincide)."""
    if inner.is_empty or outer.is_empty:
        return False
    if not overlaps(inner, outer, axis_start_hour):
        return False
    i_start, i_end = linear_span(inner, axis_start_hour)
    o_start, o_end = linear_span(outer, axis_start_hour)
    for shift in (0, -MINUTES_PER_DAY, MINUTES_PER_DAY):
        if o_start + shift <= i_start and i_end <= o_end + shift:
            return True
    return False


__all__ = ['to_linear_minutes', 'linear_span', 'overlaps', 'within']
