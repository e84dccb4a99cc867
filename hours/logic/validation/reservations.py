"""Reservation conflict evaluation.

Checks existing bookings against a proposed schedule: a booking conflicts
when its date resolves to closed, or when its time falls outside every
effective shift of that date.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional

from hours.domain.ConflictReport import ConflictReport
from hours.domain.Schedule import Schedule
from hours.domain.SpecialDay import SpecialDayType
from hours.domain.TimeRange import TimeOfDay
from hours.logic.resolver.effective_day import resolve
from hours.utilities.constants import MAX_CONFLICTS_IN_MESSAGE


@dataclass(frozen=True)
class Reservation:
    id: str
    starts_at: datetime  # restaurant-local wall clock
    guests: int = 0


def _describe(reservation: Reservation, schedule: Schedule) -> Optional[str]:
    day = reservation.starts_at.date()
    moment = TimeOfDay(reservation.starts_at.hour, reservation.starts_at.minute)
    effective = resolve(schedule.week, schedule.special_days, day)
    prefix = f"{day.isoformat()} ({effective.weekday.label})"

    if effective.reason is not None and effective.reason.type is SpecialDayType.CLOSED:
        return f"{day.isoformat()}: reservation at {moment} but the restaurant will be closed ({effective.reason.name})"
    if not effective.has_bookable_shifts:
        return f"{prefix}: reservation at {moment} but the restaurant will be closed"
    if not any(s.range.contains(moment) for s in effective.shifts):
        ranges = ", ".join(str(s.range) for s in effective.shifts)
        return f"{prefix}: reservation at {moment} outside service hours ({ranges})"
    return None


def summarize_conflicts(conflicts: List[str]) -> str:
    shown = "\n".join(conflicts[:MAX_CONFLICTS_IN_MESSAGE])
    message = f"Found {len(conflicts)} reservation(s) that would conflict:\n\n{shown}"
    if len(conflicts) > MAX_CONFLICTS_IN_MESSAGE:
        message += f"\n... and {len(conflicts) - MAX_CONFLICTS_IN_MESSAGE} more"
    return message


def evaluate_reservations(schedule: Schedule, reservations: Iterable[Reservation],
                          since: Optional[date] = None) -> ConflictReport:
    """Report every reservation (on or after ``since``) the schedule would invalidate."""
    conflicts = []
    for reservation in sorted(reservations, key=lambda r: r.starts_at):
        if since is not None and reservation.starts_at.date() < since:
            continue
        problem = _describe(reservation, schedule)
        if problem:
            conflicts.append(problem)
    if not conflicts:
        return ConflictReport.none()
    return ConflictReport(True, summarize_conflicts(conflicts), tuple(conflicts))


__all__ = ['Reservation', 'evaluate_reservations', 'summarize_conflicts']
