"""Editor session for one restaurant's schedule.

Holds the current Schedule snapshot and applies the commit policy of the
dashboard editor: every local edit restarts the auto-save timer, and only
the latest snapshot is written once the operator stops editing
(last-write-wins, no merging). Auto-save never checks reservations; the
explicit ``save`` does, and its verdict is advisory.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from hours.domain.ConflictReport import ConflictReport
from hours.domain.Schedule import Schedule
from hours.domain.WeekPlan import WeekPlan
from hours.events.Event_Bus import (
    GLOBAL_EVENT_BUS, SCHEDULE_CONFLICTS_DETECTED, SCHEDULE_SAVE_FAILED, SCHEDULE_SAVED
)
from hours.infra.Schedule_Repository import ScheduleRepository
from hours.infra.conflict_client import ConflictChecker
from hours.logic.autosave.debounce import DebouncedTask
from hours.utilities.config import AUTOSAVE_DELAY_MS
from hours.utilities.constants import SAVED_STATUS_SECONDS

logger = logging.getLogger(__name__)


class SaveStatus(str, Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"


@dataclass(frozen=True)
class SaveResult:
    saved: bool
    report: ConflictReport


class ScheduleEditor:
    def __init__(self, restaurant_id: str, repository: ScheduleRepository,
                 checker: Optional[ConflictChecker] = None, delay: float = AUTOSAVE_DELAY_MS / 1000,
                 schedule: Optional[Schedule] = None, event_bus=GLOBAL_EVENT_BUS,
                 saved_status_seconds: float = SAVED_STATUS_SECONDS):
        self.restaurant_id = restaurant_id
        self.repository = repository
        self.checker = checker
        self.schedule = schedule if schedule is not None else repository.load(restaurant_id)
        self.status = SaveStatus.IDLE
        self.last_error: Optional[str] = None
        self._event_bus = event_bus
        self._autosave = DebouncedTask(self._autosave_latest, delay)
        self._saved_status_seconds = saved_status_seconds
        self._status_reset: Optional[asyncio.TimerHandle] = None

    @property
    def autosave_pending(self) -> bool:
        return self._autosave.pending

    def apply(self, mutation: Callable[[Schedule], Schedule]) -> Schedule:
        """Replace the snapshot with ``mutation(snapshot)`` and restart the auto-save timer."""
        self.schedule = mutation(self.schedule)
        self._set_status(SaveStatus.SAVING)
        self._autosave.trigger()
        return self.schedule

    def edit_week(self, mutation: Callable[[WeekPlan], WeekPlan]) -> Schedule:
        return self.apply(lambda schedule: schedule.with_week(mutation(schedule.week)))

    async def save(self, force: bool = False) -> SaveResult:
        """Explicit save: check reservations first, then write unless conflicts block it.

        With ``force=True`` the schedule is written even when conflicts were
        reported (the operator confirmed). Edits made while the check is
        running keep their auto-save armed so they are written afterwards.
        """
        snapshot = self.schedule
        report = ConflictReport.none()
        if self.checker is not None:
            report = await self.checker.check_conflicts(self.restaurant_id, snapshot)
        if report.has_conflicts and not force:
            self._event_bus.publish(SCHEDULE_CONFLICTS_DETECTED, {
                'restaurant_id': self.restaurant_id,
                'message': report.message or "",
                'count': len(report.conflicts),
            })
            return SaveResult(False, report)
        if self.schedule is snapshot:
            self._autosave.cancel()
        self._set_status(SaveStatus.SAVING)
        saved = await self._persist(snapshot)
        return SaveResult(saved, report)

    async def flush(self) -> None:
        """Write a pending auto-save now and wait for in-flight writes."""
        await self._autosave.flush()
        await self._autosave.wait_idle()

    async def _autosave_latest(self) -> None:
        await self._persist(self.schedule)

    async def _persist(self, snapshot: Schedule) -> bool:
        try:
            await asyncio.to_thread(self.repository.save, self.restaurant_id, snapshot)
        except Exception as e:
            # reported to the operator; in-memory state is kept and the next edit retries
            logger.error("Auto-save failed for %s: %s", self.restaurant_id, e)
            self.last_error = str(e) or e.__class__.__name__
            self._set_status(SaveStatus.IDLE)
            self._event_bus.publish(SCHEDULE_SAVE_FAILED, {
                'restaurant_id': self.restaurant_id,
                'error': self.last_error,
            })
            return False
        self.last_error = None
        if self._autosave.pending or self.schedule is not snapshot:
            self._set_status(SaveStatus.SAVING)
        else:
            self._set_status(SaveStatus.SAVED)
            self._status_reset = asyncio.get_running_loop().call_later(
                self._saved_status_seconds, self._set_status, SaveStatus.IDLE)
        self._event_bus.publish(SCHEDULE_SAVED, {
            'restaurant_id': self.restaurant_id,
            'special_days': len(snapshot.special_days),
        })
        return True

    def _set_status(self, status: SaveStatus) -> None:
        if self._status_reset is not None:
            self._status_reset.cancel()
            self._status_reset = None
        self.status = status


__all__ = ['ScheduleEditor', 'SaveStatus', 'SaveResult']
