"""Shared FastAPI dependencies (overridable in tests)."""
import logging

from fastapi import HTTPException

from hours.domain.Schedule import Schedule
from hours.infra.Schedule_Repository import ScheduleRepository
from hours.infra.conflict_client import ConflictChecker
from hours.utilities.errors import ScheduleFormatError

logger = logging.getLogger(__name__)


def get_repository() -> ScheduleRepository:
    return ScheduleRepository()


def get_checker() -> ConflictChecker:
    return ConflictChecker()


def load_schedule(repo: ScheduleRepository, restaurant_id: str) -> Schedule:
    """Load or fail the request; a corrupt stored document is a server-side error."""
    try:
        return repo.load(restaurant_id)
    except ScheduleFormatError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def save_schedule(repo: ScheduleRepository, restaurant_id: str, schedule: Schedule) -> None:
    try:
        repo.save(restaurant_id, schedule)
    except OSError as e:
        logger.error("Failed to save schedule for %s: %s", restaurant_id, e)
        raise HTTPException(status_code=500, detail="Could not save opening hours")
