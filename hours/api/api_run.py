from datetime import date as _date
from typing import Optional
import logging

from fastapi import FastAPI, Depends, HTTPException, Query, Body

from hours.api.dependencies import get_checker, get_repository, load_schedule, save_schedule
from hours.api.routes import special_days, templates
from hours.domain.Weekday import Weekday
from hours.events.Event_Bus import GLOBAL_EVENT_BUS, SCHEDULE_CONFLICTS_DETECTED, SCHEDULE_SAVED
from hours.events.web_observers import start as start_event_observers, get_events as get_web_events
from hours.infra.Schedule_Repository import ScheduleRepository
from hours.infra.codec import schedule_from_document, schedule_to_document
from hours.infra.conflict_client import ConflictChecker
from hours.logic.bulk.editor import apply_day_to_all, apply_venue_hours_to_all_open_days
from hours.logic.reporting.preview import summarize
from hours.logic.resolver.effective_day import resolve, resolve_upcoming
from hours.utilities.errors import ScheduleFormatError
from hours.utilities.validators import VenueHoursRequest

# Logging
logger = logging.getLogger("hours_app")

MAX_UPCOMING_DAYS = 62

# Initialize FastAPI app
app = FastAPI(title="Opening Hours & Special Days API")

# Include routers
app.include_router(templates.router)
app.include_router(special_days.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for save-status polling when the app starts."""
    start_event_observers()
    logger.info("Web observers for schedule events started")


# -------------------- Helpers --------------------
def _effective_to_dict(effective):
    return {
        "date": effective.date.isoformat(),
        "weekday": effective.weekday.key,
        "isOpen": effective.is_open,
        "hasBookableShifts": effective.has_bookable_shifts,
        "shifts": [s.to_dict() for s in effective.shifts],
        "reason": effective.reason.to_dict() if effective.reason else None,
    }


def _parse_weekday(value: str) -> Weekday:
    try:
        return Weekday.from_key(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# -------------------- API: Save status events (polled by dashboard) --------------------
@app.get("/api/hours/events")
def api_schedule_events(since: Optional[int] = Query(default=None),
                        restaurant_id: Optional[str] = Query(default=None)):
    return get_web_events(since, restaurant_id)


# -------------------- API: Schedule document --------------------
@app.get("/api/hours/{restaurant_id}")
def get_schedule(restaurant_id: str, repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    document = schedule_to_document(schedule)
    document["preview"] = summarize(schedule.week)
    return document


@app.put("/api/hours/{restaurant_id}")
async def put_schedule(restaurant_id: str, document: dict = Body(...),
                       force: bool = Query(default=False),
                       repo: ScheduleRepository = Depends(get_repository),
                       checker: ConflictChecker = Depends(get_checker)):
    """Validate, check reservations, then save (unless conflicts and not forced)."""
    try:
        schedule = schedule_from_document(document)
    except ScheduleFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

    report = await checker.check_conflicts(restaurant_id, schedule)
    if report.has_conflicts and not force:
        logger.info("Save of %s held back: %d reservation conflict(s)", restaurant_id, len(report.conflicts))
        GLOBAL_EVENT_BUS.publish(SCHEDULE_CONFLICTS_DETECTED, {
            "restaurant_id": restaurant_id, "message": report.message or "", "count": len(report.conflicts)
        })
        return {"saved": False, **report.to_dict()}

    save_schedule(repo, restaurant_id, schedule)
    GLOBAL_EVENT_BUS.publish(SCHEDULE_SAVED, {
        "restaurant_id": restaurant_id, "special_days": len(schedule.special_days)
    })
    return {"saved": True, **report.to_dict(), "preview": summarize(schedule.week)}


# -------------------- API: Effective day queries --------------------
@app.get("/api/hours/{restaurant_id}/resolve")
def api_resolve(restaurant_id: str, date: _date = Query(...),
                repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    return _effective_to_dict(resolve(schedule.week, schedule.special_days, date))


@app.get("/api/hours/{restaurant_id}/upcoming")
def api_upcoming(restaurant_id: str, start: Optional[_date] = Query(default=None),
                 days: int = Query(default=7, ge=1, le=MAX_UPCOMING_DAYS),
                 repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    start = start or _date.today()
    resolved = resolve_upcoming(schedule.week, schedule.special_days, start, days)
    return {"start": start.isoformat(), "days": [_effective_to_dict(e) for e in resolved]}


@app.get("/api/hours/{restaurant_id}/preview")
def api_preview(restaurant_id: str, language: str = Query(default="en", pattern=r'^(en|es)$'),
                repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    return {"preview": summarize(schedule.week, language)}


# -------------------- API: Bulk edits --------------------
@app.post("/api/hours/{restaurant_id}/days/{weekday}/apply-to-all")
def api_apply_day_to_all(restaurant_id: str, weekday: str,
                         repo: ScheduleRepository = Depends(get_repository)):
    """Overwrite every weekday with the given day (the dashboard confirms before calling)."""
    source = _parse_weekday(weekday)
    schedule = load_schedule(repo, restaurant_id)
    updated = schedule.with_week(apply_day_to_all(schedule.week, source))
    save_schedule(repo, restaurant_id, updated)
    logger.info("Applied %s to all days for %s", source.label, restaurant_id)
    return schedule_to_document(updated)


@app.post("/api/hours/{restaurant_id}/venue-hours")
def api_venue_hours(restaurant_id: str, payload: VenueHoursRequest,
                    repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    week = apply_venue_hours_to_all_open_days(schedule.week, payload.openTime, payload.closeTime)
    updated = schedule.with_week(week)
    save_schedule(repo, restaurant_id, updated)
    return schedule_to_document(updated)
