import logging
from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from hours.api.dependencies import get_repository, load_schedule, save_schedule
from hours.domain.Shift import Shift, new_shift_id
from hours.infra.Schedule_Repository import ScheduleRepository
from hours.logic.exceptions.special_days import (
    add_special_day, new_special_day, remove_special_day, split_special_days
)
from hours.utilities.errors import SpecialDayConflict
from hours.utilities.validators import SpecialDayRequest

router = APIRouter(prefix="/api/hours/{restaurant_id}/special-days")
logger = logging.getLogger(__name__)


@router.get("")
def list_special_days(restaurant_id: str, today: Optional[_date] = Query(default=None),
                      repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    upcoming, past = split_special_days(schedule.special_days, today)
    return {
        "upcoming": [sd.to_dict() for sd in upcoming],
        "past": [sd.to_dict() for sd in past],
    }


@router.post("")
def create_special_day(restaurant_id: str, payload: SpecialDayRequest,
                       repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    shifts = []
    for s in payload.shifts:
        shifts.append(Shift.from_dict(s.model_dump()).with_id(new_shift_id("special", (x.id for x in shifts))))
    try:
        special_day = new_special_day(payload.date, payload.name, payload.type, payload.hours, shifts)
        updated = add_special_day(schedule, special_day, on_conflict=payload.on_conflict)
    except SpecialDayConflict as e:
        logger.info("Special day conflict on %s for %s", payload.date, restaurant_id)
        return JSONResponse(status_code=409, content={
            "error": str(e),
            "existing": e.existing.to_dict(),
        })
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if updated is schedule:
        return {"status": "aborted", "specialDays": [sd.to_dict() for sd in schedule.special_days]}
    save_schedule(repo, restaurant_id, updated)
    return {"status": "ok", "specialDay": special_day.to_dict(),
            "specialDays": [sd.to_dict() for sd in updated.special_days]}


@router.delete("/{special_day_id}")
def delete_special_day(restaurant_id: str, special_day_id: str,
                       repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    updated = remove_special_day(schedule, special_day_id)
    if len(updated.special_days) == len(schedule.special_days):
        raise HTTPException(status_code=404, detail="Special day not found")
    save_schedule(repo, restaurant_id, updated)
    return {"status": "ok", "specialDays": [sd.to_dict() for sd in updated.special_days]}
