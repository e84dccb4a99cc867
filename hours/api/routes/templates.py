from fastapi import APIRouter, Depends, HTTPException, Query

from hours.api.dependencies import get_repository, load_schedule, save_schedule
from hours.infra.Schedule_Repository import ScheduleRepository
from hours.logic.templates.catalog import delete_template, list_custom_templates, rename_or_restyle, template_usage
from hours.utilities.config import DISABLE_EMPTY_DAYS_ON_TEMPLATE_DELETE
from hours.utilities.errors import TemplateNameCollision
from hours.utilities.validators import TemplatePatchRequest

router = APIRouter(prefix="/api/hours/{restaurant_id}/templates")


def _describe_templates(week):
    result = []
    for shift in list_custom_templates(week):
        d = shift.to_dict()
        d.pop("id", None)
        d["usedOn"] = [wd.key for wd in template_usage(week, shift.name)]
        result.append(d)
    return result


@router.get("")
def list_templates(restaurant_id: str, repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    templates = _describe_templates(schedule.week)
    return {"count": len(templates), "templates": templates}


@router.patch("/{name}")
def patch_template(restaurant_id: str, name: str, payload: TemplatePatchRequest,
                   repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    if not template_usage(schedule.week, name):
        raise HTTPException(status_code=404, detail="Custom shift not found")
    try:
        week = rename_or_restyle(schedule.week, name, name=payload.name, label=payload.emoji,
                                 color=payload.color, on_collision=payload.on_collision)
    except TemplateNameCollision as e:
        raise HTTPException(status_code=409, detail=str(e))
    save_schedule(repo, restaurant_id, schedule.with_week(week))
    return {"status": "ok", "templates": _describe_templates(week)}


@router.delete("/{name}")
def remove_template(restaurant_id: str, name: str,
                    disable_empty_days: bool = Query(default=DISABLE_EMPTY_DAYS_ON_TEMPLATE_DELETE),
                    repo: ScheduleRepository = Depends(get_repository)):
    schedule = load_schedule(repo, restaurant_id)
    if not template_usage(schedule.week, name):
        raise HTTPException(status_code=404, detail="Custom shift not found")
    week = delete_template(schedule.week, name, disable_empty_days=disable_empty_days)
    save_schedule(repo, restaurant_id, schedule.with_week(week))
    return {"status": "ok", "templates": _describe_templates(week)}
