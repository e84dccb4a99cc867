"""Custom shift template catalog.

Custom templates have no entity of their own: every Shift with
``is_custom=True`` and the same name counts as one use of the template.
Built-in templates (Breakfast/Lunch/Dinner) are never propagated.
"""
from dataclasses import replace
from typing import List, Optional
import logging

from hours.domain.DayPlan import DayPlan
from hours.domain.Shift import Shift
from hours.domain.WeekPlan import WeekPlan
from hours.utilities.config import DISABLE_EMPTY_DAYS_ON_TEMPLATE_DELETE
from hours.utilities.errors import TemplateNameCollision

logger = logging.getLogger(__name__)

MERGE = "merge"
REJECT = "reject"


def _is_use_of(shift: Shift, name: str) -> bool:
    return shift.is_custom and shift.name == name


def list_custom_templates(week: WeekPlan) -> List[Shift]:
    """One representative per distinct custom name, first occurrence (Monday first) wins."""
    seen = set()
    templates: List[Shift] = []
    for _, day in week.items():
        for shift in day.shifts:
            if shift.is_custom and shift.name not in seen:
                seen.add(shift.name)
                templates.append(shift)
    return templates


def rename_or_restyle(week: WeekPlan, old_name: str, *, name: Optional[str] = None,
                      label: Optional[str] = None, color: Optional[str] = None,
                      on_collision: str = MERGE) -> WeekPlan:
    """Apply a name/label/color patch to every use of a custom template.

    Time ranges are never touched. Renaming onto the name of another custom
    template merges the two unless ``on_collision="reject"``.
    """
    new_name = name.strip() if name else None
    if new_name and new_name != old_name:
        taken = {t.name for t in list_custom_templates(week)}
        if new_name in taken:
            if on_collision == REJECT:
                raise TemplateNameCollision(old_name, new_name)
            logger.info("Renaming custom shift %r onto existing %r merges both templates", old_name, new_name)

    def patch(shift: Shift) -> Shift:
        if not _is_use_of(shift, old_name):
            return shift
        return replace(
            shift,
            name=new_name or shift.name,
            label=label if label is not None else shift.label,
            color=color or shift.color,
        )

    return week.map_days(lambda _, day: replace(day, shifts=tuple(patch(s) for s in day.shifts)))


def delete_template(week: WeekPlan, name: str,
                    disable_empty_days: bool = DISABLE_EMPTY_DAYS_ON_TEMPLATE_DELETE) -> WeekPlan:
    """Remove every use of a custom template.

    Days that lose their last shift this way are switched off when
    ``disable_empty_days`` is set.
    """
    def strip(_, day: DayPlan) -> DayPlan:
        remaining = tuple(s for s in day.shifts if not _is_use_of(s, name))
        if len(remaining) == len(day.shifts):
            return day
        enabled = day.enabled
        if disable_empty_days and not remaining:
            enabled = False
        return replace(day, shifts=remaining, enabled=enabled)

    return week.map_days(strip)


def template_usage(week: WeekPlan, name: str) -> List:
    """Weekdays that currently use the custom template ``name``."""
    return [wd for wd, day in week.items() if any(_is_use_of(s, name) for s in day.shifts)]


__all__ = ['list_custom_templates', 'rename_or_restyle', 'delete_template', 'template_usage', 'MERGE', 'REJECT']
