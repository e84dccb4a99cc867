"""Shift domain entity: a named, labeled service window inside one day."""
from dataclasses import dataclass, replace
from typing import Iterable, Optional
from uuid import uuid4
import logging

from hours.domain.TimeRange import TimeRange
from hours.utilities.constants import BUILTIN_TEMPLATES, DEFAULT_TEMPLATE

logger = logging.getLogger(__name__)


def new_shift_id(prefix: str, taken: Iterable[str] = ()) -> str:
    """Generate an id that does not collide with any id in ``taken``."""
    taken = set(taken)
    while True:
        candidate = f"{prefix}-{uuid4().hex[:8]}"
        if candidate not in taken:
            return candidate


@dataclass(frozen=True)
class Shift:
    id: str
    name: str
    label: str
    range: TimeRange
    color: Optional[str] = None
    is_custom: bool = False

    @property
    def start(self):
        return self.range.start

    @property
    def end(self):
        return self.range.end

    def with_id(self, shift_id: str) -> "Shift":
        return replace(self, id=shift_id)

    def __str__(self) -> str:
        return f"{self.label} {self.name} {self.range}".strip()

    @classmethod
    def from_template(cls, template_name: str, shift_id: str) -> "Shift":
        """Instantiate a built-in template (Breakfast/Lunch/Dinner) with its default hours.

        Unknown names fall back to the center-of-day template.
        """
        if template_name not in BUILTIN_TEMPLATES:
            logger.warning("Unknown shift template %r, using %s", template_name, DEFAULT_TEMPLATE)
            template_name = DEFAULT_TEMPLATE
        tpl = BUILTIN_TEMPLATES[template_name]
        return cls(
            id=shift_id,
            name=template_name,
            label=tpl["emoji"],
            range=TimeRange.of(tpl["start"], tpl["end"]),
            color=tpl["color"],
            is_custom=False,
        )

    @classmethod
    def custom(cls, shift_id: str, name: str, time_range: TimeRange,
               label: str = "", color: Optional[str] = None) -> "Shift":
        return cls(id=shift_id, name=name.strip(), label=label, range=time_range,
                   color=color, is_custom=True)

    @staticmethod
    def from_dict(data) -> "Shift":
        '''Creates a Shift from its persisted form (camelCase keys, "emoji" as label).'''
        return Shift(
            id=str(data["id"]),
            name=data["name"],
            label=data.get("emoji") or "",
            range=TimeRange.of(data["startTime"], data["endTime"]),
            color=data.get("color") or None,
            is_custom=bool(data.get("isCustom", False)),
        )

    def to_dict(self):
        '''Converts the Shift to its persisted form.'''
        d = {
            "id": self.id,
            "name": self.name,
            "emoji": self.label,
            "startTime": str(self.range.start),
            "endTime": str(self.range.end),
            "isCustom": self.is_custom,
        }
        if self.color:
            d["color"] = self.color
        return d


__all__ = ['Shift', 'new_shift_id']
