"""
Input validation schemas using Pydantic for the persisted schedule document
and the API request bodies.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Literal, Optional, Union

TIME_PATTERN = r'^([01]?\d|2[0-3]):[0-5]\d$'
RANGE_PATTERN = r'^\s*([01]?\d|2[0-3]):[0-5]\d\s*-\s*([01]?\d|2[0-3]):[0-5]\d\s*$'
DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'
COLOR_PATTERN = r'^#[0-9a-fA-F]{6}$'

SpecialDayKind = Literal["closed", "special_hours", "event"]


class ShiftInput(BaseModel):
    """Schema for one shift inside a day or a special day."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=60)
    emoji: str = ""
    startTime: str = Field(..., pattern=TIME_PATTERN)
    endTime: str = Field(..., pattern=TIME_PATTERN)
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)
    isCustom: bool = False

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        """Remove leading/trailing whitespace."""
        if not v.strip():
            raise ValueError('Shift name cannot be empty')
        return v.strip()


class DayPlanInput(BaseModel):
    """Schema for the structured form of one weekday."""
    enabled: bool = False
    openTime: Optional[str] = Field(None, pattern=TIME_PATTERN)
    closeTime: Optional[str] = Field(None, pattern=TIME_PATTERN)
    shifts: List[ShiftInput] = Field(default_factory=list)


class SpecialDayInput(BaseModel):
    """Schema for a date-keyed exception."""
    id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)
    name: str = Field(..., min_length=1, max_length=120)
    type: SpecialDayKind
    hours: Optional[str] = Field(None, pattern=RANGE_PATTERN)
    shifts: Optional[List[ShiftInput]] = None


class ScheduleDocument(BaseModel):
    """Schema for the whole persisted document (one per restaurant).

    Weekday values are either the structured form or the legacy string
    ("Cerrado" or "HH:MM-HH:MM,HH:MM-HH:MM").
    """
    openingHours: Dict[str, Union[None, str, DayPlanInput]] = Field(default_factory=dict)
    specialDays: List[SpecialDayInput] = Field(default_factory=list)


class SpecialDayRequest(BaseModel):
    """Schema for creating a special day from the dashboard."""
    date: str = Field(..., pattern=DATE_PATTERN)
    name: str = Field(..., min_length=1, max_length=120)
    type: SpecialDayKind = "closed"
    hours: Optional[str] = Field(None, pattern=RANGE_PATTERN)
    shifts: List[ShiftInput] = Field(default_factory=list)
    on_conflict: Optional[Literal["replace", "abort"]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate special day name."""
        if not v.strip():
            raise ValueError('Special day name cannot be empty')
        return v.strip()


class TemplatePatchRequest(BaseModel):
    """Schema for renaming or restyling a custom shift template."""
    name: Optional[str] = Field(None, min_length=1, max_length=60)
    emoji: Optional[str] = None
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)
    on_collision: Literal["merge", "reject"] = "merge"


class VenueHoursRequest(BaseModel):
    """Schema for applying venue opening hours to every open day."""
    openTime: str = Field(..., pattern=TIME_PATTERN)
    closeTime: str = Field(..., pattern=TIME_PATTERN)
