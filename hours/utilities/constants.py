from typing import Final

TIME_FORMAT: Final[str] = "%H:%M"
DATE_FORMAT: Final[str] = "%Y-%m-%d"
MINUTES_PER_DAY: Final[int] = 24 * 60

# Legacy weekly-hours marker for a closed day
LEGACY_CLOSED: Final[str] = "Cerrado"

BREAKFAST: Final[str] = "Breakfast"
LUNCH: Final[str] = "Lunch"
DINNER: Final[str] = "Dinner"

BUILTIN_TEMPLATES: Final[dict[str, dict[str, str]]] = {
    BREAKFAST: {"emoji": "☕", "start": "08:00", "end": "12:00", "color": "#f59e0b"},
    LUNCH: {"emoji": "🍽️", "start": "13:00", "end": "16:00", "color": "#10b981"},
    DINNER: {"emoji": "🌙", "start": "20:00", "end": "23:30", "color": "#6366f1"},
}

# Used when a day is switched on with no shifts, or a template name is unknown
DEFAULT_TEMPLATE: Final[str] = LUNCH

GENERIC_SHIFT_EMOJI: Final[str] = "⏰"
GENERIC_SHIFT_NAME: Final[str] = "Shift {n}"

SUGGESTED_EMOJIS: Final[list[str]] = ["🥂", "🍹", "🥐", "🎉", "☕", "🍽️", "🌙", "🍷", "🎊", "🌅"]
SUGGESTED_COLORS: Final[list[str]] = [
    "#f59e0b", "#10b981", "#6366f1", "#ec4899",
    "#8b5cf6", "#06b6d4", "#f97316", "#84cc16",
]

MAX_CONFLICTS_IN_MESSAGE: Final[int] = 5

# How long the "saved" status stays up before the editor goes back to idle
SAVED_STATUS_SECONDS: Final[float] = 2.0
