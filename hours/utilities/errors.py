"""Domain exceptions raised by the schedule engine."""


class ScheduleFormatError(ValueError):
    """The persisted schedule document could not be decoded."""


class IncompleteWeekError(ValueError):
    """A week plan was built without all seven weekdays."""


class SpecialDayConflict(ValueError):
    """A special day already exists for the requested date."""

    def __init__(self, existing):
        self.existing = existing
        super().__init__(f"A special day already exists for {existing.date.isoformat()} ({existing.name})")


class TemplateNameCollision(ValueError):
    """Renaming a custom template would merge it into another one."""

    def __init__(self, old_name: str, new_name: str):
        self.old_name = old_name
        self.new_name = new_name
        super().__init__(f"Custom shift '{new_name}' already exists; cannot rename '{old_name}'")
