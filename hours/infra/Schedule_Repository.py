import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from hours.domain.Schedule import Schedule
from hours.infra.codec import schedule_from_json, schedule_to_document
from hours.infra.paths import DATA_DIR, schedule_file
from hours.utilities.errors import ScheduleFormatError

logger = logging.getLogger(__name__)


class ScheduleRepository:
    """Stores one schedule document (weekly plan + special days) per restaurant."""

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)

    def exists(self, restaurant_id: str) -> bool:
        return schedule_file(self.data_dir, restaurant_id).exists()

    def load(self, restaurant_id: str) -> Schedule:
        """Load a restaurant's schedule; unconfigured restaurants get an all-closed default.

        Raises ScheduleFormatError if the stored document is malformed.
        """
        path = schedule_file(self.data_dir, restaurant_id)
        if not path.exists():
            logger.info("No schedule stored for %s, using default", restaurant_id)
            return Schedule()
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            logger.error("Stored schedule for %s is not valid UTF-8", restaurant_id)
            raise ScheduleFormatError(f"Invalid schedule format: {e.reason} at byte {e.start}") from e
        try:
            return schedule_from_json(text)
        except ValueError:
            logger.error("Stored schedule for %s is not valid", restaurant_id)
            raise

    def save(self, restaurant_id: str, schedule: Schedule) -> Path:
        """Write the whole document atomically (temp file + move)."""
        path = schedule_file(self.data_dir, restaurant_id)
        os.makedirs(path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(schedule_to_document(schedule), tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.info("Schedule saved for %s (%d special days)", restaurant_id, len(schedule.special_days))
        return path


__all__ = ['ScheduleRepository']
