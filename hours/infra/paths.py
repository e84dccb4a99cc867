from pathlib import Path

from hours.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()


def schedule_file(data_dir: Path, restaurant_id: str) -> Path:
    """One JSON document per restaurant."""
    safe_id = "".join(ch for ch in restaurant_id if ch.isalnum() or ch in "-_")
    if not safe_id:
        raise ValueError(f"Invalid restaurant id: {restaurant_id!r}")
    return Path(data_dir) / f"{safe_id}.json"


__all__ = ['DATA_DIR', 'schedule_file']
