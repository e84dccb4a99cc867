"""Configuration management for the opening-hours service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('HOURS_DATA_DIR', str(BASE_DIR / 'data' / 'schedules')))

# Reservation data source (conflict checks)
RESERVATIONS_API_URL: Final[str] = os.getenv('RESERVATIONS_API_URL', '')
CONFLICT_CHECK_TIMEOUT: Final[float] = float(os.getenv('CONFLICT_CHECK_TIMEOUT', '5'))

# Editor behaviour
AUTOSAVE_DELAY_MS: Final[int] = int(os.getenv('AUTOSAVE_DELAY_MS', '800'))
TIMELINE_START_HOUR: Final[int] = int(os.getenv('TIMELINE_START_HOUR', '6'))
DISABLE_EMPTY_DAYS_ON_TEMPLATE_DELETE: Final[bool] = (
    os.getenv('DISABLE_EMPTY_DAYS_ON_TEMPLATE_DELETE', 'True').lower() == 'true'
)
