"""Configuration management for the SEA Catering service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Accounts
ADMIN_EMAILS: Final[frozenset[str]] = frozenset(
    e.strip().lower() for e in os.getenv('CATERING_ADMIN_EMAILS', '').split(',') if e.strip()
)
SESSION_TTL_HOURS: Final[int] = int(os.getenv('SESSION_TTL_HOURS', '24'))

# Rate limiting (per key, forward-sliding window)
RATE_LIMIT_MAX_ATTEMPTS: Final[int] = int(os.getenv('RATE_LIMIT_MAX_ATTEMPTS', '5'))
RATE_LIMIT_WINDOW_SECONDS: Final[int] = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', '300'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('CATERING_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
