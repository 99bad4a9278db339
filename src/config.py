"""Configuration module for the LMS Admin API.

This module provides centralized configuration management, including directory
paths, API server settings, authentication settings, and application defaults.
All configuration values can be overridden via environment variables.
"""

import os
import re
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/lms_admin.db"
)

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("PORT", os.getenv("API_PORT", "3000")))

API_TITLE = "LMS Admin API"
API_VERSION = "1.0.0"

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv("CORS_ALLOWED_ORIGINS", "*")
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

JWT_SECRET: str = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNIT_MINUTES = {"s": 1 / 60, "m": 1, "h": 60, "d": 60 * 24}


def parse_duration_minutes(value: str) -> float:
    """Parse an expiry such as '1d', '12h', '30m' or '3600s' into minutes.

    A bare number is read as minutes.

    Args:
        value: Duration string.

    Returns:
        Duration in minutes.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    match = _DURATION_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNIT_MINUTES[unit or "m"]


JWT_EXPIRES_IN: str = os.getenv("JWT_EXPIRES_IN", "1d")
ACCESS_TOKEN_EXPIRE_MINUTES: float = parse_duration_minutes(JWT_EXPIRES_IN)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

# --- Listing Configuration ---

DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

# --- Business Rule Defaults ---

# Default limit of simultaneous (non-completed) enrollments per department
DEFAULT_SIMULTANEOUS_COURSES: int = 5

# Defaults used when the system configuration row is created on first access
SYSTEM_CONFIG_DEFAULTS = {
    "auto_register": False,
    "manual_approval": True,
    "inactivity_block_days": 30,
    "inactivity_block_enabled": False,
    "user_limit": 2000,
    "user_limit_enabled": True,
}

# --- Metrics Configuration ---

# A user counts as active when the last login falls inside this window
ACTIVE_USER_WINDOW_DAYS: int = int(os.getenv("ACTIVE_USER_WINDOW_DAYS", "30"))

# Number of calendar months in the engagement series (oldest to newest)
ENGAGEMENT_MONTHS: int = int(os.getenv("ENGAGEMENT_MONTHS", "6"))

# Size of the "top N" rankings in the metrics endpoints
TOP_N: int = int(os.getenv("METRICS_TOP_N", "10"))

# --- Bootstrap Configuration ---

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
ADMIN_NAME: str = os.getenv("ADMIN_NAME", "Administrador")
ADMIN_DEPARTMENT: str = os.getenv("ADMIN_DEPARTMENT", "Administração")
