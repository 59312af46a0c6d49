"""
Configuration constants and environment setup.
"""

import os
import secrets
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("TIMELOG_DB_PATH", str(PROJECT_ROOT / "data" / "db" / "timelog.db"))
)
OUTPUT_DIR = PROJECT_ROOT / "output"
TEMPLATES_DIR = Path(__file__).parent.parent / "api" / "templates"

# =============================================================================
# USERS (from environment)
# =============================================================================

# One variable per user, e.g. TIMELOG_USER_ANISA=geheim
USER_ENV_PREFIX = "TIMELOG_USER_"


def load_users(environ=None) -> dict[str, str]:
    """Collect username -> password pairs from prefixed environment variables."""
    environ = os.environ if environ is None else environ
    users = {}
    for key, password in environ.items():
        if not key.startswith(USER_ENV_PREFIX) or not password:
            continue
        username = key[len(USER_ENV_PREFIX):].strip().lower()
        if username:
            users[username] = password
    return users


USERS = load_users()

# =============================================================================
# INTERVAL INPUT
# =============================================================================

SEPARATOR_WORD = "bis"

# Overtime and travel time are stored with two decimals, below 100 hours
MAX_DECIMAL_HOURS = 100

# Reason codes carried by FormatError, with the German text shown to the user
REASON_INVALID_FORMAT = "invalid format"
REASON_INVALID_TIME = "invalid time"
REASON_END_BEFORE_START = "end before start"

REASON_MESSAGES_DE = {
    REASON_INVALID_FORMAT: "Ungültiges Format",
    REASON_INVALID_TIME: "Ungültige Uhrzeit",
    REASON_END_BEFORE_START: "Endzeit vor Startzeit",
}

# =============================================================================
# DISPLAY (German locale)
# =============================================================================

HOURS_LABEL = "Std."
MINUTES_LABEL = "Min."

MONTH_NAMES_DE = [
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
]
WEEKDAY_ABBR_DE = ["Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa.", "So."]

EXPORT_HEADERS = [
    "Datum", "Haus", "Zeiten", "Gesamt", "Überstunden", "Anfahrtszeit", "Informationen"
]

# =============================================================================
# API CONFIGURATION
# =============================================================================

SESSION_SECRET = os.environ.get("SESSION_SECRET") or secrets.token_hex(32)
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # one week, in seconds
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "40100"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
