"""
Default settings for Mouse Guard.

These are the default values used when no user configuration exists.
"""

from dataclasses import dataclass
from typing import Optional

APP_FOLDER_NAME = "Mouse-Guard"
SETTINGS_FILE_NAME = "settings.json"
ERROR_LOG_FILE_NAME = "error.log"

# Sentinel for "no screen blocked"
INVALID_SCREEN_INDEX = -1

# Timer intervals (milliseconds)
CURSOR_CHECK_INTERVAL_MS = 20
MONITOR_CHECK_INTERVAL_MS = 5000


@dataclass
class AppSettings:
    """Persisted application state."""
    blocked_screen_index: int = INVALID_SCREEN_INDEX
    hotkey: Optional[str] = None  # e.g. "Control,Alt,B"
