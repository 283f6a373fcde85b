"""
Core Mouse Guard functionality.

This module provides the platform-independent logic:
- Tracking single/multi-monitor topology
- Deciding when and where to push the cursor off the blocked screen
- Hotkey and display name text handling
"""

from .monitor_topology import (
    MonitorTopology,
    MonitorMode,
    MonitorTransition,
    ScreenCountSource,
    guarded_screen_count,
)
from .hotkey import (
    Hotkey,
    HotkeyRegistrar,
    DEFAULT_HOTKEY,
    hotkey_to_string,
    try_parse_hotkey,
    parse_hotkey,
    modifiers_and_key_code,
)
from .display import Rect, ScreenInfo
from .guard import ScreenGuard, CursorDecision
from .tray_text import format_tray_text

__all__ = [
    "MonitorTopology",
    "MonitorMode",
    "MonitorTransition",
    "ScreenCountSource",
    "guarded_screen_count",
    "Hotkey",
    "HotkeyRegistrar",
    "DEFAULT_HOTKEY",
    "hotkey_to_string",
    "try_parse_hotkey",
    "parse_hotkey",
    "modifiers_and_key_code",
    "Rect",
    "ScreenInfo",
    "ScreenGuard",
    "CursorDecision",
    "format_tray_text",
]
