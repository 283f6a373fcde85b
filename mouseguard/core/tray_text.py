"""
Tray icon tooltip text.
"""

from .hotkey import Hotkey, hotkey_to_string

TRAY_NAME = "Mouse Guard"


def format_tray_text(tray_name: str, blocking_enabled: bool, hotkey: Hotkey) -> str:
    """Return e.g. "Mouse Guard (Blocking) - Hotkey: Control,Alt,B"."""
    status = "Blocking" if blocking_enabled else "Unblocked"
    return f"{tray_name} ({status}) - Hotkey: {hotkey_to_string(hotkey)}"
