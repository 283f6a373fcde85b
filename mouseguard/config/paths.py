"""
Platform-specific locations for Mouse Guard data files.
"""

import os
import sys
from pathlib import Path

from .defaults import APP_FOLDER_NAME


def get_user_config_root() -> Path:
    """
    Get the per-user application data root.

    Returns:
        Linux/macOS: $XDG_DATA_HOME or ~/.local/share
        Windows: %LOCALAPPDATA%
    """
    if os.name == 'nt':  # Windows
        base = os.environ.get('LOCALAPPDATA', os.path.expanduser('~'))
    else:  # Linux/macOS
        base = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))
    return Path(base)


def get_settings_dir() -> Path:
    """Directory holding settings.json and error.log."""
    return get_user_config_root() / APP_FOLDER_NAME


def get_install_dir() -> Path:
    """
    Directory the application was started from.

    Frozen builds live next to the executable; otherwise the directory
    of the launching script is used.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).resolve().parent
    script = sys.argv[0] if sys.argv and sys.argv[0] else __file__
    return Path(os.path.abspath(script)).parent
