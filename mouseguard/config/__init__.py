"""
Configuration management for Mouse Guard.

This module handles application settings, defaults, and persistence.
"""

from .settings import SettingsStore, SettingsError
from .defaults import AppSettings, INVALID_SCREEN_INDEX

__all__ = [
    "SettingsStore",
    "SettingsError",
    "AppSettings",
    "INVALID_SCREEN_INDEX",
]
