"""
Cursor blocking logic.

ScreenGuard owns the blocking state (which screen is blocked, whether
blocking is enabled, the toggle hotkey), persists it through a
SettingsStore and consults a MonitorTopology before acting. It never
touches the OS: ``evaluate()`` returns a CursorDecision that the
platform layer applies.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..config import AppSettings, INVALID_SCREEN_INDEX, SettingsStore
from .display import ScreenInfo, primary_screen
from .hotkey import DEFAULT_HOTKEY, Hotkey, hotkey_to_string, try_parse_hotkey
from .monitor_topology import MonitorTopology, MonitorTransition
from .tray_text import TRAY_NAME, format_tray_text

logger = logging.getLogger(__name__)


@dataclass
class CursorDecision:
    """What the platform layer should do with the cursor this tick."""
    show_cursor: bool = True
    move_to: Optional[Tuple[int, int]] = None
    notify: bool = False  # first block since the cursor last left the screen


class ScreenGuard:
    """
    Keeps the cursor off the blocked screen.

    Blocking is suspended while the topology is in single-monitor mode,
    and the blocked screen is cleared when that mode is entered.
    """

    def __init__(
        self,
        store: SettingsStore,
        topology: MonitorTopology,
        blocked_screen_index: Optional[int] = None,
        hotkey: Hotkey = DEFAULT_HOTKEY,
        blocking_enabled: bool = True,
    ):
        self.store = store
        self.topology = topology
        self.blocked_screen_index = blocked_screen_index
        self.hotkey = hotkey
        self.blocking_enabled = blocking_enabled
        self._notified = False

    @classmethod
    def from_settings(cls, store: SettingsStore, topology: MonitorTopology) -> "ScreenGuard":
        """
        Build a guard from persisted settings.

        A blocked index that does not match a connected screen is dropped.
        """
        settings = store.load_settings(AppSettings)

        hotkey = try_parse_hotkey(settings.hotkey) if isinstance(settings.hotkey, str) else None
        if hotkey is None:
            hotkey = DEFAULT_HOTKEY

        index = settings.blocked_screen_index
        screen_count = topology.screen_count()
        if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < screen_count:
            blocked = index
        else:
            blocked = None

        logger.info(f"Loaded settings: blocked screen {blocked}, hotkey {hotkey_to_string(hotkey)}")
        return cls(store, topology, blocked_screen_index=blocked, hotkey=hotkey)

    def to_settings(self) -> AppSettings:
        index = self.blocked_screen_index
        return AppSettings(
            blocked_screen_index=index if index is not None else INVALID_SCREEN_INDEX,
            hotkey=hotkey_to_string(self.hotkey),
        )

    def save(self) -> bool:
        return self.store.save_settings(self.to_settings())

    def select_screen(self, index: int) -> bool:
        """
        Toggle blocking of a screen.

        Selecting the blocked screen unblocks it; selecting another
        screen blocks it instead. The new state is persisted.

        Returns:
            True if the screen is blocked afterwards

        Raises:
            ValueError: If index is negative
        """
        if index < 0:
            raise ValueError(f"Screen index must not be negative: {index}")
        if self.blocked_screen_index == index:
            self.blocked_screen_index = None
        else:
            self.blocked_screen_index = index
        self.save()
        return self.blocked_screen_index == index

    def set_hotkey(self, hotkey: Hotkey):
        self.hotkey = hotkey
        self.save()

    def toggle_blocking(self) -> bool:
        """Flip blocking on/off (hotkey action). Not persisted."""
        self.blocking_enabled = not self.blocking_enabled
        logger.info(f"Blocking {'enabled' if self.blocking_enabled else 'disabled'}")
        return self.blocking_enabled

    def check_monitors(self) -> Optional[MonitorTransition]:
        """
        Re-check the monitor topology.

        On a transition to single-monitor mode the blocked screen is
        cleared and persisted.
        """
        transition = self.topology.check_for_change()
        if transition is MonitorTransition.TO_SINGLE:
            self.blocked_screen_index = None
            self._notified = False
            self.save()
        return transition

    def evaluate(self, cursor: Tuple[int, int], screens: Sequence[ScreenInfo]) -> CursorDecision:
        """
        Decide what to do with the cursor at ``cursor``.

        Args:
            cursor: Cursor position in virtual-desktop coordinates
            screens: Currently connected screens, indexed as in settings
        """
        if self.topology.is_single_monitor_mode or not self.blocking_enabled:
            self._notified = False
            return CursorDecision()

        index = self.blocked_screen_index
        if index is None or index < 0:
            self._notified = False
            return CursorDecision()
        if index >= len(screens):
            # Screens went away since the index was chosen
            self.check_monitors()
            self._notified = False
            return CursorDecision()

        if not screens[index].bounds.contains(cursor):
            self._notified = False
            return CursorDecision()

        safe = self._safe_screen(index, screens)
        if safe is None:
            return CursorDecision()

        notify = not self._notified
        self._notified = True
        return CursorDecision(show_cursor=False, move_to=safe.bounds.center(), notify=notify)

    def tray_text(self) -> str:
        return format_tray_text(TRAY_NAME, self.blocking_enabled, self.hotkey)

    @staticmethod
    def _safe_screen(blocked: int, screens: Sequence[ScreenInfo]) -> Optional[ScreenInfo]:
        primary = primary_screen(screens)
        if primary is not None and primary.index != blocked:
            return primary
        for screen in screens:
            if screen.index != blocked:
                return screen
        return None
