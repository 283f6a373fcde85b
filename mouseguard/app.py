"""
Qt platform glue.

Feeds screen information and cursor position from Qt into ScreenGuard and
applies its decisions. Tray icon, menus and dialogs are not part of this
module.
"""

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, QTimer, Qt
from PySide6.QtGui import QCursor, QGuiApplication

from .config.defaults import CURSOR_CHECK_INTERVAL_MS, MONITOR_CHECK_INTERVAL_MS
from .core.display import Rect, ScreenInfo
from .core.guard import ScreenGuard
from .core.hotkey import Hotkey, HotkeyRegistrar, hotkey_to_string, modifiers_and_key_code
from .core.monitor_topology import MonitorTransition

logger = logging.getLogger(__name__)


class QtScreenSource:
    """ScreenCountSource backed by QGuiApplication.screens()."""

    def get_screen_count(self) -> int:
        return len(QGuiApplication.screens())


def current_screens() -> List[ScreenInfo]:
    """Snapshot of connected screens, primary flagged."""
    primary = QGuiApplication.primaryScreen()
    screens = []
    for index, screen in enumerate(QGuiApplication.screens()):
        geo = screen.geometry()
        screens.append(ScreenInfo(
            index=index,
            device_name=screen.name(),
            bounds=Rect(geo.x(), geo.y(), geo.width(), geo.height()),
            primary=screen == primary,
        ))
    return screens


class GuardRunner(QObject):
    """
    Drives a ScreenGuard from Qt timers.

    The cursor timer runs continuously; the monitor timer only runs while
    the topology asks for periodic rechecks. Screen add/remove signals
    trigger an immediate recheck. When a hotkey registrar is given, the
    guard's hotkey toggles blocking while the runner is started.
    """

    def __init__(self, guard: ScreenGuard, registrar: Optional[HotkeyRegistrar] = None, parent=None):
        super().__init__(parent)
        self.guard = guard
        self.registrar = registrar
        self._cursor_hidden = False
        self._hotkey_registered = False

        self.cursor_timer = QTimer(self)
        self.cursor_timer.setInterval(CURSOR_CHECK_INTERVAL_MS)
        self.cursor_timer.timeout.connect(self._on_cursor_tick)

        self.monitor_timer = QTimer(self)
        self.monitor_timer.setInterval(MONITOR_CHECK_INTERVAL_MS)
        self.monitor_timer.timeout.connect(self.check_monitors)

        app = QGuiApplication.instance()
        if app is not None:
            app.screenAdded.connect(lambda _screen: self.check_monitors())
            app.screenRemoved.connect(lambda _screen: self.check_monitors())

    def start(self):
        self.cursor_timer.start()
        self._sync_monitor_timer()
        self._register_hotkey()
        if self.guard.topology.is_single_monitor_mode:
            logger.warning("Single monitor detected - blocking disabled until a second monitor is connected")

    def stop(self):
        self.cursor_timer.stop()
        self.monitor_timer.stop()
        self._unregister_hotkey()
        self._set_cursor_hidden(False)

    def set_hotkey(self, hotkey: Hotkey) -> bool:
        """
        Persist a new hotkey and rebind it if the runner holds a binding.

        Returns:
            False if the system refused the new binding
        """
        self.guard.set_hotkey(hotkey)
        if not self._hotkey_registered:
            return True
        self._unregister_hotkey()
        return self._register_hotkey()

    def check_monitors(self):
        transition = self.guard.check_monitors()
        if transition is MonitorTransition.TO_SINGLE:
            logger.warning("Switched to single monitor mode - blocked screen cleared")
        elif transition is MonitorTransition.TO_MULTI:
            logger.info("Multiple monitors detected - blocking available")
        self._sync_monitor_timer()

    def _register_hotkey(self) -> bool:
        if self.registrar is None:
            return False
        modifiers, key_code = modifiers_and_key_code(self.guard.hotkey)
        self._hotkey_registered = self.registrar.register(modifiers, key_code, self._on_hotkey)
        if not self._hotkey_registered:
            logger.warning(f"Failed to register hotkey {hotkey_to_string(self.guard.hotkey)}")
        return self._hotkey_registered

    def _unregister_hotkey(self):
        if self._hotkey_registered:
            self.registrar.unregister()
            self._hotkey_registered = False

    def _on_hotkey(self):
        self.guard.toggle_blocking()
        logger.info(self.guard.tray_text())

    def _sync_monitor_timer(self):
        if self.guard.topology.should_run_periodic_recheck():
            if not self.monitor_timer.isActive():
                self.monitor_timer.start()
        else:
            self.monitor_timer.stop()

    def _on_cursor_tick(self):
        pos = QCursor.pos()
        decision = self.guard.evaluate((pos.x(), pos.y()), current_screens())
        if decision.move_to is not None:
            QCursor.setPos(*decision.move_to)
        self._set_cursor_hidden(not decision.show_cursor)
        if decision.notify:
            logger.info("The mouse was blocked from entering the selected screen")

    def _set_cursor_hidden(self, hidden: bool):
        if hidden == self._cursor_hidden:
            return
        if hidden:
            QGuiApplication.setOverrideCursor(QCursor(Qt.CursorShape.BlankCursor))
        else:
            QGuiApplication.restoreOverrideCursor()
        self._cursor_hidden = hidden
