#!/usr/bin/env python3
"""
Mouse Guard - Main entry point.

Migrates and loads settings, then runs the cursor guard on the Qt event loop.
"""

import logging
import sys

from PySide6.QtGui import QGuiApplication

from mouseguard import __version__
from mouseguard.app import GuardRunner, QtScreenSource
from mouseguard.config import SettingsStore
from mouseguard.core import MonitorTopology, ScreenGuard, guarded_screen_count
from mouseguard.utils import setup_logging
from mouseguard.utils.single_instance import SingleInstance


def main():
    """Main entry point for Mouse Guard."""
    setup_logging(log_level="INFO", log_file=True)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"Mouse Guard v{__version__} starting...")
    logger.info("=" * 60)

    app = QGuiApplication(sys.argv)
    app.setApplicationName("Mouse Guard")
    app.setOrganizationName("Mouse-Guard")
    app.setQuitOnLastWindowClosed(False)

    store = SettingsStore()
    try:
        with SingleInstance(store.settings_dir / "mouseguard.lock") as instance:
            if not instance.is_first_instance:
                logger.info("Mouse Guard is already running")
                return 0

            # Migrate old settings from the install directory if needed
            store.migrate_old_settings()

            source = guarded_screen_count(QtScreenSource().get_screen_count)
            topology = MonitorTopology(source)
            guard = ScreenGuard.from_settings(store, topology)
            logger.info(guard.tray_text())

            # No system-wide registrar is bundled; the hotkey stays persisted but unbound
            runner = GuardRunner(guard, registrar=None)
            runner.start()
            logger.info("No hotkey registrar available - hotkey toggling disabled")

            exit_code = app.exec()

            runner.stop()
    finally:
        store.close()

    logger.info("Mouse Guard exiting")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
