"""
Single-instance guard backed by a Qt lock file.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QLockFile

logger = logging.getLogger(__name__)


class SingleInstance:
    """
    Holds a lock file for as long as this process is the primary instance.

    Usable as a context manager; the lock is released on exit.
    """

    def __init__(self, lock_path: Union[str, Path]):
        if not lock_path:
            raise ValueError("lock_path must not be empty")
        self.lock_path = Path(lock_path)
        self._lock: Optional[QLockFile] = QLockFile(str(self.lock_path))
        # Never consider a live lock stale
        self._lock.setStaleLockTime(0)

        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            self._has_handle = self._lock.tryLock(0)
        except OSError as e:
            logger.warning(f"Cannot create lock directory for {self.lock_path}: {e}")
            self._has_handle = False

        if not self._has_handle:
            logger.info(f"Another instance holds {self.lock_path}")

    @property
    def is_first_instance(self) -> bool:
        """True if this process is the first/primary instance."""
        return self._has_handle

    def release(self):
        if self._lock is not None:
            if self._has_handle:
                self._lock.unlock()
                self._has_handle = False
            self._lock = None

    def __enter__(self) -> "SingleInstance":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
