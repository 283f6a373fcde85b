"""Tests for the QLockFile-backed single-instance guard."""

import pytest

# Guard: skip Qt-dependent tests if PySide6 is not importable
try:
    from PySide6.QtCore import QLockFile  # noqa: F401
    _HAS_QT = True
except ImportError:
    _HAS_QT = False

needs_qt = pytest.mark.skipif(not _HAS_QT, reason="PySide6 not available")


@needs_qt
class TestSingleInstance:
    def test_first_instance(self, tmp_path):
        from mouseguard.utils.single_instance import SingleInstance

        with SingleInstance(tmp_path / "mouseguard.lock") as instance:
            assert instance.is_first_instance

    def test_second_instance_refused(self, tmp_path):
        from mouseguard.utils.single_instance import SingleInstance

        lock_path = tmp_path / "mouseguard.lock"
        with SingleInstance(lock_path) as first:
            second = SingleInstance(lock_path)
            try:
                assert first.is_first_instance
                assert not second.is_first_instance
            finally:
                second.release()

    def test_lock_released_on_exit(self, tmp_path):
        from mouseguard.utils.single_instance import SingleInstance

        lock_path = tmp_path / "mouseguard.lock"
        with SingleInstance(lock_path):
            pass
        with SingleInstance(lock_path) as again:
            assert again.is_first_instance

    def test_creates_parent_directory(self, tmp_path):
        from mouseguard.utils.single_instance import SingleInstance

        lock_path = tmp_path / "nested" / "mouseguard.lock"
        with SingleInstance(lock_path) as instance:
            assert instance.is_first_instance
            assert lock_path.parent.is_dir()

    def test_empty_path_rejected(self):
        from mouseguard.utils.single_instance import SingleInstance

        with pytest.raises(ValueError):
            SingleInstance("")
