"""
Settings persistence for Mouse Guard.

Handles loading, saving and migrating the application's configuration
record. All failures are written to an error log next to the settings
file and never propagate to the caller.
"""

import dataclasses
import json
import logging
import os
import shutil
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union, get_args, get_origin, get_type_hints

from .defaults import ERROR_LOG_FILE_NAME, SETTINGS_FILE_NAME
from .paths import get_install_dir, get_settings_dir

logger = logging.getLogger(__name__)

T = TypeVar("T")

PathLike = Union[str, Path]


class SettingsError(Enum):
    """Failure categories recorded in the error log."""
    DIRECTORY_CREATE_FAILED = "Failed to create settings directory"
    READ_FAILED = "Failed to read settings"
    PARSE_FAILED = "Failed to parse settings"
    WRITE_FAILED = "Failed to save settings"
    VALIDATE_FAILED = "Serialized settings failed validation"
    MIGRATION_COPY_FAILED = "Failed to migrate legacy settings"
    MIGRATION_VALIDATE_FAILED = "Migrated settings are invalid"


class _ErrorLogHandler(logging.FileHandler):
    """
    Append-only file handler for the error log.

    Opens the file lazily, creates its directory on demand and never
    raises: a failure to log must not become the source of a crash.
    """

    def __init__(self, path: Path):
        super().__init__(path, mode='a', encoding='utf-8', delay=True)
        self.setFormatter(logging.Formatter(
            '[%(asctime)s] %(message)s', datefmt='%Y-%m-%d %H:%M:%S'
        ))

    def emit(self, record: logging.LogRecord):
        try:
            Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
            super().emit(record)
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord):
        pass


class SettingsStore:
    """
    Durable storage for a single JSON configuration record.

    Saves go through a temporary sibling file that is validated and then
    renamed over the settings file, so readers never observe a partial
    write. Load, save and migrate are serialized by one non-reentrant
    lock owned by the store; pass ``lock`` to share a primitive between
    stores explicitly.

    Path:
        Linux/macOS: ~/.local/share/Mouse-Guard/settings.json
        Windows: %LOCALAPPDATA%\\Mouse-Guard\\settings.json
    """

    def __init__(
        self,
        settings_dir: Optional[PathLike] = None,
        legacy_dir: Optional[PathLike] = None,
        lock: Optional[threading.Lock] = None,
    ):
        self.settings_dir = Path(settings_dir) if settings_dir is not None else get_settings_dir()
        self.settings_file_path = self.settings_dir / SETTINGS_FILE_NAME
        self.temp_file_path = self.settings_dir / f"{SETTINGS_FILE_NAME}.tmp"
        self.error_log_path = self.settings_dir / ERROR_LOG_FILE_NAME

        legacy = Path(legacy_dir) if legacy_dir is not None else get_install_dir()
        self.old_settings_path = legacy / SETTINGS_FILE_NAME

        self._lock = lock if lock is not None else threading.Lock()

        # Unregistered logger: one per store, never shared through logging.getLogger()
        self._error_log = logging.Logger(f"{__name__}.errors")
        self._error_log.propagate = False
        self._error_handler = _ErrorLogHandler(self.error_log_path)
        self._error_log.addHandler(self._error_handler)

    def close(self):
        """Release the error log file handle."""
        self._error_log.removeHandler(self._error_handler)
        self._error_handler.close()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def ensure_directory(self) -> bool:
        """
        Create the settings directory if it does not exist.

        Returns:
            True if the directory exists afterwards
        """
        try:
            self.settings_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            self._report(SettingsError.DIRECTORY_CREATE_FAILED, e, str(self.settings_dir))
            return False

    ensure_local_app_data_directory_exists = ensure_directory

    def load_settings(self, default_factory: Callable[[], T]) -> T:
        """
        Load the settings record from disk.

        Legacy settings are migrated first when the settings file does
        not exist yet. Missing, unreadable or corrupt files yield
        ``default_factory()``.

        Args:
            default_factory: Builds the default record. Its return type
                (a dict or a dataclass) decides how the file is decoded.

        Returns:
            Loaded record or a fresh default
        """
        with self._lock:
            self._migrate_locked()

            if not os.path.exists(self.settings_file_path):
                logger.info("No settings file found, using defaults")
                return default_factory()

            try:
                text = self.settings_file_path.read_text(encoding='utf-8-sig')
            except (OSError, ValueError) as e:
                self._report(SettingsError.READ_FAILED, e, str(self.settings_file_path))
                return default_factory()

            try:
                return _decode(json.loads(text), default_factory)
            except (ValueError, TypeError, RecursionError) as e:
                self._report(SettingsError.PARSE_FAILED, e, str(self.settings_file_path))
                return default_factory()

    def save_settings(self, value: Any) -> bool:
        """
        Atomically replace the settings file with ``value``.

        Args:
            value: dict or dataclass instance

        Returns:
            True if the settings file now holds ``value``
        """
        with self._lock:
            if not self.ensure_directory():
                return False

            try:
                text = self._serialize(value)
            except (TypeError, ValueError, RecursionError) as e:
                self._report(SettingsError.WRITE_FAILED, e, "value is not serializable")
                return False

            try:
                with open(self.temp_file_path, 'w', encoding='utf-8') as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                self._report(SettingsError.WRITE_FAILED, e, str(self.temp_file_path))
                self._remove_quietly(self.temp_file_path)
                return False

            try:
                json.loads(self.temp_file_path.read_text(encoding='utf-8'))
            except (OSError, ValueError, RecursionError) as e:
                self._report(SettingsError.VALIDATE_FAILED, e, str(self.temp_file_path))
                self._remove_quietly(self.temp_file_path)
                return False

            try:
                os.replace(self.temp_file_path, self.settings_file_path)
            except OSError as e:
                self._report(SettingsError.WRITE_FAILED, e, str(self.settings_file_path))
                self._remove_quietly(self.temp_file_path)
                return False

            logger.debug(f"Saved settings to {self.settings_file_path}")
            return True

    def migrate_old_settings(self):
        """
        Copy legacy settings from the install directory, if needed.

        No-op when the settings file already exists or there is no
        legacy file. An existing settings file is never overwritten.
        """
        with self._lock:
            self._migrate_locked()

    def log_error(self, message: str, cause: Optional[BaseException] = None):
        """
        Append a timestamped line to the error log.

        Args:
            message: Text to record
            cause: Optional exception whose type, message and traceback
                are appended
        """
        try:
            exc_info = None
            if cause is not None:
                exc_info = (type(cause), cause, cause.__traceback__)
            self._error_log.error(message, exc_info=exc_info)
            logger.error(f"{message}: {cause}" if cause is not None else message)
        except Exception:
            pass

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _migrate_locked(self):
        if os.path.exists(self.settings_file_path) or not os.path.isfile(self.old_settings_path):
            return

        if not self.ensure_directory():
            return

        created = False
        try:
            with open(self.old_settings_path, 'rb') as src:
                # 'x' fails if the settings file appeared in the meantime
                with open(self.settings_file_path, 'xb') as dst:
                    created = True
                    shutil.copyfileobj(src, dst)
        except FileExistsError:
            return
        except OSError as e:
            self._report(
                SettingsError.MIGRATION_COPY_FAILED, e,
                f"{self.old_settings_path} -> {self.settings_file_path}",
            )
            if created:
                self._remove_quietly(self.settings_file_path)
            return

        try:
            json.loads(self.settings_file_path.read_text(encoding='utf-8-sig'))
        except (OSError, ValueError, RecursionError) as e:
            self._report(SettingsError.MIGRATION_VALIDATE_FAILED, e, str(self.old_settings_path))
            self._remove_quietly(self.settings_file_path)
            return

        logger.info(f"Migrated settings from {self.old_settings_path} to {self.settings_file_path}")

    @staticmethod
    def _serialize(value: Any) -> str:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            value = dataclasses.asdict(value)
        return json.dumps(value, indent=2)

    def _report(self, kind: SettingsError, cause: Optional[BaseException] = None, detail: str = ""):
        message = f"{kind.value}: {detail}" if detail else kind.value
        self.log_error(message, cause)

    def _remove_quietly(self, path: Path):
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.log_error(f"Failed to remove {path}", e)


def _deep_update(base: dict, updates: dict):
    """
    Recursively update base dict with values from updates dict.

    Args:
        base: Dictionary to update
        updates: Dictionary with new values
    """
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value


def _decode(data: Any, default_factory: Callable[[], T]) -> T:
    """
    Build a record from decoded JSON on top of a fresh default.

    Dataclass fields are converted back by their annotations, so nested
    dataclasses and tuples survive a round trip. Unknown keys are
    ignored; missing keys keep their default values.
    """
    result = default_factory()
    if data is None:
        return result
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

    if isinstance(result, dict):
        _deep_update(result, data)
        return result

    if dataclasses.is_dataclass(result) and not isinstance(result, type):
        return _apply_fields(result, data)

    raise TypeError(f"Unsupported settings type: {type(result).__name__}")


def _field_hints(cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        return {f.name: f.type for f in dataclasses.fields(cls)}


def _matched_fields(cls: type, data: dict):
    """
    Yield (field name, JSON value) for keys naming an init field of ``cls``.

    Keys also match ignoring case and underscores, so "BlockedScreenIndex"
    fills ``blocked_screen_index``. An exact key wins over a loose one.
    """
    names = {f.name for f in dataclasses.fields(cls) if f.init}
    loose = {name.replace('_', '').lower(): name for name in names}
    for key, value in data.items():
        if key in names:
            yield key, value
            continue
        name = loose.get(str(key).replace('_', '').lower())
        if name is not None and name not in data:
            yield name, value


def _apply_fields(instance: Any, data: dict) -> Any:
    """Copy of a dataclass instance with fields replaced from ``data``."""
    hints = _field_hints(type(instance))
    updates = {
        name: _convert(value, hints.get(name, Any), getattr(instance, name, None))
        for name, value in _matched_fields(type(instance), data)
    }
    return dataclasses.replace(instance, **updates)


def _build(cls: type, data: dict) -> Any:
    """Construct a nested dataclass that has no default instance to update."""
    hints = _field_hints(cls)
    return cls(**{
        name: _convert(value, hints.get(name, Any))
        for name, value in _matched_fields(cls, data)
    })


def _unwrap_optional(hint: Any) -> Any:
    if get_origin(hint) is Union:
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _convert(value: Any, hint: Any, current: Any = None) -> Any:
    """Turn a decoded JSON value back into the annotated field type."""
    hint = _unwrap_optional(hint)
    origin = get_origin(hint)
    args = get_args(hint)

    if isinstance(value, dict):
        if dataclasses.is_dataclass(current) and not isinstance(current, type):
            return _apply_fields(current, value)
        if isinstance(hint, type) and dataclasses.is_dataclass(hint):
            return _build(hint, value)
        if origin is dict and len(args) == 2:
            return {k: _convert(v, args[1]) for k, v in value.items()}
        return value

    if isinstance(value, list):
        if hint is tuple or origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(_convert(v, args[0]) for v in value)
            if args and len(args) == len(value):
                return tuple(_convert(v, a) for v, a in zip(value, args))
            return tuple(value)
        if origin is list and args:
            return [_convert(v, args[0]) for v in value]

    return value
