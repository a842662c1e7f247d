"""
Settings manager for the illustration library.

Uses QSettings for persistent storage. Keys use dot notation
('visibility.margin_px'); defaults are installed on first run.
"""
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from PySide6.QtCore import QObject, QSettings, Signal

from core.constants.timing import (
    ANIMATION_DEFAULT_FPS,
    VISIBILITY_DEFAULT_MARGIN_PX,
    VISIBILITY_DEFAULT_THRESHOLD,
)
from core.logging.logger import get_logger, is_verbose_logging, set_perf_metrics_enabled

logger = get_logger('SettingsManager')


DEFAULT_SETTINGS: Dict[str, Any] = {
    # Animation clock
    'animation.fps': ANIMATION_DEFAULT_FPS,
    'animation.default_easing': 'productive',

    # Visibility trigger; views may override per scene
    'visibility.margin_px': VISIBILITY_DEFAULT_MARGIN_PX,
    'visibility.threshold': VISIBILITY_DEFAULT_THRESHOLD,

    # Diagnostics
    'diagnostics.perf_metrics': True,
}


class SettingsManager(QObject):
    """
    Centralized settings management.

    Thread-safe with change notifications via Qt signal and per-key handlers.
    """

    # Signal emitted when settings change
    settings_changed = Signal(str, object)  # key, new_value

    def __init__(self, organization: str = "LessonIllustrations",
                 application: str = "Illustrations",
                 path: Optional[Union[str, Path]] = None):
        """
        Initialize the settings manager.

        Args:
            organization: Organization name for QSettings
            application: Application name for QSettings
            path: Optional INI file; when given the native store is bypassed
        """
        super().__init__()

        if path is not None:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)
        self._organization = organization
        self._application = application
        self._lock = threading.RLock()
        self._change_handlers: Dict[str, List[Callable[[Any, Any], None]]] = {}

        self._set_defaults()
        set_perf_metrics_enabled(self.get_bool('diagnostics.perf_metrics', True))

        logger.info("SettingsManager initialized")

    def _set_defaults(self) -> None:
        """Set default values if not already present."""
        with self._lock:
            for key, value in DEFAULT_SETTINGS.items():
                if not self._settings.contains(key):
                    self._settings.setValue(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value.

        Args:
            key: Setting key in dot notation (e.g., 'animation.fps')
            default: Default value if key not found
        """
        with self._lock:
            return self._settings.value(key, default)

    @staticmethod
    def to_bool(value: Any, default: bool = False) -> bool:
        """Normalize a stored setting value to bool.

        QSettings round-trips booleans as strings for INI storage, so
        "true"/"1"/"yes"/"on" and their negatives are accepted.
        """
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            v = value.strip().lower()
            if v in ("true", "1", "yes", "on"):
                return True
            if v in ("false", "0", "no", "off"):
                return False
            return default
        if value is None:
            return default
        return bool(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.to_bool(self.get(key, default), default)

    def get_int(self, key: str, default: int = 0) -> int:
        try:
            return int(float(self.get(key, default)))
        except (TypeError, ValueError):
            logger.warning("Setting %s is not an int, using %r", key, default)
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        try:
            return float(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Setting %s is not a float, using %r", key, default)
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a setting value and notify listeners.

        Handlers that raise are logged and do not block other handlers.
        """
        with self._lock:
            old_value = self._settings.value(key)
            self._settings.setValue(key, value)
            handlers = list(self._change_handlers.get(key, []))

        self.settings_changed.emit(key, value)
        for handler in handlers:
            try:
                handler(value, old_value)
            except Exception as e:
                logger.error(f"Error in change handler for {key}: {e}")

        if key == 'diagnostics.perf_metrics':
            set_perf_metrics_enabled(self.to_bool(value, True))

        if is_verbose_logging():
            logger.debug("Setting changed: %s: %r -> %r", key, old_value, value)
        else:
            logger.debug("Setting changed: %s", key)

    def on_changed(self, key: str, handler: Callable[[Any, Any], None]) -> None:
        """
        Register a handler for when a specific setting changes.

        Args:
            key: Setting key to watch
            handler: Callback function(new_value, old_value)
        """
        with self._lock:
            self._change_handlers.setdefault(key, []).append(handler)

    def save(self) -> None:
        """Force save settings to persistent storage."""
        with self._lock:
            self._settings.sync()

    def reset_to_defaults(self) -> None:
        """Drop every stored value and reinstall DEFAULT_SETTINGS."""
        with self._lock:
            self._settings.clear()
            self._set_defaults()
            self._settings.sync()
        set_perf_metrics_enabled(True)
        logger.info("Settings reset to defaults")
        self.settings_changed.emit('*', None)

    def get_all_keys(self) -> List[str]:
        with self._lock:
            return self._settings.allKeys()

    def contains(self, key: str) -> bool:
        with self._lock:
            return self._settings.contains(key)

    def clear(self) -> None:
        """Clear all settings (use with caution)."""
        with self._lock:
            self._settings.clear()
        logger.warning("All settings cleared")
