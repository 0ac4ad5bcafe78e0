"""Settings and configuration management for Light Tracker."""

import json
import os
import logging
from typing import Dict, List, Any, Union
from dataclasses import dataclass, asdict, fields

from .brightness_localizer import DEFAULT_GRID_SIZE
from .exceptions import InvalidSettingError, SettingsLoadError, SettingsSaveError
from .frame_scheduler import DEFAULT_FRAME_INTERVAL_MS
from .frame_source import DEFAULT_CAMERA_INDEX
from .overlay_renderer import OVERLAY_STYLES
from ..models.result_history import DEFAULT_HISTORY_SIZE

# Constants
DEFAULT_SETTINGS_FILE = "light_tracker_settings.json"
VALID_THEMES = ["dark", "light"]
GEOMETRY_KEYS = ("x", "y", "width", "height")


def is_valid_geometry(geometry: Any) -> bool:
    """True for an empty geometry or one with integer x, y, width and height."""
    if not isinstance(geometry, dict):
        return False
    if not geometry:
        return True
    return all(isinstance(geometry.get(key), int) and not isinstance(geometry.get(key), bool)
               for key in GEOMETRY_KEYS)


@dataclass
class AppSettings:
    """Application settings data structure."""

    # Analysis settings
    grid_size: int = DEFAULT_GRID_SIZE

    # Capture settings
    video_source: Union[int, str] = DEFAULT_CAMERA_INDEX
    mirror: bool = True
    frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS

    # Overlay preferences
    overlay_style: str = "markers"
    show_angle_label: bool = True
    show_grid: bool = False

    # Recording
    history_size: int = DEFAULT_HISTORY_SIZE
    last_export_directory: str = ""

    # Window settings
    theme: str = "dark"
    window_geometry: Dict[str, int] = None

    def __post_init__(self):
        """Initialize default values for mutable fields."""
        self.normalize()

    def normalize(self):
        """Drop a window geometry that cannot be applied to a window."""
        if not is_valid_geometry(self.window_geometry):
            if self.window_geometry:
                logging.warning(f"Ignoring invalid window geometry: {self.window_geometry}")
            self.window_geometry = {}


class SettingsManager:
    """Manages application settings and configuration."""

    def __init__(self, settings_file: str = DEFAULT_SETTINGS_FILE):
        self.settings_file = settings_file
        self.settings = AppSettings()
        self._load_settings()

    def _load_settings(self):
        """Load settings from file; unreadable files fall back to defaults."""
        try:
            if os.path.exists(self.settings_file):
                with open(self.settings_file, 'r') as f:
                    data = json.load(f)

                if not isinstance(data, dict):
                    raise ValueError("settings file does not contain an object")

                for key, value in data.items():
                    if hasattr(self.settings, key):
                        setattr(self.settings, key, value)

                self.settings.normalize()

                logging.info(f"Settings loaded from {self.settings_file}")
            else:
                logging.info("No settings file found, using defaults")

        except (OSError, ValueError) as e:
            logging.warning(str(SettingsLoadError(self.settings_file, e)))
            self.settings = AppSettings()

    def save_settings(self) -> bool:
        """Save current settings to file."""
        try:
            with open(self.settings_file, 'w') as f:
                json.dump(asdict(self.settings), f, indent=2)

            logging.info(f"Settings saved to {self.settings_file}")
            return True

        except (OSError, TypeError) as e:
            logging.warning(str(SettingsSaveError(self.settings_file, e)))
            return False

    def get_window_geometry(self) -> Dict[str, int]:
        """Get window geometry settings."""
        geometry = self.settings.window_geometry
        return dict(geometry) if is_valid_geometry(geometry) else {}

    def set_window_geometry(self, x: int, y: int, width: int, height: int):
        """Set window geometry settings."""
        self.settings.window_geometry = {
            'x': x, 'y': y, 'width': width, 'height': height
        }

    def get_capture_settings(self) -> Dict[str, Any]:
        """Get frame source parameters."""
        return {
            'video_source': self.settings.video_source,
            'mirror': self.settings.mirror,
            'frame_interval_ms': self.settings.frame_interval_ms
        }

    def get_overlay_preferences(self) -> Dict[str, Any]:
        """Get overlay rendering preferences."""
        return {
            'style': self.settings.overlay_style,
            'show_angle_label': self.settings.show_angle_label,
            'show_grid': self.settings.show_grid
        }

    def set_overlay_preferences(self, **kwargs):
        """Set overlay rendering preferences."""
        if 'style' in kwargs:
            self.settings.overlay_style = kwargs['style']
        if 'show_angle_label' in kwargs:
            self.settings.show_angle_label = kwargs['show_angle_label']
        if 'show_grid' in kwargs:
            self.settings.show_grid = kwargs['show_grid']

        self.save_settings()

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self.settings = AppSettings()
        self.save_settings()
        logging.info("Settings reset to defaults")

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a specific setting value."""
        return getattr(self.settings, key, default)

    def set_setting(self, key: str, value: Any):
        """
        Set a specific setting value.

        Raises:
            InvalidSettingError: for an unknown setting name
        """
        if not hasattr(self.settings, key):
            raise InvalidSettingError(key, value, [f.name for f in fields(AppSettings)])

        setattr(self.settings, key, value)
        self.save_settings()

    def validate_settings(self) -> List[str]:
        """Validate current settings and return list of issues."""
        issues = []

        def _positive_int(value: Any) -> bool:
            return isinstance(value, int) and not isinstance(value, bool) and value >= 1

        if not _positive_int(self.settings.grid_size):
            issues.append("Grid size must be a positive integer")

        if not _positive_int(self.settings.frame_interval_ms):
            issues.append("Frame interval must be at least 1 ms")

        if not _positive_int(self.settings.history_size):
            issues.append("History size must be at least 1")

        if isinstance(self.settings.video_source, bool) or \
                not isinstance(self.settings.video_source, (int, str)):
            issues.append(f"Invalid video source: {self.settings.video_source}")
        elif isinstance(self.settings.video_source, int) and self.settings.video_source < 0:
            issues.append("Camera index cannot be negative")

        if self.settings.overlay_style not in OVERLAY_STYLES:
            issues.append(f"Invalid overlay style: {self.settings.overlay_style}")

        if self.settings.theme not in VALID_THEMES:
            issues.append(f"Invalid theme: {self.settings.theme}")

        if not is_valid_geometry(self.settings.window_geometry):
            issues.append(f"Invalid window geometry: {self.settings.window_geometry}")

        return issues
