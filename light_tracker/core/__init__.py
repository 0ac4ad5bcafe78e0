"""Core business logic modules for Light Tracker."""

from .brightness_localizer import BrightnessLocalizer, analyze, cell_luminance_grid
from .frame_source import CameraFrameSource, prepare_frame
from .overlay_renderer import OverlayRenderer
from .detection_session import DetectionSession
from .settings_manager import SettingsManager

__all__ = [
    "BrightnessLocalizer",
    "analyze",
    "cell_luminance_grid",
    "CameraFrameSource",
    "prepare_frame",
    "OverlayRenderer",
    "DetectionSession",
    "SettingsManager"
]
