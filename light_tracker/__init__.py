"""
Light Tracker - camera-based light direction estimation

Splits each camera frame into a grid, finds the brightest cell and reports
the direction of the light source relative to the frame center.
"""

__version__ = "1.0.0"

from .core.brightness_localizer import BrightnessLocalizer, analyze
from .core.detection_session import DetectionSession
from .core.settings_manager import SettingsManager
from .models.analysis_result import AnalysisResult

__all__ = [
    "BrightnessLocalizer",
    "analyze",
    "DetectionSession",
    "SettingsManager",
    "AnalysisResult"
]
