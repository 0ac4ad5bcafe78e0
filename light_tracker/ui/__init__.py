"""User interface components for Light Tracker."""

from .main_window import MainWindow
from .video_widget import VideoDisplayLabel

__all__ = [
    "MainWindow",
    "VideoDisplayLabel"
]
