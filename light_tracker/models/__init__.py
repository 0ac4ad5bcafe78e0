"""Data models for Light Tracker."""

from .analysis_result import AnalysisResult
from .frame_data import FrameData
from .result_history import ResultHistory

__all__ = [
    "AnalysisResult",
    "FrameData",
    "ResultHistory"
]
