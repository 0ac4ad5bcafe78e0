"""Custom exception hierarchy for Light Tracker."""

from typing import Optional, Any, Union


class LightTrackerError(Exception):
    """Base exception for all Light Tracker errors."""

    def __init__(self, message: str, details: Optional[str] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.details:
            result += f"\nDetails: {self.details}"
        if self.cause:
            result += f"\nCaused by: {self.cause}"
        return result


# Capture errors
class CaptureError(LightTrackerError):
    """Base class for frame capture errors."""
    pass


class AcquisitionError(CaptureError):
    """Frame source could not be opened (no device, permission denied)."""

    def __init__(self, source: Union[int, str], reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Unable to access camera: {reason}",
            f"Source: {source}",
            cause
        )
        self.source = source
        self.reason = reason


class FrameReadError(CaptureError):
    """A frame could not be read from an open source."""

    def __init__(self, source: Union[int, str], frame_number: int):
        super().__init__(
            f"Failed to read frame from source {source}",
            f"Frames read before failure: {frame_number}"
        )
        self.source = source
        self.frame_number = frame_number


# Analysis errors
class AnalysisError(LightTrackerError):
    """Base class for analysis-related errors."""
    pass


class InvalidDimensionsError(AnalysisError):
    """Pixel buffer does not match the declared frame dimensions or grid."""

    def __init__(self, width: Any, height: Any, grid_size: Any,
                 buffer_length: Optional[int], reason: str):
        super().__init__(
            f"Invalid dimensions: {reason}",
            f"width={width}, height={height}, grid_size={grid_size}, buffer_length={buffer_length}"
        )
        self.width = width
        self.height = height
        self.grid_size = grid_size
        self.buffer_length = buffer_length
        self.reason = reason


# Settings and configuration errors
class SettingsError(LightTrackerError):
    """Base class for settings-related errors."""
    pass


class SettingsLoadError(SettingsError):
    """Error loading settings from file."""

    def __init__(self, file_path: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to load settings from: {file_path}",
            "Settings will be reset to defaults",
            cause
        )
        self.file_path = file_path


class SettingsSaveError(SettingsError):
    """Error saving settings to file."""

    def __init__(self, file_path: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to save settings to: {file_path}",
            "Settings changes may be lost",
            cause
        )
        self.file_path = file_path


class InvalidSettingError(SettingsError):
    """Invalid setting name or value."""

    def __init__(self, setting_name: str, value: Any, valid_values: Optional[list] = None):
        details = f"Value: {value}"
        if valid_values:
            details += f", Valid values: {valid_values}"

        super().__init__(
            f"Invalid setting: {setting_name}",
            details
        )
        self.setting_name = setting_name
        self.value = value
        self.valid_values = valid_values


# Export errors
class ExportError(LightTrackerError):
    """Error writing recorded results to disk."""

    def __init__(self, file_path: str, export_type: str, cause: Optional[Exception] = None,
                 details: Optional[str] = None):
        super().__init__(
            f"Failed to export {export_type}: {file_path}",
            details,
            cause
        )
        self.file_path = file_path
        self.export_type = export_type
