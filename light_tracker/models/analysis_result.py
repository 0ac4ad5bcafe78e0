"""Analysis result data model."""

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class AnalysisResult:
    """Brightest grid cell of one frame and its direction from the frame center."""

    brightest_x: float
    brightest_y: float
    center_x: float
    center_y: float
    angle_degrees: float
    max_brightness: float

    @property
    def dx(self) -> float:
        """Horizontal offset from frame center to brightest cell."""
        return self.brightest_x - self.center_x

    @property
    def dy(self) -> float:
        """Vertical offset (screen coordinates, +Y down)."""
        return self.brightest_y - self.center_y

    @property
    def brightest_point(self) -> tuple:
        return (self.brightest_x, self.brightest_y)

    @property
    def center(self) -> tuple:
        return (self.center_x, self.center_y)

    def status_text(self) -> str:
        """Human-readable one-line summary shown under the video."""
        return f"Light direction: {self.angle_degrees:.1f}° | Brightness: {self.max_brightness:.1f}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisResult':
        """Create AnalysisResult from dictionary."""
        return cls(
            brightest_x=float(data['brightest_x']),
            brightest_y=float(data['brightest_y']),
            center_x=float(data['center_x']),
            center_y=float(data['center_y']),
            angle_degrees=float(data['angle_degrees']),
            max_brightness=float(data['max_brightness'])
        )
