"""Utility modules for Light Tracker."""

from .color_utils import calculate_luma, bgr_to_rgba, mirror_horizontal
from .math_utils import direction_angle, direction_transform, normalize_angle_degrees

__all__ = [
    "calculate_luma",
    "bgr_to_rgba",
    "mirror_horizontal",
    "direction_angle",
    "direction_transform",
    "normalize_angle_degrees"
]
