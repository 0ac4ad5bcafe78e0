"""Angle and transform helpers for light direction analysis."""

import math
from typing import Iterable, Sequence, Tuple

import numpy as np

FULL_TURN_DEGREES = 360.0


def normalize_angle_degrees(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    if angle < 0:
        angle += FULL_TURN_DEGREES
    if angle >= FULL_TURN_DEGREES:
        angle -= FULL_TURN_DEGREES
    # Collapse -0.0 so callers never see a negative zero
    return angle + 0.0


def direction_angle(dx: float, dy: float) -> float:
    """
    Direction of the vector (dx, dy) in degrees, in [0, 360).

    0 degrees is the +X axis. Angles follow atan2 on the coordinates as given,
    so on a screen (y pointing down) they increase clockwise.
    """
    return normalize_angle_degrees(math.degrees(math.atan2(dy, dx)))


def direction_transform(center: Tuple[float, float], angle_degrees: float) -> np.ndarray:
    """
    Build a 2x3 affine matrix that rotates by angle_degrees and then
    translates the origin to center.

    Applying it to (1, 0) yields the unit step from center toward the
    analysed direction.
    """
    theta = math.radians(angle_degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    cx, cy = center
    return np.array([
        [cos_t, -sin_t, cx],
        [sin_t, cos_t, cy],
    ], dtype=np.float64)


def apply_transform(transform: np.ndarray, points: Sequence[Tuple[float, float]]) -> np.ndarray:
    """Apply a 2x3 affine transform to a list of (x, y) points."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return pts @ transform[:, :2].T + transform[:, 2]


def circular_mean_degrees(angles: Iterable[float]) -> float:
    """Mean direction of a set of angles in degrees; 0.0 for an empty set."""
    values = np.radians(np.asarray(list(angles), dtype=np.float64))
    if values.size == 0:
        return 0.0

    mean = math.degrees(math.atan2(float(np.sin(values).mean()), float(np.cos(values).mean())))
    return normalize_angle_degrees(mean)
