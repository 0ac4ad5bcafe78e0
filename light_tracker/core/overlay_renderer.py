"""Light direction overlay rendering, separated from analysis."""

import cv2
import numpy as np
from typing import Optional, Tuple
import logging

from ..models.analysis_result import AnalysisResult
from ..utils.math_utils import apply_transform, direction_transform

# Rendering constants (BGR colors)
CENTER_MARKER_RADIUS = 10
CENTER_MARKER_COLOR = (0, 0, 255)
BRIGHT_MARKER_COLOR = (0, 255, 255)
BRIGHT_MARKER_REFERENCE = 200
MIN_BRIGHT_MARKER_RADIUS = 2
MARKER_ALPHA = 0.4
DIRECTION_LINE_COLOR = (0, 255, 0)
DIRECTION_LINE_ALPHA = 0.7
DIRECTION_LINE_THICKNESS = 3
INDICATOR_LENGTH = 400
INDICATOR_WIDTH = 20
INDICATOR_INTENSITY = 0.5
BORDER_PADDING = 10
BORDER_WIDTH = 15
BORDER_RADIUS = 10
BORDER_ALPHA = 0.3
GRID_LINE_COLOR = (80, 80, 80)
LABEL_COLOR = (255, 255, 255)
LABEL_FONT_SCALE = 0.7
LABEL_THICKNESS = 2
LABEL_OFFSET = 20

OVERLAY_STYLES = ("markers", "beam")


def _blend(frame: np.ndarray, layer: np.ndarray, alpha: float):
    """Blend a drawn layer into frame in place wherever the layer differs from frame."""
    mask = np.any(layer != frame, axis=2)
    if not np.any(mask):
        return
    blended = cv2.addWeighted(layer, alpha, frame, 1.0 - alpha, 0)
    frame[mask] = blended[mask]


def _to_point(x: float, y: float) -> Tuple[int, int]:
    return int(round(x)), int(round(y))


def draw_direction_indicator(frame: np.ndarray, transform: np.ndarray,
                             length: int = INDICATOR_LENGTH, width: int = INDICATOR_WIDTH,
                             intensity: float = INDICATOR_INTENSITY):
    """
    Draw a light beam from the transform's origin along its +X axis.

    The beam is the rectangle (0, 0)-(length, width) in indicator space,
    mapped to the frame through the 2x3 transform and added to the frame
    with saturating (lighter) blending.
    """
    corners = [(0, 0), (length, 0), (length, width), (0, width)]
    polygon = np.round(apply_transform(transform, corners)).astype(np.int32)

    layer = np.zeros_like(frame)
    value = int(round(255 * intensity))
    cv2.fillPoly(layer, [polygon], (value, value, value))
    cv2.add(frame, layer, dst=frame)


def draw_rounded_rectangle(frame: np.ndarray, top_left: Tuple[int, int],
                           bottom_right: Tuple[int, int], radius: int,
                           color: Tuple[int, int, int], thickness: int):
    """Draw the outline of a rectangle with rounded corners."""
    x1, y1 = top_left
    x2, y2 = bottom_right
    radius = max(0, min(radius, (x2 - x1) // 2, (y2 - y1) // 2))

    cv2.line(frame, (x1 + radius, y1), (x2 - radius, y1), color, thickness)
    cv2.line(frame, (x1 + radius, y2), (x2 - radius, y2), color, thickness)
    cv2.line(frame, (x1, y1 + radius), (x1, y2 - radius), color, thickness)
    cv2.line(frame, (x2, y1 + radius), (x2, y2 - radius), color, thickness)

    if radius > 0:
        axes = (radius, radius)
        cv2.ellipse(frame, (x1 + radius, y1 + radius), axes, 180, 0, 90, color, thickness)
        cv2.ellipse(frame, (x2 - radius, y1 + radius), axes, 270, 0, 90, color, thickness)
        cv2.ellipse(frame, (x2 - radius, y2 - radius), axes, 0, 0, 90, color, thickness)
        cv2.ellipse(frame, (x1 + radius, y2 - radius), axes, 90, 0, 90, color, thickness)


class OverlayRenderer:
    """Draws the light direction overlay on BGR frames."""

    def __init__(self, style: str = "markers", show_angle_label: bool = True,
                 show_grid: bool = False):
        self.style = style
        self.show_angle_label = show_angle_label
        self.show_grid = show_grid
        self.font = cv2.FONT_HERSHEY_SIMPLEX

    def set_rendering_options(self, style: Optional[str] = None,
                              show_angle_label: Optional[bool] = None,
                              show_grid: Optional[bool] = None):
        """Configure rendering options; None leaves an option unchanged."""
        if style is not None:
            if style not in OVERLAY_STYLES:
                raise ValueError(f"Unknown overlay style: {style}")
            self.style = style
        if show_angle_label is not None:
            self.show_angle_label = show_angle_label
        if show_grid is not None:
            self.show_grid = show_grid
        logging.debug(f"Overlay options updated: style={self.style}, "
                      f"label={self.show_angle_label}, grid={self.show_grid}")

    def render(self, frame: np.ndarray, result: AnalysisResult,
               grid_size: Optional[int] = None) -> np.ndarray:
        """
        Render the overlay for one analysis result.

        Args:
            frame: BGR frame the result was computed from (not modified)
            result: Analysis result to visualise
            grid_size: Cells per axis, needed only when the grid is shown

        Returns:
            A new frame with the overlay drawn on it
        """
        if frame is None:
            return frame

        rendered = frame.copy()

        if self.show_grid and grid_size:
            self._render_grid(rendered, grid_size)

        if self.style == "beam":
            self._render_border(rendered)
            transform = direction_transform(result.center, result.angle_degrees)
            draw_direction_indicator(rendered, transform)
        else:
            self._render_markers(rendered, result)

        if self.show_angle_label:
            self._render_angle_label(rendered, result)

        return rendered

    def _render_markers(self, frame: np.ndarray, result: AnalysisResult):
        """Center dot, brightest-cell disc and the line joining them."""
        center = _to_point(result.center_x, result.center_y)
        brightest = _to_point(result.brightest_x, result.brightest_y)

        layer = frame.copy()
        cv2.circle(layer, center, CENTER_MARKER_RADIUS, CENTER_MARKER_COLOR, -1)
        _blend(frame, layer, MARKER_ALPHA)

        # Disc size follows how far the peak is from the reference brightness
        radius = max(MIN_BRIGHT_MARKER_RADIUS,
                     int(round(abs(result.max_brightness - BRIGHT_MARKER_REFERENCE))))
        layer = frame.copy()
        cv2.circle(layer, brightest, radius, BRIGHT_MARKER_COLOR, -1)
        _blend(frame, layer, MARKER_ALPHA)

        layer = frame.copy()
        cv2.line(layer, center, brightest, DIRECTION_LINE_COLOR, DIRECTION_LINE_THICKNESS)
        _blend(frame, layer, DIRECTION_LINE_ALPHA)

    def _render_border(self, frame: np.ndarray):
        """Translucent rounded frame just inside the image edge."""
        height, width = frame.shape[:2]
        if width <= 2 * BORDER_PADDING or height <= 2 * BORDER_PADDING:
            return

        layer = frame.copy()
        draw_rounded_rectangle(layer, (BORDER_PADDING, BORDER_PADDING),
                               (width - BORDER_PADDING, height - BORDER_PADDING),
                               BORDER_RADIUS, (255, 255, 255), BORDER_WIDTH)
        _blend(frame, layer, BORDER_ALPHA)

        inset = BORDER_PADDING + BORDER_WIDTH // 2
        draw_rounded_rectangle(frame, (inset, inset), (width - inset, height - inset),
                               BORDER_RADIUS, (0, 0, 0), 1)

    def _render_grid(self, frame: np.ndarray, grid_size: int):
        """Thin lines marking the analysis cells."""
        height, width = frame.shape[:2]
        block_w = width // grid_size
        block_h = height // grid_size
        if block_w == 0 or block_h == 0:
            return

        for i in range(1, grid_size):
            cv2.line(frame, (i * block_w, 0), (i * block_w, block_h * grid_size), GRID_LINE_COLOR, 1)
            cv2.line(frame, (0, i * block_h), (block_w * grid_size, i * block_h), GRID_LINE_COLOR, 1)

    def _render_angle_label(self, frame: np.ndarray, result: AnalysisResult):
        """Angle text centered just above the frame center."""
        label = f"{result.angle_degrees:.1f} deg"
        (text_w, _), _ = cv2.getTextSize(label, self.font, LABEL_FONT_SCALE, LABEL_THICKNESS)
        origin = _to_point(result.center_x - text_w / 2, result.center_y - LABEL_OFFSET)
        cv2.putText(frame, label, origin, self.font, LABEL_FONT_SCALE, LABEL_COLOR,
                    LABEL_THICKNESS, cv2.LINE_AA)
