"""Grid-based brightness localization for Light Tracker."""

import logging
from typing import Any, Tuple

import numpy as np

from ..models.analysis_result import AnalysisResult
from ..models.frame_data import FrameData
from ..utils.color_utils import calculate_luma, RGBA_CHANNELS
from ..utils.math_utils import direction_angle
from .exceptions import InvalidDimensionsError, InvalidSettingError

# Constants
DEFAULT_GRID_SIZE = 10
FINE_GRID_SIZE = 50


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value > 0


def _as_pixel_array(buffer: Any) -> np.ndarray:
    """View any supported pixel buffer as a flat uint8 array without copying when possible."""
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return np.frombuffer(buffer, dtype=np.uint8)

    array = np.asarray(buffer)
    if array.dtype != np.uint8:
        if array.dtype.kind == "f" and not np.array_equal(array, np.floor(array)):
            raise ValueError("pixel values must be whole numbers")
        if array.size and (array.min() < 0 or array.max() > 255):
            raise ValueError("pixel values must be in [0, 255]")
        array = array.astype(np.uint8)
    return array.reshape(-1)


def validate_buffer(buffer: Any, width: int, height: int, grid_size: int) -> np.ndarray:
    """
    Check the analysis preconditions and return the buffer as a flat uint8 array.

    Raises:
        InvalidDimensionsError: if width, height or grid_size is not a positive
            integer, or the buffer length is not width * height * 4.
    """
    for name, value in (('width', width), ('height', height), ('grid_size', grid_size)):
        if not _is_positive_int(value):
            raise InvalidDimensionsError(width, height, grid_size, None,
                                         f"{name} must be a positive integer")

    try:
        pixels = _as_pixel_array(buffer)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidDimensionsError(width, height, grid_size, None,
                                     f"buffer is not a sequence of 8-bit values ({e})")

    expected = width * height * RGBA_CHANNELS
    if pixels.size != expected:
        raise InvalidDimensionsError(width, height, grid_size, int(pixels.size),
                                     f"buffer length must be {expected}")
    return pixels


def block_size(width: int, height: int, grid_size: int) -> Tuple[int, int]:
    """Cell footprint (block_width, block_height); either may be 0 for tiny frames."""
    return width // grid_size, height // grid_size


def covered_region(width: int, height: int, grid_size: int) -> Tuple[int, int]:
    """
    Width and height of the area claimed by grid cells.

    Trailing columns and rows beyond the last full block belong to no cell.
    """
    block_w, block_h = block_size(width, height, grid_size)
    return block_w * grid_size, block_h * grid_size


def cell_luminance_grid(buffer: Any, width: int, height: int, grid_size: int) -> np.ndarray:
    """
    Average luminance of every grid cell as a (grid_size, grid_size) array
    indexed [cell_y, cell_x]. Cells that contain no pixel are 0.
    """
    pixels = validate_buffer(buffer, width, height, grid_size)
    block_w, block_h = block_size(width, height, grid_size)
    if block_w == 0 or block_h == 0:
        return np.zeros((grid_size, grid_size), dtype=np.float64)

    rgba = pixels.reshape(height, width, RGBA_CHANNELS)
    covered_w, covered_h = covered_region(width, height, grid_size)
    luma = calculate_luma(rgba[:covered_h, :covered_w])

    cells = luma.reshape(grid_size, block_h, grid_size, block_w)
    return cells.sum(axis=(1, 3)) / float(block_w * block_h)


def analyze(buffer: Any, width: int, height: int, grid_size: int = DEFAULT_GRID_SIZE) -> AnalysisResult:
    """
    Locate the brightest grid cell of an RGBA frame.

    The frame is split into grid_size x grid_size cells of
    floor(width / grid_size) x floor(height / grid_size) pixels. The cell
    with the strictly highest average luma wins; on ties the first cell in
    row-major order (y outer, x inner) is kept. A cell must be brighter than
    zero to be selected, so an all-black frame (or a grid finer than the
    frame) reports the brightest point at (0, 0) with brightness 0.

    Args:
        buffer: Row-major RGBA pixel buffer of length width * height * 4
        width: Frame width in pixels
        height: Frame height in pixels
        grid_size: Number of cells per axis

    Returns:
        AnalysisResult with the brightest cell center, the frame center and
        the direction angle from center to the brightest cell in [0, 360)
    """
    cells = cell_luminance_grid(buffer, width, height, grid_size)
    block_w, block_h = block_size(width, height, grid_size)

    brightest_x = 0.0
    brightest_y = 0.0
    max_brightness = 0.0

    # argmax returns the first occurrence, matching row-major tie-breaking
    flat_index = int(np.argmax(cells))
    peak = float(cells.flat[flat_index])
    if peak > max_brightness:
        cell_y, cell_x = divmod(flat_index, grid_size)
        max_brightness = peak
        brightest_x = cell_x * block_w + block_w / 2
        brightest_y = cell_y * block_h + block_h / 2

    center_x = width / 2
    center_y = height / 2
    angle = direction_angle(brightest_x - center_x, brightest_y - center_y)

    return AnalysisResult(
        brightest_x=brightest_x,
        brightest_y=brightest_y,
        center_x=center_x,
        center_y=center_y,
        angle_degrees=angle,
        max_brightness=max_brightness
    )


class BrightnessLocalizer:
    """Configured brightness analysis engine; grid size trades precision for noise robustness."""

    def __init__(self, grid_size: int = DEFAULT_GRID_SIZE):
        self.grid_size = DEFAULT_GRID_SIZE
        self.set_grid_size(grid_size)
        self.frames_analyzed = 0

    def set_grid_size(self, grid_size: int):
        """Change the number of cells per axis."""
        if not _is_positive_int(grid_size):
            raise InvalidSettingError('grid_size', grid_size)
        self.grid_size = int(grid_size)
        logging.debug(f"Brightness localizer grid size set to {self.grid_size}")

    def analyze(self, buffer: Any, width: int, height: int) -> AnalysisResult:
        """Analyze a raw RGBA buffer with the configured grid size."""
        result = analyze(buffer, width, height, self.grid_size)
        self.frames_analyzed += 1
        return result

    def analyze_frame(self, frame: FrameData) -> AnalysisResult:
        """Analyze a captured frame."""
        return self.analyze(frame.pixels, frame.width, frame.height)
