"""Captured frame data model."""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..utils.color_utils import RGBA_CHANNELS


@dataclass
class FrameData:
    """
    One captured frame ready for analysis.

    ``rgba`` holds the pixel buffer as an (height, width, 4) uint8 array in
    R, G, B, A order. ``bgr`` optionally keeps the same (already mirrored)
    frame in OpenCV channel order for display and overlay drawing.
    """

    rgba: np.ndarray
    bgr: Optional[np.ndarray] = None
    frame_number: int = 0
    timestamp: float = 0.0

    def __post_init__(self):
        if self.rgba.ndim != 3 or self.rgba.shape[2] != RGBA_CHANNELS:
            raise ValueError(f"Expected an (h, w, 4) RGBA array, got shape {self.rgba.shape}")

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    @property
    def frame_size(self) -> Tuple[int, int]:
        """Frame size as (width, height)."""
        return (self.width, self.height)

    @property
    def pixels(self) -> np.ndarray:
        """Flat row-major RGBA buffer of length width * height * 4."""
        return self.rgba.reshape(-1)
