"""Color conversion and luminance utilities."""

import cv2
import numpy as np

# Constants
LUMA_WEIGHTS = (0.299, 0.587, 0.114)  # Rec. 601 weights for R, G, B
RGBA_CHANNELS = 4


def calculate_luma(rgba: np.ndarray) -> np.ndarray:
    """
    Calculate per-pixel perceptual brightness of an RGBA (or RGB) array.

    The last axis holds the channels in R, G, B(, A) order; alpha is ignored.
    Returns a float64 array with the channel axis removed.
    """
    return pixel_luma(rgba[..., 0].astype(np.float64),
                      rgba[..., 1].astype(np.float64),
                      rgba[..., 2].astype(np.float64))


def pixel_luma(r, g, b):
    """Perceptual brightness of a pixel; works on scalars and numpy arrays alike."""
    return r * LUMA_WEIGHTS[0] + g * LUMA_WEIGHTS[1] + b * LUMA_WEIGHTS[2]


def bgr_to_rgba(frame: np.ndarray) -> np.ndarray:
    """Convert an OpenCV BGR frame to RGBA with an opaque alpha channel."""
    return cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)


def mirror_horizontal(frame: np.ndarray) -> np.ndarray:
    """Flip a frame around its vertical axis (selfie view)."""
    return cv2.flip(frame, 1)
