"""Camera / video frame acquisition for Light Tracker."""

import cv2
import numpy as np
import logging
import time
from typing import Optional, Tuple, Union

from ..models.frame_data import FrameData
from ..utils.color_utils import bgr_to_rgba, mirror_horizontal
from .exceptions import AcquisitionError

# Constants
DEFAULT_CAMERA_INDEX = 0


def prepare_frame(bgr_frame: np.ndarray, mirror: bool = True,
                  frame_number: int = 0, timestamp: Optional[float] = None) -> FrameData:
    """
    Turn a raw BGR capture into an analysable frame.

    The frame is mirrored horizontally first (selfie view) so that analysis,
    display and overlay all share the same orientation.
    """
    view = mirror_horizontal(bgr_frame) if mirror else bgr_frame.copy()
    return FrameData(
        rgba=bgr_to_rgba(view),
        bgr=view,
        frame_number=frame_number,
        timestamp=time.time() if timestamp is None else timestamp
    )


class CameraFrameSource:
    """Wraps an OpenCV capture device (camera index or video path)."""

    def __init__(self, source: Union[int, str] = DEFAULT_CAMERA_INDEX, mirror: bool = True):
        self.source = source
        self.mirror = mirror
        self.cap: Optional[cv2.VideoCapture] = None
        self.frame_size: Tuple[int, int] = (0, 0)
        self.frames_read = 0

    def open(self):
        """
        Open the capture device.

        Raises:
            AcquisitionError: if the device does not exist, is busy or
                access is denied.
        """
        self.release()

        try:
            self.cap = cv2.VideoCapture(self.source)
        except cv2.error as e:
            self.cap = None
            raise AcquisitionError(self.source, str(e), e)

        if not self.cap.isOpened():
            self.release()
            raise AcquisitionError(self.source, "device could not be opened")

        width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.frame_size = (width, height)
        self.frames_read = 0

        logging.info(f"Frame source opened: {self.source} ({width}x{height})")

    def read_frame(self) -> Optional[FrameData]:
        """Read and prepare the next frame; None when no frame is available."""
        if not self.is_opened():
            return None

        ret, frame = self.cap.read()
        if not ret or frame is None:
            logging.warning(f"Failed to read frame {self.frames_read} from source {self.source}")
            return None

        self.frames_read += 1
        return prepare_frame(frame, self.mirror, frame_number=self.frames_read)

    def is_opened(self) -> bool:
        """Check if the capture device is currently open."""
        return self.cap is not None and self.cap.isOpened()

    def release(self):
        """Release the capture device."""
        if self.cap:
            self.cap.release()
            self.cap = None
            logging.info(f"Frame source released: {self.source}")

        self.frame_size = (0, 0)

    def __enter__(self) -> 'CameraFrameSource':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
