"""Shared pytest fixtures for the Light Tracker test suite."""

from __future__ import annotations

import os
from typing import Any, Callable, List, Optional, Tuple

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

from PyQt5 import QtWidgets

from light_tracker.core.brightness_localizer import BrightnessLocalizer
from light_tracker.core.detection_session import DetectionSession
from light_tracker.core.exceptions import AcquisitionError
from light_tracker.core.frame_scheduler import FrameScheduler
from light_tracker.core.frame_source import prepare_frame
from light_tracker.core.settings_manager import SettingsManager
from light_tracker.models.frame_data import FrameData
from light_tracker.models.result_history import ResultHistory


@pytest.fixture(scope="session")
def qt_application() -> QtWidgets.QApplication:
    """Provide a QApplication instance configured for offscreen rendering."""
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
        created = True
    else:
        created = False

    yield app

    if created:
        app.quit()


def make_rgba(width: int, height: int, fill: int = 0) -> np.ndarray:
    """Opaque RGBA frame with every color channel set to fill."""
    frame = np.full((height, width, 4), fill, dtype=np.uint8)
    frame[..., 3] = 255
    return frame


def paint(frame: np.ndarray, x0: int, y0: int, x1: int, y1: int,
          color: Tuple[int, int, int] = (255, 255, 255)):
    """Fill pixels [x0, x1) x [y0, y1) of an RGBA frame with an RGB color."""
    frame[y0:y1, x0:x1, :3] = color


class ManualScheduler(FrameScheduler):
    """Scheduler that only runs callbacks when the test asks it to."""

    def __init__(self):
        self.pending: List[Tuple[int, Callable]] = []
        self.cancelled: List[int] = []
        self._next_handle = 0

    def schedule(self, callback):
        self._next_handle += 1
        self.pending.append((self._next_handle, callback))
        return self._next_handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending = [(h, cb) for h, cb in self.pending if h != handle]

    def run_next(self):
        handle, callback = self.pending.pop(0)
        return callback()


class FakeFrameSource:
    """In-memory frame source returning prepared copies of the given BGR frames."""

    def __init__(self, frames: List[np.ndarray], fail_open: Optional[str] = None):
        self.source = "fake"
        self.frames = list(frames)
        self.fail_open = fail_open
        self.opened = False
        self.open_calls = 0
        self.release_calls = 0
        self.frames_read = 0

    def open(self):
        self.open_calls += 1
        if self.fail_open:
            raise AcquisitionError(self.source, self.fail_open)
        self.opened = True

    def read_frame(self) -> Optional[FrameData]:
        if not self.opened or self.frames_read >= len(self.frames):
            return None
        frame = self.frames[self.frames_read]
        self.frames_read += 1
        return prepare_frame(frame, mirror=False, frame_number=self.frames_read,
                             timestamp=float(self.frames_read))

    def release(self):
        self.release_calls += 1
        self.opened = False

    def is_opened(self) -> bool:
        return self.opened


@pytest.fixture
def bright_corner_bgr() -> np.ndarray:
    """100x100 BGR frame, black except a white 10x10 block at x 70-79, y 20-29."""
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    frame[20:30, 70:80] = 255
    return frame


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def session_factory(manual_scheduler) -> Callable[..., DetectionSession]:
    """Build sessions around a FakeFrameSource and the manual scheduler."""

    def _factory(frames: List[np.ndarray], grid_size: int = 10,
                 fail_open: Optional[str] = None, history: Any = "default") -> DetectionSession:
        source = FakeFrameSource(frames, fail_open=fail_open)
        return DetectionSession(
            source=source,
            localizer=BrightnessLocalizer(grid_size),
            scheduler=manual_scheduler,
            history=ResultHistory(50) if history == "default" else history
        )

    return _factory


@pytest.fixture
def settings_file(tmp_path) -> str:
    return str(tmp_path / "test_settings.json")


@pytest.fixture
def settings_manager(settings_file) -> SettingsManager:
    return SettingsManager(settings_file)
