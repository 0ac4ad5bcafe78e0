"""Per-frame callback scheduling."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from PyQt5 import QtCore, sip

# Constants
DEFAULT_FRAME_INTERVAL_MS = 16  # ~60 Hz, roughly one display refresh


class FrameScheduler(ABC):
    """Schedules a single future invocation of a frame callback."""

    @abstractmethod
    def schedule(self, callback: Callable[[], Any]) -> Any:
        """Arrange for callback to run once; return a handle usable with cancel()."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Prevent a scheduled callback from running."""


class QtFrameScheduler(FrameScheduler):
    """Scheduler backed by single-shot QTimers on the Qt event loop."""

    def __init__(self, interval_ms: int = DEFAULT_FRAME_INTERVAL_MS,
                 parent: Optional[QtCore.QObject] = None):
        self.interval_ms = interval_ms
        self._parent = parent

    def schedule(self, callback: Callable[[], Any]) -> QtCore.QTimer:
        timer = QtCore.QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        # Fired timers delete themselves; only the pending one is alive
        timer.timeout.connect(timer.deleteLater)
        timer.start(self.interval_ms)
        return timer

    def cancel(self, handle: QtCore.QTimer) -> None:
        if handle is None or sip.isdeleted(handle):
            return
        handle.stop()
        handle.deleteLater()
