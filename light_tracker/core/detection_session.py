"""Detection session coordinating capture, analysis and display callbacks."""

from typing import Any, Callable, Dict, Optional
import logging

from ..models.analysis_result import AnalysisResult
from ..models.result_history import ResultHistory
from .brightness_localizer import BrightnessLocalizer
from .exceptions import AcquisitionError, FrameReadError, LightTrackerError
from .frame_scheduler import FrameScheduler
from .frame_source import CameraFrameSource
from .result import Result, error, safe_call_with_log, success

# Status messages
STATUS_STOPPED = "Detection stopped"
STATUS_STARTING = "Starting detection..."


class DetectionSession:
    """
    Owns everything that lives across frames: the capture handle, the active
    flag and the handle of the next scheduled frame callback.

    Events passed to registered UI callbacks:
        'started'             ()
        'result'              (AnalysisResult, FrameData)
        'status'              (str)
        'acquisition_failed'  (str)
        'stopped'             ()
    """

    def __init__(self, source: CameraFrameSource, localizer: BrightnessLocalizer,
                 scheduler: FrameScheduler, history: Optional[ResultHistory] = None):
        self.source = source
        self.localizer = localizer
        self.scheduler = scheduler
        self.history = history

        self.is_active = False
        self.last_result: Optional[AnalysisResult] = None
        self._pending: Any = None

        self.ui_callbacks: Dict[str, Callable] = {}

    def register_ui_callback(self, event_name: str, callback: Callable):
        """Register a UI callback for a session event."""
        self.ui_callbacks[event_name] = callback

    def _notify_ui(self, event_name: str, *args, **kwargs):
        """Notify UI of events; a failing callback never breaks the frame loop."""
        if event_name in self.ui_callbacks:
            try:
                self.ui_callbacks[event_name](*args, **kwargs)
            except Exception as e:
                logging.error(f"Error in UI callback {event_name}: {e}")

    @property
    def has_pending_frame(self) -> bool:
        return self._pending is not None

    def start(self) -> Result[None, LightTrackerError]:
        """
        Open the frame source and begin the per-frame loop.

        Acquisition failure is reported once through 'acquisition_failed' and
        'status'; the session stays inactive and is not retried.
        """
        if self.is_active:
            return success(None)

        self._notify_ui('status', STATUS_STARTING)
        opened = safe_call_with_log(self.source.open, f"open frame source {self.source.source}")
        if opened.is_error():
            err = opened.error
            if not isinstance(err, LightTrackerError):
                err = AcquisitionError(self.source.source, str(err), err)
            logging.error(f"Detection could not start: {err}")
            self._notify_ui('acquisition_failed', err.message)
            self._notify_ui('status', err.message)
            return error(err)

        self.is_active = True
        logging.info(f"Detection started (grid size {self.localizer.grid_size})")
        self._notify_ui('started')
        self._schedule_next()
        return success(None)

    def stop(self, status_message: str = STATUS_STOPPED):
        """Stop the loop, cancel the pending callback and release the source."""
        self.is_active = False
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            self._pending = None

        self.source.release()
        logging.info("Detection stopped")
        self._notify_ui('stopped')
        self._notify_ui('status', status_message)

    def toggle(self) -> bool:
        """Start when stopped, stop when running; returns the new active state."""
        if self.is_active:
            self.stop()
        else:
            self.start()
        return self.is_active

    def process_frame(self) -> Optional[AnalysisResult]:
        """
        Run one tick: capture, analyse, publish, schedule the next tick.

        Does nothing once the session has been stopped. An analysis that has
        started always completes.
        """
        self._pending = None
        if not self.is_active:
            return None

        frame = self.source.read_frame()
        if frame is None:
            err = FrameReadError(self.source.source, self.source.frames_read)
            logging.error(str(err))
            self._notify_ui('acquisition_failed', err.message)
            self.stop(status_message=err.message)
            return None

        result = self.localizer.analyze_frame(frame)
        self.last_result = result
        if self.history is not None:
            self.history.append(result, frame.frame_number, frame.timestamp)

        logging.debug(f"Frame {frame.frame_number}: {result.status_text()}")
        self._notify_ui('result', result, frame)
        self._notify_ui('status', result.status_text())

        # A callback may have stopped the session
        if self.is_active:
            self._schedule_next()
        return result

    def _schedule_next(self):
        self._pending = self.scheduler.schedule(self.process_frame)

    def cleanup(self):
        """Stop detection if it is running."""
        if self.is_active:
            self.stop()
        else:
            self.source.release()
