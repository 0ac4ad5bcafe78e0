"""Tests for the detection session lifecycle."""

import numpy as np
import pytest

from light_tracker.core.detection_session import STATUS_STARTING, STATUS_STOPPED
from light_tracker.core.exceptions import AcquisitionError


class EventRecorder:
    """Collects session events in the order they are emitted."""

    EVENTS = ('started', 'result', 'status', 'acquisition_failed', 'stopped')

    def __init__(self, session):
        self.events = []
        for name in self.EVENTS:
            session.register_ui_callback(name, self._recorder(name))

    def _recorder(self, name):
        def _record(*args):
            self.events.append((name, args))
        return _record

    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [args for event, args in self.events if event == name]


class TestStart:

    @pytest.mark.unit
    def test_start_schedules_first_frame(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])
        recorder = EventRecorder(session)

        result = session.start()

        assert result.is_success()
        assert session.is_active
        assert session.has_pending_frame
        assert len(manual_scheduler.pending) == 1
        assert recorder.names() == ['status', 'started']
        assert recorder.of('status')[0] == (STATUS_STARTING,)

    @pytest.mark.unit
    def test_start_twice_is_noop(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])
        session.start()
        session.start()

        assert session.source.open_calls == 1
        assert len(manual_scheduler.pending) == 1

    @pytest.mark.unit
    def test_acquisition_failure(self, session_factory, manual_scheduler):
        session = session_factory([], fail_open="permission denied")
        recorder = EventRecorder(session)

        result = session.start()

        assert result.is_error()
        assert isinstance(result.error, AcquisitionError)
        assert not session.is_active
        assert not session.has_pending_frame
        assert manual_scheduler.pending == []

        failures = recorder.of('acquisition_failed')
        assert len(failures) == 1
        assert "permission denied" in failures[0][0]
        assert recorder.of('status')[-1] == failures[0]
        assert 'started' not in recorder.names()

    @pytest.mark.unit
    def test_unexpected_open_error_wrapped(self, session_factory):
        session = session_factory([])

        def _boom():
            raise RuntimeError("driver crashed")

        session.source.open = _boom
        result = session.start()

        assert result.is_error()
        assert isinstance(result.error, AcquisitionError)
        assert isinstance(result.error.cause, RuntimeError)


class TestProcessFrame:

    @pytest.mark.unit
    def test_frame_produces_result(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr, bright_corner_bgr])
        recorder = EventRecorder(session)
        session.start()

        result = manual_scheduler.run_next()

        assert (result.brightest_x, result.brightest_y) == (75, 25)
        assert result.angle_degrees == pytest.approx(315.0)
        assert session.last_result == result
        assert len(session.history) == 1

        emitted_result, frame = recorder.of('result')[0]
        assert emitted_result == result
        assert frame.frame_number == 1
        assert recorder.of('status')[-1] == (result.status_text(),)

        # Next tick scheduled
        assert len(manual_scheduler.pending) == 1

    @pytest.mark.unit
    def test_results_follow_frames(self, session_factory, manual_scheduler):
        left = np.zeros((100, 100, 3), dtype=np.uint8)
        left[40:50, 0:10] = 255
        right = np.zeros((100, 100, 3), dtype=np.uint8)
        right[40:50, 90:100] = 255

        session = session_factory([left, right])
        session.start()

        first = manual_scheduler.run_next()
        second = manual_scheduler.run_next()

        assert first.angle_degrees == pytest.approx(180.0, abs=10)
        assert second.brightest_x == 95
        assert [e.frame_number for e in session.history.entries()] == [1, 2]

    @pytest.mark.unit
    def test_read_failure_stops_session(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])
        recorder = EventRecorder(session)
        session.start()

        manual_scheduler.run_next()
        assert manual_scheduler.run_next() is None

        assert not session.is_active
        assert manual_scheduler.pending == []
        assert len(recorder.of('acquisition_failed')) == 1
        assert 'stopped' in recorder.names()
        assert session.source.release_calls == 1

    @pytest.mark.unit
    def test_tick_after_stop_does_nothing(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])
        session.start()
        _, callback = manual_scheduler.pending[0]
        session.stop()

        assert callback() is None
        assert session.last_result is None
        assert len(session.history) == 0
        assert manual_scheduler.pending == []

    @pytest.mark.unit
    def test_callback_may_stop_session(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr, bright_corner_bgr])
        session.register_ui_callback('result', lambda result, frame: session.stop())
        session.start()

        result = manual_scheduler.run_next()

        assert result is not None
        assert not session.is_active
        assert manual_scheduler.pending == []

    @pytest.mark.unit
    def test_failing_callback_does_not_break_loop(self, session_factory, manual_scheduler,
                                                  bright_corner_bgr):
        session = session_factory([bright_corner_bgr, bright_corner_bgr])

        def _broken(*args):
            raise RuntimeError("widget gone")

        session.register_ui_callback('result', _broken)
        session.start()

        assert manual_scheduler.run_next() is not None
        assert len(manual_scheduler.pending) == 1

    @pytest.mark.unit
    def test_no_history(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr], history=None)
        session.start()

        assert manual_scheduler.run_next() is not None
        assert session.history is None


class TestStop:

    @pytest.mark.unit
    def test_stop_cancels_pending(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])
        recorder = EventRecorder(session)
        session.start()
        handle = manual_scheduler.pending[0][0]

        session.stop()

        assert not session.is_active
        assert not session.has_pending_frame
        assert manual_scheduler.cancelled == [handle]
        assert session.source.release_calls == 1
        assert recorder.names()[-2:] == ['stopped', 'status']
        assert recorder.of('status')[-1] == (STATUS_STOPPED,)

    @pytest.mark.unit
    def test_toggle(self, session_factory, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])

        assert session.toggle() is True
        assert session.toggle() is False
        assert session.source.open_calls == 1

    @pytest.mark.unit
    def test_restart_after_stop(self, session_factory, manual_scheduler, bright_corner_bgr):
        session = session_factory([bright_corner_bgr, bright_corner_bgr])
        session.start()
        session.stop()
        session.start()

        assert session.is_active
        assert session.source.open_calls == 2
        assert len(manual_scheduler.pending) == 1

    @pytest.mark.unit
    def test_cleanup(self, session_factory, bright_corner_bgr):
        session = session_factory([bright_corner_bgr])
        session.start()
        session.cleanup()
        assert not session.is_active

        session.cleanup()
        assert session.source.release_calls == 2
