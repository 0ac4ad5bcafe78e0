"""Tests for light direction overlay rendering."""

import numpy as np
import pytest

from light_tracker.core.overlay_renderer import (
    BORDER_PADDING, OverlayRenderer, draw_direction_indicator
)
from light_tracker.models.analysis_result import AnalysisResult
from light_tracker.utils.math_utils import direction_transform


@pytest.fixture
def result():
    return AnalysisResult(
        brightest_x=75.0, brightest_y=25.0, center_x=50.0, center_y=50.0,
        angle_degrees=315.0, max_brightness=255.0
    )


@pytest.fixture
def black_frame():
    return np.zeros((100, 100, 3), dtype=np.uint8)


class TestDirectionIndicator:

    @pytest.mark.unit
    def test_beam_follows_angle(self, black_frame):
        draw_direction_indicator(black_frame, direction_transform((50, 50), 0.0),
                                 length=40, width=6, intensity=0.5)

        # Beam runs to the right of the center, covering y 50-56
        assert black_frame[53, 80].tolist() == [128, 128, 128]
        assert not black_frame[53, 20].any()
        assert not black_frame[30, 70].any()

    @pytest.mark.unit
    def test_beam_rotated(self, black_frame):
        draw_direction_indicator(black_frame, direction_transform((50, 50), 90.0),
                                 length=40, width=6, intensity=1.0)

        # 90 degrees points down on screen; width extends toward -x
        assert black_frame[80, 47].tolist() == [255, 255, 255]
        assert not black_frame[80, 53].any()
        assert not black_frame[20, 47].any()

    @pytest.mark.unit
    def test_lighter_blending_saturates(self):
        frame = np.full((100, 100, 3), 200, dtype=np.uint8)
        draw_direction_indicator(frame, direction_transform((50, 50), 0.0),
                                 length=40, width=6, intensity=0.5)

        assert frame[53, 80].tolist() == [255, 255, 255]
        assert frame[20, 20].tolist() == [200, 200, 200]


class TestOverlayRenderer:

    @pytest.mark.unit
    def test_render_returns_new_frame(self, black_frame, result):
        rendered = OverlayRenderer().render(black_frame, result)

        assert rendered.shape == black_frame.shape
        assert rendered is not black_frame
        assert not black_frame.any()
        assert rendered.any()

    @pytest.mark.unit
    def test_markers_at_center_and_brightest(self, black_frame, result):
        renderer = OverlayRenderer(style="markers", show_angle_label=False)
        rendered = renderer.render(black_frame, result)

        # Red-ish center marker, yellow-ish brightest marker (BGR)
        assert rendered[50, 50, 2] > 0
        assert rendered[25, 75, 1] > 0 and rendered[25, 75, 2] > 0

    @pytest.mark.unit
    def test_beam_style(self, black_frame, result):
        renderer = OverlayRenderer(style="beam", show_angle_label=False)
        rendered = renderer.render(black_frame, result)

        # Border just inside the edge
        assert rendered[BORDER_PADDING, 50].any()
        # Beam heads up-right at 315 degrees
        assert rendered[30, 72].any()
        assert not rendered[70, 30].any()

    @pytest.mark.unit
    def test_angle_label(self, result):
        frame = np.zeros((200, 200, 3), dtype=np.uint8)
        centered = AnalysisResult(150.0, 50.0, 100.0, 100.0, 315.0, 255.0)

        with_label = OverlayRenderer(show_angle_label=True).render(frame, centered)
        without_label = OverlayRenderer(show_angle_label=False).render(frame, centered)

        label_band = (slice(60, 85), slice(40, 160))
        assert (with_label[label_band] != without_label[label_band]).any()

    @pytest.mark.unit
    def test_grid_lines(self, black_frame, result):
        renderer = OverlayRenderer(show_angle_label=False, show_grid=True)
        rendered = renderer.render(black_frame, result, grid_size=4)

        assert rendered[90, 25].any()
        assert rendered[75, 90].any()

    @pytest.mark.unit
    def test_set_rendering_options(self):
        renderer = OverlayRenderer()
        renderer.set_rendering_options(style="beam", show_grid=True)

        assert renderer.style == "beam"
        assert renderer.show_grid is True
        assert renderer.show_angle_label is True

        with pytest.raises(ValueError):
            renderer.set_rendering_options(style="sparkles")

    @pytest.mark.unit
    def test_none_frame(self, result):
        assert OverlayRenderer().render(None, result) is None
