"""Tests for the order presets and outline anchors."""

import pytest

from insolepreview.model.profiles import (
    InsoleAnchors,
    OrderOptions,
    ThicknessOption,
    WidthOption,
    length_from_slider,
)


class TestLengthSlider:
    @pytest.mark.parametrize("value,length", [(0, 1.0), (50, 1.75), (100, 2.5)])
    def test_mapping(self, value, length):
        assert length_from_slider(value) == pytest.approx(length)

    @pytest.mark.parametrize("value,length", [(-20, 1.0), (250, 2.5)])
    def test_clamped(self, value, length):
        assert length_from_slider(value) == pytest.approx(length)


class TestOrderOptions:
    @pytest.mark.parametrize("option,width", [
        (WidthOption.NARROW, 0.75), (WidthOption.MEDIUM, 1.0), (WidthOption.WIDE, 1.25),
    ])
    def test_width_presets(self, option, width):
        assert OrderOptions(width=option).to_parameters().width == width

    @pytest.mark.parametrize("option,thickness", [(ThicknessOption.THIN, 0.2), (ThicknessOption.THICK, 0.4)])
    def test_thickness_presets(self, option, thickness):
        assert OrderOptions(thickness=option).to_parameters().thickness == thickness

    def test_accepts_plain_strings(self):
        params = OrderOptions(width="Wide", thickness="Thick", length_value=100).to_parameters()
        assert (params.width, params.length, params.thickness) == (1.25, 2.5, 0.4)

    def test_defaults(self):
        params = OrderOptions().to_parameters()
        assert params.width == 1.0
        assert params.length == pytest.approx(1.75)
        assert params.thickness == 0.2
        assert params.detailed_relief is False

    def test_unknown_option(self):
        with pytest.raises(ValueError):
            OrderOptions(width="Huge").to_parameters()


class TestInsoleAnchors:
    def test_anchor_positions(self):
        anchors = InsoleAnchors.from_dimensions(width=1.0, length=2.0)
        assert anchors.half_width == 0.5
        assert (anchors.heel.x, anchors.heel.z) == (0.0, 0.0)
        assert (anchors.arch.x, anchors.arch.z) == pytest.approx((-0.15, 0.8))
        assert (anchors.ball.x, anchors.ball.z) == pytest.approx((0.25, 1.4))
        assert (anchors.toe.x, anchors.toe.z) == (0.0, 2.0)

    def test_six_connected_segments(self):
        segments = InsoleAnchors.from_dimensions(width=1.0, length=2.0).segments()
        assert len(segments) == 6
        for a, b in zip(segments, segments[1:] + segments[:1]):
            assert a.end == b.start
