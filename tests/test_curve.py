"""Tests for easing curves"""

import math

import pytest

from src.spinelib.animation.curve import (
    LINEAR,
    STEPPED,
    Curve,
    CurveType,
    bezier_table,
    interpolate,
    parse_curve,
)
from src.spinelib.core.color import Color
from src.spinelib.core.errors import InvalidCurveDescriptor, LoadError


@pytest.mark.parametrize("start,end", [(0.0, 1.0), (0.1, 0.7), (-3.5, 12.25), (1e9, -1e-9)])
def test_linear_endpoints_are_exact(start, end):
    """Linear interpolation hits both keyframe values exactly"""
    assert interpolate(LINEAR, start, end, 0.0) == start
    assert interpolate(LINEAR, start, end, 1.0) == end


def test_linear_midpoint():
    """Test linear interpolation halfway"""
    assert interpolate(LINEAR, 10.0, 20.0, 0.5) == pytest.approx(15.0)
    assert interpolate(LINEAR, (0.0, 10.0), (10.0, 20.0), 0.5) == pytest.approx((5.0, 15.0))


@pytest.mark.parametrize("t", [0.0, 0.25, 0.5, 0.999])
def test_stepped_holds_start_value(t):
    """Stepped curves keep the earlier value until the next keyframe"""
    assert interpolate(STEPPED, 3.0, 9.0, t) == 3.0


def test_color_interpolation_rounds_channels():
    """Colors blend per channel and round to integers"""
    black = Color(0, 0, 0, 255)
    white = Color(255, 255, 255, 255)

    assert interpolate(LINEAR, white, black, 0.5) == Color(128, 128, 128, 255)
    assert interpolate(LINEAR, white, black, 1.0) == black


def test_color_halfway_channels_round_up():
    """Channels exactly between two integers round up, odd or even"""
    start = Color(0, 0, 0, 0)
    end = Color(253, 1, 255, 3)

    assert start.lerp(end, 0.5) == Color(127, 1, 128, 2)


def test_percent_clamps_out_of_range_input():
    """Out-of-range and NaN fractions are clamped instead of raising"""
    assert LINEAR.percent(-1.0) == 0.0
    assert LINEAR.percent(2.0) == 1.0
    assert LINEAR.percent(float("nan")) == 0.0

    curve = Curve(CurveType.BEZIER, (0.25, 0.1, 0.25, 1.0))
    assert curve.percent(-5.0) == pytest.approx(0.0)
    assert curve.percent(5.0) == pytest.approx(1.0)


def test_bezier_table_size():
    """The sampled table stores interior points only"""
    assert len(bezier_table(0.25, 0.0, 0.75, 1.0, segments=10)) == 9
    assert len(bezier_table(0.25, 0.0, 0.75, 1.0, segments=4)) == 3


def test_bezier_endpoints_and_monotonic():
    """An ease curve starts at 0, ends at 1 and never goes backwards"""
    curve = Curve(CurveType.BEZIER, (0.42, 0.0, 0.58, 1.0))

    assert curve.percent(0.0) == pytest.approx(0.0)
    assert curve.percent(1.0) == pytest.approx(1.0)

    values = [curve.percent(i / 100.0) for i in range(101)]
    assert all(b >= a for a, b in zip(values, values[1:]))
    assert all(math.isfinite(v) for v in values)


def test_bezier_diagonal_controls_are_linear():
    """Control points on the diagonal give a straight line"""
    curve = Curve(CurveType.BEZIER, (0.0, 0.0, 1.0, 1.0))
    for t in (0.1, 0.33, 0.5, 0.9):
        assert curve.percent(t) == pytest.approx(t, abs=1e-6)


def test_bezier_ease_in_starts_slowly():
    """An ease-in curve lags behind linear early on"""
    curve = Curve(CurveType.BEZIER, (0.9, 0.0, 1.0, 1.0))
    assert curve.percent(0.25) < 0.25
    assert interpolate(curve, 0.0, 100.0, 0.25) < 25.0


def test_parse_curve_names():
    """Test parsing named and Bezier descriptors"""
    assert parse_curve(None) is LINEAR
    assert parse_curve("linear") is LINEAR
    assert parse_curve("stepped") is STEPPED

    curve = parse_curve([0.25, 0, 0.75, 1])
    assert curve.kind is CurveType.BEZIER
    assert curve.control == (0.25, 0.0, 0.75, 1.0)


@pytest.mark.parametrize("descriptor", [
    [0.25, 0.0, 0.75],
    [0.25, 0.0, 0.75, 1.0, 0.5],
    [0.25, "a", 0.75, 1.0],
    [True, 0.0, 0.75, 1.0],
    [float("nan"), 0.0, 1.0, 1.0],
    [0.25, 0.0, float("inf"), 1.0],
    "bouncy",
    42,
])
def test_parse_curve_rejects_malformed(descriptor):
    """Malformed descriptors are load errors"""
    with pytest.raises(InvalidCurveDescriptor) as exc_info:
        parse_curve(descriptor)
    assert isinstance(exc_info.value, LoadError)


def test_bezier_requires_four_controls():
    """Test direct construction with too few control values"""
    with pytest.raises(InvalidCurveDescriptor):
        Curve(CurveType.BEZIER, (0.5, 0.5))
