"""Tests for the easing catalog and the cubic Bezier solver."""
import pytest

from core.animation.easing import (
    EASE_IN_OUT,
    EASING_FUNCTIONS,
    PRODUCTIVE_EASE,
    CubicBezier,
    ease,
    get_easing_function,
    resolve_easing,
)
from core.animation.types import EasingCurve


@pytest.mark.parametrize("curve", list(EasingCurve))
def test_every_curve_is_anchored(curve):
    """Every named curve maps 0 -> 0 and 1 -> 1 exactly."""
    fn = get_easing_function(curve)
    assert fn(0.0) == pytest.approx(0.0, abs=1e-9)
    assert fn(1.0) == pytest.approx(1.0, abs=1e-9)


def test_catalog_covers_enum():
    assert set(EASING_FUNCTIONS) == set(EasingCurve)


def test_productive_curve_matches_control_points():
    assert PRODUCTIVE_EASE == CubicBezier(0.2, 0.0, 0.38, 0.9)
    assert resolve_easing("productive") is PRODUCTIVE_EASE


def test_bezier_is_monotonic_for_productive():
    samples = [PRODUCTIVE_EASE(i / 50) for i in range(51)]
    assert samples == sorted(samples)
    # Decelerating entrance: ahead of linear at the midpoint
    assert PRODUCTIVE_EASE(0.5) > 0.5


def test_bezier_symmetry():
    """ease-in-out is point-symmetric about (0.5, 0.5)."""
    for x in (0.1, 0.25, 0.4):
        assert EASE_IN_OUT(x) + EASE_IN_OUT(1 - x) == pytest.approx(1.0, abs=1e-5)


def test_bezier_linear_control_points_are_identity():
    curve = CubicBezier(0.25, 0.25, 0.75, 0.75)
    for x in (0.1, 0.33, 0.5, 0.9):
        assert curve(x) == pytest.approx(x, abs=1e-5)


def test_bezier_rejects_out_of_range_x():
    with pytest.raises(ValueError):
        CubicBezier(1.5, 0.0, 0.5, 1.0)


def test_resolve_easing_accepts_every_form():
    assert resolve_easing(EasingCurve.LINEAR)(0.3) == pytest.approx(0.3)
    assert resolve_easing("ease-out") is get_easing_function(EasingCurve.EASE_OUT)
    assert isinstance(resolve_easing((0.2, 0, 0.38, 0.9)), CubicBezier)

    def custom(t):
        return t * t

    assert resolve_easing(custom) is custom


def test_resolve_easing_unknown_name():
    with pytest.raises(ValueError):
        resolve_easing("bouncy")
    with pytest.raises(ValueError):
        resolve_easing((0.1, 0.2, 0.3))


def test_ease_clamps_progress():
    assert ease(-1.0, EasingCurve.QUAD_IN) == 0.0
    assert ease(2.0, EasingCurve.QUAD_IN) == 1.0
    assert ease(0.5, EasingCurve.QUAD_IN) == pytest.approx(0.25)
