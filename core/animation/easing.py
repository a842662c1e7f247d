"""
Easing functions for illustration choreography.

All functions take t (progress) in range [0.0, 1.0] and return eased progress.
Every curve satisfies f(0) == 0 and f(1) == 1 exactly so terminal states
converge without drift.

Based on standard easing equations:
- Robert Penner's Easing Functions
- https://easings.net/
- CSS cubic-bezier() timing functions
"""
import math
from dataclasses import dataclass
from typing import Callable, Sequence, Union

from core.animation.types import EasingCurve, EasingFunction


# Linear (no easing)
def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


# Quadratic easing
def quad_in(t: float) -> float:
    """Quadratic ease-in - accelerating from zero velocity."""
    return t * t


def quad_out(t: float) -> float:
    """Quadratic ease-out - decelerating to zero velocity."""
    return t * (2 - t)


def quad_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


# Cubic easing
def cubic_in(t: float) -> float:
    return t * t * t


def cubic_out(t: float) -> float:
    t -= 1
    return t * t * t + 1


def cubic_in_out(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    t -= 1
    return 1 + 4 * t * t * t


# Sine easing
def sine_in(t: float) -> float:
    """Sine ease-in - accelerating using sine curve."""
    if t >= 1:
        return 1.0
    return 1 - math.cos(t * math.pi / 2)


def sine_out(t: float) -> float:
    """Sine ease-out - decelerating using sine curve."""
    if t >= 1:
        return 1.0
    return math.sin(t * math.pi / 2)


def sine_in_out(t: float) -> float:
    if t >= 1:
        return 1.0
    return -(math.cos(math.pi * t) - 1) / 2


# Exponential easing
def expo_in(t: float) -> float:
    """Exponential ease-in - accelerating exponentially."""
    if t == 0 or t == 1:
        return t
    return math.pow(2, 10 * (t - 1))


def expo_out(t: float) -> float:
    """Exponential ease-out - decelerating exponentially."""
    if t == 0 or t == 1:
        return t
    return 1 - math.pow(2, -10 * t)


def expo_in_out(t: float) -> float:
    if t == 0 or t == 1:
        return t
    if t < 0.5:
        return math.pow(2, 20 * t - 10) / 2
    return (2 - math.pow(2, -20 * t + 10)) / 2


# Circular easing
def circ_in(t: float) -> float:
    return 1 - math.sqrt(1 - t * t)


def circ_out(t: float) -> float:
    t -= 1
    return math.sqrt(1 - t * t)


def circ_in_out(t: float) -> float:
    if t < 0.5:
        return (1 - math.sqrt(1 - 4 * t * t)) / 2
    t = t * 2 - 2
    return (math.sqrt(1 - t * t) + 1) / 2


# Back easing (overshoots, still pinned at both ends)
def back_in(t: float) -> float:
    """Back ease-in - backing up slightly before accelerating."""
    if t >= 1:
        return 1.0
    c = 1.70158
    return t * t * ((c + 1) * t - c)


def back_out(t: float) -> float:
    """Back ease-out - overshooting slightly before settling."""
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    c = 1.70158
    t -= 1
    return t * t * ((c + 1) * t + c) + 1


def back_in_out(t: float) -> float:
    c = 1.70158 * 1.525
    if t < 0.5:
        return (2 * t) * (2 * t) * ((c + 1) * 2 * t - c) / 2
    t = t * 2 - 2
    return (t * t * ((c + 1) * t + c) + 2) / 2


@dataclass(frozen=True)
class CubicBezier:
    """
    CSS-style cubic-bezier(x1, y1, x2, y2) timing function.

    The curve is anchored at (0, 0) and (1, 1). For a given progress x the
    parametric t is found with Newton-Raphson, falling back to bisection
    when the derivative flattens out.
    """
    x1: float
    y1: float
    x2: float
    y2: float

    def __post_init__(self) -> None:
        for name in ("x1", "y1", "x2", "y2"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"CubicBezier {name} must be finite")
        if not (0.0 <= self.x1 <= 1.0 and 0.0 <= self.x2 <= 1.0):
            raise ValueError("CubicBezier x control points must lie in [0, 1]")

    def _coefficients(self, p1: float, p2: float) -> tuple:
        c = 3.0 * p1
        b = 3.0 * (p2 - p1) - c
        a = 1.0 - c - b
        return a, b, c

    def _sample(self, t: float, p1: float, p2: float) -> float:
        a, b, c = self._coefficients(p1, p2)
        return ((a * t + b) * t + c) * t

    def _sample_derivative_x(self, t: float) -> float:
        a, b, c = self._coefficients(self.x1, self.x2)
        return (3.0 * a * t + 2.0 * b) * t + c

    def _solve_t(self, x: float, epsilon: float = 1e-7) -> float:
        t = x
        for _ in range(8):
            error = self._sample(t, self.x1, self.x2) - x
            if abs(error) < epsilon:
                return t
            slope = self._sample_derivative_x(t)
            if abs(slope) < 1e-6:
                break
            t -= error / slope

        lo, hi = 0.0, 1.0
        t = x
        for _ in range(64):
            current = self._sample(t, self.x1, self.x2)
            if abs(current - x) < epsilon:
                break
            if current < x:
                lo = t
            else:
                hi = t
            t = (lo + hi) / 2.0
        return t

    def __call__(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return self._sample(self._solve_t(t), self.y1, self.y2)


# Source curve shared by every lesson diagram
PRODUCTIVE_EASE = CubicBezier(0.2, 0.0, 0.38, 0.9)

EASE = CubicBezier(0.25, 0.1, 0.25, 1.0)
EASE_IN = CubicBezier(0.42, 0.0, 1.0, 1.0)
EASE_OUT = CubicBezier(0.0, 0.0, 0.58, 1.0)
EASE_IN_OUT = CubicBezier(0.42, 0.0, 0.58, 1.0)


# Easing function lookup table
EASING_FUNCTIONS: dict[EasingCurve, EasingFunction] = {
    EasingCurve.LINEAR: linear,

    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
    EasingCurve.QUAD_IN_OUT: quad_in_out,

    EasingCurve.CUBIC_IN: cubic_in,
    EasingCurve.CUBIC_OUT: cubic_out,
    EasingCurve.CUBIC_IN_OUT: cubic_in_out,

    EasingCurve.SINE_IN: sine_in,
    EasingCurve.SINE_OUT: sine_out,
    EasingCurve.SINE_IN_OUT: sine_in_out,

    EasingCurve.EXPO_IN: expo_in,
    EasingCurve.EXPO_OUT: expo_out,
    EasingCurve.EXPO_IN_OUT: expo_in_out,

    EasingCurve.CIRC_IN: circ_in,
    EasingCurve.CIRC_OUT: circ_out,
    EasingCurve.CIRC_IN_OUT: circ_in_out,

    EasingCurve.BACK_IN: back_in,
    EasingCurve.BACK_OUT: back_out,
    EasingCurve.BACK_IN_OUT: back_in_out,

    EasingCurve.EASE: EASE,
    EasingCurve.EASE_IN: EASE_IN,
    EasingCurve.EASE_OUT: EASE_OUT,
    EasingCurve.EASE_IN_OUT: EASE_IN_OUT,
    EasingCurve.PRODUCTIVE: PRODUCTIVE_EASE,
}


EasingSpec = Union[EasingCurve, str, Sequence[float], Callable[[float], float]]


def get_easing_function(curve: EasingCurve) -> EasingFunction:
    """
    Get the easing function for a given curve.

    Raises:
        ValueError: If curve is not found
    """
    if curve not in EASING_FUNCTIONS:
        raise ValueError(f"Unknown easing curve: {curve}")

    return EASING_FUNCTIONS[curve]


def resolve_easing(spec: EasingSpec) -> EasingFunction:
    """
    Turn any supported easing description into a callable.

    Accepts an EasingCurve, its string value ("productive", "ease-out"),
    four Bezier control points, or a callable that is returned unchanged.

    Raises:
        ValueError: If the description cannot be resolved
    """
    if isinstance(spec, EasingCurve):
        return get_easing_function(spec)
    if isinstance(spec, str):
        name = spec.strip().lower().replace("-", "_")
        try:
            return get_easing_function(EasingCurve(name))
        except ValueError:
            raise ValueError(f"Unknown easing curve: {spec!r}") from None
    if isinstance(spec, (tuple, list)):
        if len(spec) != 4:
            raise ValueError(f"Bezier easing needs 4 control points, got {len(spec)}")
        return CubicBezier(*(float(v) for v in spec))
    if callable(spec):
        return spec
    raise ValueError(f"Unsupported easing: {spec!r}")


def ease(t: float, curve: EasingSpec) -> float:
    """
    Apply easing function to a progress value.

    Args:
        t: Progress in range [0.0, 1.0] (clamped)
        curve: Any easing description accepted by resolve_easing()

    Returns:
        Eased progress
    """
    t = max(0.0, min(1.0, t))

    easing_fn = resolve_easing(curve)
    return easing_fn(t)
