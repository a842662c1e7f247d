"""
Animation types, enums, and value helpers.

Defines the core types shared by the illustration choreography engine.
All times are floating point milliseconds.
"""
import math
from enum import Enum
from typing import Callable, NamedTuple, Union


class TriggerState(Enum):
    """State of a visibility trigger (fire-once latch)."""
    ARMED = "armed"      # Waiting for the first intersection
    FIRED = "fired"      # Terminal; never returns to ARMED


class SceneState(Enum):
    """Lifecycle of a choreographed scene."""
    ARMED = "armed"            # Mounted, trigger not fired yet
    RUNNING = "running"        # Schedule resolved, animations in flight
    SETTLED = "settled"        # Every entry holds its terminal value
    TORN_DOWN = "torn_down"    # Unmounted; no further ticks


class AnimatedProperty(Enum):
    """Visual attributes a render binding knows how to write."""
    OPACITY = "opacity"
    X = "x"                    # Horizontal offset from authored position
    Y = "y"                    # Vertical offset from authored position
    OFFSET = "offset"          # 2D offset, interpolated component-wise
    SCALE = "scale"
    SCALE_X = "scale_x"
    SCALE_Y = "scale_y"
    DRAW = "draw"              # Stroke draw progress, fraction of path length

    @classmethod
    def coerce(cls, value: Union["AnimatedProperty", str]) -> "AnimatedProperty":
        """Accept either the enum or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown animated property: {value!r}") from None


class EasingCurve(Enum):
    """
    Named easing curves.

    The CSS-style names map onto cubic Bezier curves; PRODUCTIVE is the
    curve every lesson diagram uses for its entrance choreography.
    """
    LINEAR = "linear"

    QUAD_IN = "quad_in"
    QUAD_OUT = "quad_out"
    QUAD_IN_OUT = "quad_in_out"

    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"

    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"

    EXPO_IN = "expo_in"
    EXPO_OUT = "expo_out"
    EXPO_IN_OUT = "expo_in_out"

    CIRC_IN = "circ_in"
    CIRC_OUT = "circ_out"
    CIRC_IN_OUT = "circ_in_out"

    BACK_IN = "back_in"
    BACK_OUT = "back_out"
    BACK_IN_OUT = "back_in_out"

    # Cubic Bezier presets
    EASE = "ease"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"
    PRODUCTIVE = "productive"


class Offset(NamedTuple):
    """2D displacement in scene units."""
    dx: float
    dy: float


# A scalar (opacity, scale, draw progress, ...) or a 2D offset
Value = Union[float, Offset]

EasingFunction = Callable[[float], float]


def coerce_value(value: object) -> Value:
    """
    Normalise a user supplied value into a float or an Offset.

    Raises:
        ValueError: If the value is not numeric, not 2D, or not finite
    """
    if isinstance(value, bool):
        raise ValueError(f"Booleans are not animatable values: {value!r}")
    if isinstance(value, (int, float)):
        result = float(value)
        if not math.isfinite(result):
            raise ValueError(f"Animated values must be finite: {value!r}")
        return result
    if isinstance(value, (tuple, list)) and len(value) == 2:
        dx = coerce_value(value[0])
        dy = coerce_value(value[1])
        return Offset(dx, dy)
    raise ValueError(f"Unsupported animated value: {value!r}")


def same_kind(a: Value, b: Value) -> bool:
    """True when both values interpolate the same way (scalar vs. offset)."""
    return isinstance(a, Offset) == isinstance(b, Offset)
