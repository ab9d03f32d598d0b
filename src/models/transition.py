"""
Transition Models

Defines how a motion session maps its global progress onto the timeline:
path shape, duration and easing curve. Easing functions take a progress
value and return the eased progress; values outside 0..1 are passed
through unchanged so callers can still overshoot.
"""

import re
from typing import Optional, Callable

from models.enums import PathMode

EasingFunction = Callable[[float], float]


class TransitionConfig:
    """
    Configuration for one start → end motion

    Attributes:
        path_mode: Shape of the position path (LINEAR or one of the arcs)
        duration_ms: Nominal duration, used to convert time to progress
        ease_function: Easing applied to global progress before interpolation
        easing_name: Source string of the easing (for logs and serialization)

    Examples:
        # Straight 300ms move
        config = TransitionConfig()

        # Arc move with material "standard" easing
        config = TransitionConfig(
            path_mode=PathMode.ARC_START_VERTICAL,
            duration_ms=450,
            easing="standard"
        )
    """

    def __init__(
        self,
        path_mode: PathMode = PathMode.LINEAR,
        duration_ms: int = 300,
        easing: Optional[str] = None,
    ):
        """
        Initialize transition configuration

        Args:
            path_mode: Path shape
            duration_ms: Duration in milliseconds (at least 1)
            easing: Easing name or expression, see parse_easing()
        """
        self.path_mode = path_mode
        self.duration_ms = max(1, int(duration_ms))
        self.easing_name = easing or "linear"
        self.ease_function = parse_easing(self.easing_name)

    @property
    def is_linear(self) -> bool:
        return self.ease_function is ease_linear

    def __repr__(self):
        return f"TransitionConfig({self.path_mode.name}, {self.duration_ms}ms, {self.easing_name})"


# === Easing Functions ===

def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        The same progress
    """
    return t


def _in_range(fn: EasingFunction) -> EasingFunction:
    """Apply fn inside 0..1 only, leave overshoot untouched"""
    def wrapped(t: float) -> float:
        if t < 0.0 or t > 1.0:
            return t
        return fn(t)
    wrapped.__name__ = fn.__name__
    return wrapped


@_in_range
def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


@_in_range
def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


@_in_range
def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


@_in_range
def ease_in_cubic(t: float) -> float:
    """Cubic ease-in (very slow start)"""
    return t * t * t


@_in_range
def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


@_in_range
def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunction:
    """
    Easing following a cubic bezier from (0,0) to (1,1).

    Control points are (x1, y1) and (x2, y2). x is inverted by bisection,
    which is monotonic for x1, x2 in 0..1.
    """

    def bezier(t: float, p1: float, p2: float) -> float:
        u = 1 - t
        return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t

    def solve(x: float) -> float:
        lo, hi = 0.0, 1.0
        t = x
        for _ in range(64):
            t = (lo + hi) / 2
            if bezier(t, x1, x2) < x:
                lo = t
            else:
                hi = t
            if hi - lo < 1e-9:
                break
        return bezier(t, y1, y2)

    solve.__name__ = f"cubic({x1},{y1},{x2},{y2})"
    return _in_range(solve)


def schlick(s: float, t: float) -> EasingFunction:
    """
    Schlick bias/gain curve.

    s controls the steepness, t the x position of the inflection point.
    """

    def fn(x: float) -> float:
        if x < t:
            return t * x / (x + s * (t - x))
        return ((1 - t) * (x - 1)) / (1 - x - s * (t - x)) + 1

    fn.__name__ = f"schlick({s},{t})"
    return _in_range(fn)


NAMED_EASINGS = {
    "linear": ease_linear,
    "ease_in": ease_in_quad,
    "ease_out": ease_out_quad,
    "ease_in_out": ease_in_out_quad,
    "cubic_in": ease_in_cubic,
    "cubic_out": ease_out_cubic,
    "cubic_in_out": ease_in_out_cubic,
    "standard": cubic_bezier(0.4, 0.0, 0.2, 1.0),
    "accelerate": cubic_bezier(0.4, 0.05, 0.8, 0.7),
    "decelerate": cubic_bezier(0.0, 0.0, 0.2, 0.95),
    "anticipate": cubic_bezier(0.36, 0.0, 0.66, -0.56),
    "overshoot": cubic_bezier(0.34, 1.56, 0.64, 1.0),
}

_EXPRESSION = re.compile(r"^\s*(cubic|schlick)\s*\(([^)]*)\)\s*$")


def parse_easing(value: Optional[str]) -> EasingFunction:
    """
    Resolve an easing name or expression.

    Accepts a key of NAMED_EASINGS, "cubic(x1,y1,x2,y2)" or "schlick(s,t)".

    Raises:
        ValueError: Unknown name or malformed expression
    """
    if not value:
        return ease_linear

    name = value.strip().lower()
    if name in NAMED_EASINGS:
        return NAMED_EASINGS[name]

    match = _EXPRESSION.match(name)
    if not match:
        raise ValueError(f"Unknown easing '{value}'")

    try:
        args = [float(part) for part in match.group(2).split(",")]
    except ValueError:
        raise ValueError(f"Malformed easing arguments in '{value}'")

    if match.group(1) == "cubic":
        if len(args) != 4:
            raise ValueError(f"cubic() takes 4 arguments, got {len(args)}")
        return cubic_bezier(*args)

    if len(args) != 2:
        raise ValueError(f"schlick() takes 2 arguments, got {len(args)}")
    if args[0] <= 0 or not 0.0 < args[1] < 1.0:
        raise ValueError(f"schlick() needs s > 0 and 0 < t < 1, got {args}")
    return schlick(*args)
