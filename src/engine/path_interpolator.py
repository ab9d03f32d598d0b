"""
Path interpolation - position and size of a widget at a given progress.

Pure functions: anchors + progress + path mode in, pixel bounds out.
Position follows a straight line or a quarter-ellipse arc; size always
interpolates linearly. Rounding is round-half-up so results are pixel
reproducible.

Warstwa: ENGINE / PATH
"""

from __future__ import annotations
import math
from dataclasses import dataclass, replace
from typing import Optional

from models.enums import PathMode

HALF_PI = math.pi / 2


@dataclass(frozen=True)
class PathAnchors:
    """
    Endpoints of one path segment.

    Positions are the top-left corner in parent pixels; they are floats
    because visibility collapse and keyframe overrides produce fractional
    anchors.
    """

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    start_width: float
    start_height: float
    end_width: float
    end_height: float

    def with_start(self, x: float, y: float) -> 'PathAnchors':
        return replace(self, start_x=x, start_y=y)

    def with_end(self, x: float, y: float) -> 'PathAnchors':
        return replace(self, end_x=x, end_y=y)


@dataclass(frozen=True)
class PathResult:
    """Integer bounds produced by interpolate_path()"""

    left: int
    top: int
    right: int
    bottom: int


def round_half_up(value: float) -> int:
    """Round to nearest int, halves towards +infinity (floor(v + 0.5))"""
    return int(math.floor(value + 0.5))


def arc_fractions(progress: float, path_mode: PathMode) -> tuple:
    """
    Fraction of dx and dy covered at progress.

    LINEAR covers both axes uniformly. The arcs trace a quarter ellipse:
    ARC_START_VERTICAL leaves with a vertical tangent (x uses 1 - cos),
    ARC_START_HORIZONTAL with a horizontal one (x uses sin).
    """
    if path_mode is PathMode.LINEAR:
        return progress, progress

    theta = HALF_PI * progress
    eased_out = math.sin(theta)
    eased_in = 1.0 - math.cos(theta)

    if path_mode is PathMode.ARC_START_VERTICAL:
        return eased_in, eased_out
    return eased_out, eased_in


def interpolate_path(
    anchors: PathAnchors,
    progress: float,
    path_mode: PathMode = PathMode.LINEAR,
    size_progress: Optional[float] = None,
) -> PathResult:
    """
    Compute widget bounds along the path.

    Progress is not clamped; values outside 0..1 extrapolate.

    Args:
        anchors: Start/end position and size
        progress: Position progress (may be window-local)
        path_mode: LINEAR, ARC_START_VERTICAL or ARC_START_HORIZONTAL
        size_progress: Progress used for width/height (defaults to progress)

    Returns:
        PathResult with left/top/right/bottom
    """
    if size_progress is None:
        size_progress = progress

    fx, fy = arc_fractions(progress, path_mode)
    x = anchors.start_x + fx * (anchors.end_x - anchors.start_x)
    y = anchors.start_y + fy * (anchors.end_y - anchors.start_y)

    width = (1 - size_progress) * anchors.start_width + size_progress * anchors.end_width
    height = (1 - size_progress) * anchors.start_height + size_progress * anchors.end_height

    left = round_half_up(x)
    top = round_half_up(y)
    return PathResult(
        left=left,
        top=top,
        right=left + round_half_up(width),
        bottom=top + round_half_up(height),
    )
