"""
Attribute blending - every per-field value of the output snapshot except
position and size.

Rules:
- Optional transform fields: both unset → unset; one unset → that side
  takes the field default; then linear blend.
- GONE endpoints collapse to the other endpoint's size, centred on their
  own anchor, with alpha forced to 0 when it was unset.
- Custom colors are clamped to the endpoints outside 0..1, custom floats
  extrapolate.
- Attribute keyframes re-anchor a field inside their window; cycle
  keyframes add an oscillation on top of the blended value.

Warstwa: ENGINE / BLEND
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models.enums import Visibility
from models.color import RGBA
from models.frame_snapshot import FrameSnapshot, TRANSFORM_FIELDS
from models.keyframes import AttributeKeyframe, CycleKeyframe, TimeCycleKeyframe
from engine.keyframe_resolver import find_window, timeline_position
from engine.oscillator import wave
from engine.path_interpolator import PathAnchors

# Value substituted for an unset side when the other side is set
FIELD_DEFAULTS: Dict[str, float] = {
    "pivot_x": 0.5,
    "pivot_y": 0.5,
    "rotation_x": 0.0,
    "rotation_y": 0.0,
    "rotation_z": 0.0,
    "translation_x": 0.0,
    "translation_y": 0.0,
    "translation_z": 0.0,
    "scale_x": 1.0,
    "scale_y": 1.0,
    "alpha": 1.0,
}


@dataclass(frozen=True)
class CollapsedEndpoints:
    """Path anchors and alphas after visibility collapse"""

    anchors: PathAnchors
    start_alpha: Optional[float]
    end_alpha: Optional[float]


# ------------------------------------------------------------
# Scalars
# ------------------------------------------------------------

def blend_optional(start: Optional[float], end: Optional[float], default: float, progress: float) -> Optional[float]:
    """
    Blend two optional values.

    Returns None only when both sides are unset.
    """
    if start is None and end is None:
        return None
    if start is None:
        start = default
    if end is None:
        end = default
    return start + progress * (end - start)


def collapse_for_visibility(start: FrameSnapshot, end: FrameSnapshot) -> CollapsedEndpoints:
    """
    Effective anchors and alphas once GONE endpoints are collapsed.

    A GONE start takes the end size and is centred on its own top-left
    anchor; its alpha becomes 0 unless explicitly set. The end side is
    handled symmetrically, after the start side.
    """
    start_x, start_y = float(start.left), float(start.top)
    end_x, end_y = float(end.left), float(end.top)
    start_w, start_h = float(start.width), float(start.height)
    end_w, end_h = float(end.width), float(end.height)
    start_alpha, end_alpha = start.alpha, end.alpha

    if start.visibility is Visibility.GONE:
        start_x -= end_w / 2.0
        start_y -= end_h / 2.0
        start_w, start_h = end_w, end_h
        if start_alpha is None:
            start_alpha = 0.0

    if end.visibility is Visibility.GONE:
        end_x -= start_w / 2.0
        end_y -= start_h / 2.0
        end_w, end_h = start_w, start_h
        if end_alpha is None:
            end_alpha = 0.0

    return CollapsedEndpoints(
        anchors=PathAnchors(start_x, start_y, end_x, end_y, start_w, start_h, end_w, end_h),
        start_alpha=start_alpha,
        end_alpha=end_alpha,
    )


def blend_visibility(start: Visibility, end: Visibility, progress: float) -> Visibility:
    """Endpoint visibility at the ends, shared or VISIBLE in between"""
    if progress <= 0.0:
        return start
    if progress >= 1.0:
        return end
    if start is end:
        return start
    return Visibility.VISIBLE


# ------------------------------------------------------------
# Attribute keyframe windows
# ------------------------------------------------------------

def _windowed(
    keyframes: Sequence[AttributeKeyframe],
    value_of: Callable[[AttributeKeyframe], Optional[float]],
    start: Optional[float],
    end: Optional[float],
    progress: float,
) -> Tuple[Optional[float], Optional[float], float]:
    """Anchors and local progress for one field given its attribute keyframes"""
    relevant = [k for k in keyframes if value_of(k) is not None]
    if not relevant:
        return start, end, progress

    window = find_window(relevant, timeline_position(progress))
    if not window.is_valid:
        return start, end, progress

    if window.previous is not None:
        start = value_of(window.previous)
    if window.next is not None:
        end = value_of(window.next)
    return start, end, window.local_progress(progress)


def blend_transform(
    out: FrameSnapshot,
    start: FrameSnapshot,
    end: FrameSnapshot,
    progress: float,
    start_alpha: Optional[float],
    end_alpha: Optional[float],
    attribute_keys: Sequence[AttributeKeyframe] = (),
) -> None:
    """
    Write every transform field of out.

    start_alpha/end_alpha come from collapse_for_visibility() and replace
    the snapshots' own alpha.
    """
    for name in TRANSFORM_FIELDS:
        if name == "alpha":
            s, e = start_alpha, end_alpha
        else:
            s, e = getattr(start, name), getattr(end, name)

        local = progress
        if attribute_keys:
            s, e, local = _windowed(attribute_keys, lambda k: k.values.get(name), s, e, progress)

        setattr(out, name, blend_optional(s, e, FIELD_DEFAULTS[name], local))


# ------------------------------------------------------------
# Custom attributes
# ------------------------------------------------------------

def blend_color(result: RGBA, start: RGBA, end: RGBA, progress: float) -> None:
    """
    Per-channel linear blend into result.

    Outside 0..1 the nearest endpoint is copied verbatim.
    """
    if progress < 0:
        result.copy_from(start)
    elif progress > 1:
        result.copy_from(end)
    else:
        result.r = (1.0 - progress) * start.r + progress * end.r
        result.g = (1.0 - progress) * start.g + progress * end.g
        result.b = (1.0 - progress) * start.b + progress * end.b
        result.a = (1.0 - progress) * start.a + progress * end.a


def blend_custom_attributes(
    out: FrameSnapshot,
    start: FrameSnapshot,
    end: FrameSnapshot,
    progress: float,
    attribute_keys: Sequence[AttributeKeyframe] = (),
) -> None:
    """
    Blend custom colors and floats present on both endpoints.

    RGBA objects already held by out are reused. Names missing on either
    side are dropped from out.
    """
    start_colors = start.custom_colors or {}
    end_colors = end.custom_colors or {}
    color_names = [name for name in start_colors if name in end_colors]

    if color_names:
        previous = out.custom_colors or {}
        colors: Dict[str, RGBA] = {}
        for name in color_names:
            result = previous.get(name) or RGBA()
            blend_color(result, start_colors[name], end_colors[name], progress)
            colors[name] = result
        out.custom_colors = colors
    else:
        out.custom_colors = None

    start_floats = start.custom_floats or {}
    end_floats = end.custom_floats or {}
    float_names = set(start_floats) | set(end_floats)
    for key in attribute_keys:
        float_names.update(key.custom_floats)

    floats: Dict[str, float] = {}
    for name in sorted(float_names):
        s, e, local = start_floats.get(name), end_floats.get(name), progress
        if attribute_keys:
            s, e, local = _windowed(attribute_keys, lambda k: k.custom_floats.get(name), s, e, progress)
        if s is None or e is None:
            continue
        floats[name] = s + local * (e - s)
    out.custom_floats = floats or None


# ------------------------------------------------------------
# Cycles
# ------------------------------------------------------------

def apply_cycles(
    out: FrameSnapshot,
    cycles: Sequence[CycleKeyframe],
    progress: float,
    elapsed_seconds: float = 0.0,
) -> None:
    """
    Add cycle oscillations on top of the blended transform.

    Cycles are grouped per (attribute, clock). Inside a group, amplitude and
    offset interpolate linearly between the bracketing keyframes and hold
    their value beyond the first/last one; shape, period and phase come from
    the earlier keyframe of the bracket. Progress cycles run period waves
    over the 0..1 timeline, time cycles period waves per second.
    """
    groups: Dict[Tuple[str, bool], List[CycleKeyframe]] = {}
    for cycle in cycles:
        groups.setdefault((cycle.attribute, isinstance(cycle, TimeCycleKeyframe)), []).append(cycle)

    position = timeline_position(progress)
    for (attribute, timed), group in groups.items():
        window = find_window(group, position)
        prev, nxt = window.previous, window.next

        if prev is None:
            ref, amplitude, offset = nxt, nxt.amplitude, nxt.offset
        elif nxt is None or not window.is_valid:
            ref, amplitude, offset = prev, prev.amplitude, prev.offset
        else:
            t = window.local_progress(progress)
            ref = prev
            amplitude = prev.amplitude + t * (nxt.amplitude - prev.amplitude)
            offset = prev.offset + t * (nxt.offset - prev.offset)

        x = ref.period * (elapsed_seconds if timed else progress) + ref.phase
        base = getattr(out, attribute)
        if base is None:
            base = FIELD_DEFAULTS[attribute]
        setattr(out, attribute, base + offset + amplitude * wave(ref.wave_shape, x))
