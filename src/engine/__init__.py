"""
Engine package - Interpolation pipeline for keyframed widget motion
"""

from .path_interpolator import PathAnchors, PathResult, interpolate_path, round_half_up
from .keyframe_resolver import KeyframeWindow, WindowResult, find_window, resolve_position_window
from .curve_cache import CurveCache, WidgetCurveState
from .trigger_bus import TriggerBus, TriggerEvent
from .motion_engine import MotionEngine

__all__ = [
    'PathAnchors',
    'PathResult',
    'interpolate_path',
    'round_half_up',
    'KeyframeWindow',
    'WindowResult',
    'find_window',
    'resolve_position_window',
    'CurveCache',
    'WidgetCurveState',
    'TriggerBus',
    'TriggerEvent',
    'MotionEngine',
]
