"""
Models package - Value types for the motion interpolation engine
"""

from .enums import Visibility, PathMode, KeyframeKind, WaveShape, TriggerDirection, LogLevel, LogCategory
from .color import RGBA
from .frame_snapshot import FrameSnapshot, WidgetHandle, TRANSFORM_FIELDS
from .keyframes import (
    WILDCARD,
    PositionKeyframe,
    AttributeKeyframe,
    CycleKeyframe,
    TimeCycleKeyframe,
    TriggerKeyframe,
    KeyframeSet,
)
from .transition import TransitionConfig, parse_easing
from .config import EngineConfig

__all__ = [
    'Visibility',
    'PathMode',
    'KeyframeKind',
    'WaveShape',
    'TriggerDirection',
    'LogLevel',
    'LogCategory',
    'RGBA',
    'FrameSnapshot',
    'WidgetHandle',
    'TRANSFORM_FIELDS',
    'WILDCARD',
    'PositionKeyframe',
    'AttributeKeyframe',
    'CycleKeyframe',
    'TimeCycleKeyframe',
    'TriggerKeyframe',
    'KeyframeSet',
    'TransitionConfig',
    'parse_easing',
    'EngineConfig',
]
