"""
Enums for the motion interpolation engine
"""

from enum import Enum, auto


class Visibility(Enum):
    """
    Widget visibility states

    VISIBLE: Widget is drawn and takes space
    INVISIBLE: Widget takes space but is not drawn
    GONE: Widget takes no space (collapses during interpolation)
    """
    VISIBLE = auto()
    INVISIBLE = auto()
    GONE = auto()


class PathMode(Enum):
    """Shape of the path followed by the widget position"""
    LINEAR = auto()                # Straight line start → end
    ARC_START_VERTICAL = auto()    # Quarter ellipse, vertical tangent at start
    ARC_START_HORIZONTAL = auto()  # Quarter ellipse, horizontal tangent at start


class KeyframeKind(Enum):
    """Tag of each keyframe variant"""
    POSITION = auto()
    ATTRIBUTE = auto()
    CYCLE = auto()
    TIME_CYCLE = auto()
    TRIGGER = auto()


class WaveShape(Enum):
    """Oscillator wave shapes used by cycle keyframes"""
    SIN = auto()
    SQUARE = auto()
    TRIANGLE = auto()
    SAW = auto()
    REVERSE_SAW = auto()
    COS = auto()
    BOUNCE = auto()


class TriggerDirection(Enum):
    """Which crossing direction fires a trigger keyframe"""
    BOTH = auto()       # Fire on any crossing
    POSITIVE = auto()   # Fire only while progress increases
    NEGATIVE = auto()   # Fire only while progress decreases


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ENGINE = auto()      # Motion session setup, interpolation
    PATH = auto()        # Path interpolation
    KEYFRAME = auto()    # Keyframe window resolution
    BLEND = auto()       # Attribute blending
    CACHE = auto()       # Per-widget curve cache
    TRIGGER = auto()     # Trigger keyframes and listeners
    SYSTEM = auto()      # Startup, errors

    GENERAL = auto()    # Default general category
