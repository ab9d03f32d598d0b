"""
Periodic wave shapes used by cycle keyframes.

Every shape has a period of 1.0 in x and an output range of -1..1.
"""

import math

from models.enums import WaveShape

TWO_PI = 2 * math.pi


def wave(shape: WaveShape, x: float) -> float:
    """
    Evaluate a wave at x (in periods).

    Args:
        shape: Wave shape
        x: Position in periods (phase already added)

    Returns:
        Value in -1..1
    """
    if shape is WaveShape.SIN:
        return math.sin(TWO_PI * x)
    if shape is WaveShape.COS:
        return math.cos(TWO_PI * x)
    if shape is WaveShape.SQUARE:
        return 1.0 if (x % 1.0) < 0.5 else -1.0
    if shape is WaveShape.TRIANGLE:
        return 1.0 - abs((x * 4 + 1) % 4 - 2)
    if shape is WaveShape.SAW:
        return ((x * 2 + 1) % 2) - 1.0
    if shape is WaveShape.REVERSE_SAW:
        return 1.0 - ((x * 2 + 1) % 2)
    if shape is WaveShape.BOUNCE:
        v = 1.0 - abs((x * 4) % 4 - 2)
        return 1.0 - v * v
    raise ValueError(f"Unsupported wave shape: {shape}")
