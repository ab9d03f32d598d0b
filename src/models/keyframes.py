"""
Keyframe models - closed set of keyframe variants.

Every keyframe sits at a frame_index on a 0..100 timeline and targets one
widget (by id) or all widgets (WILDCARD). Each variant carries only the
fields it needs; consumers dispatch on the concrete type in one place
instead of calling overridden methods.

✔ PositionKeyframe   - fractional anchor position inside the parent
✔ AttributeKeyframe  - absolute transform values at a frame
✔ CycleKeyframe      - progress-driven oscillation of one attribute
✔ TimeCycleKeyframe  - clock-driven oscillation of one attribute
✔ TriggerKeyframe    - named event fired when progress crosses the frame
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Union

from models.enums import KeyframeKind, WaveShape, TriggerDirection
from models.frame_snapshot import TRANSFORM_FIELDS

WILDCARD = "*"

MIN_FRAME = 0
MAX_FRAME = 100


# =====================================================================
# Base class (frame position + target)
# =====================================================================

@dataclass(frozen=True)
class BaseKeyframe:
    """
    Shared metadata for all keyframe variants.
    """

    KIND: ClassVar[KeyframeKind]

    frame_index: int
    target: Any = WILDCARD

    def __post_init__(self):
        if not isinstance(self.frame_index, int) or isinstance(self.frame_index, bool):
            raise ValueError(f"frame_index must be an int, got {self.frame_index!r}")
        if not MIN_FRAME <= self.frame_index <= MAX_FRAME:
            raise ValueError(f"frame_index must be in {MIN_FRAME}..{MAX_FRAME}, got {self.frame_index}")

    @property
    def kind(self) -> KeyframeKind:
        return self.KIND

    def matches(self, widget_id: Any) -> bool:
        """True if this keyframe applies to the given widget"""
        return self.target == WILDCARD or self.target == widget_id


# =====================================================================
# Variants
# =====================================================================

@dataclass(frozen=True)
class PositionKeyframe(BaseKeyframe):
    """
    Anchor position as a fraction (0..1) of the parent width/height.
    """

    KIND: ClassVar[KeyframeKind] = KeyframeKind.POSITION

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class AttributeKeyframe(BaseKeyframe):
    """
    Absolute transform values pinned at frame_index.

    values keys are FrameSnapshot transform field names (e.g. "alpha",
    "rotation_z"); custom_floats keys are custom attribute names.
    """

    KIND: ClassVar[KeyframeKind] = KeyframeKind.ATTRIBUTE

    values: Dict[str, float] = field(default_factory=dict)
    custom_floats: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        super().__post_init__()
        unknown = [name for name in self.values if name not in TRANSFORM_FIELDS]
        if unknown:
            raise ValueError(f"Unknown transform attribute(s): {unknown}")


@dataclass(frozen=True)
class CycleKeyframe(BaseKeyframe):
    """
    Oscillation added on top of an attribute, phase driven by progress.

    period: Number of full waves over the whole 0..1 timeline
    """

    KIND: ClassVar[KeyframeKind] = KeyframeKind.CYCLE

    attribute: str = "alpha"
    wave_shape: WaveShape = WaveShape.SIN
    period: float = 1.0
    offset: float = 0.0
    amplitude: float = 0.0
    phase: float = 0.0

    def __post_init__(self):
        super().__post_init__()
        if self.attribute not in TRANSFORM_FIELDS:
            raise ValueError(f"Unknown transform attribute: {self.attribute}")


@dataclass(frozen=True)
class TimeCycleKeyframe(CycleKeyframe):
    """
    Same as CycleKeyframe but the phase follows the wall clock.

    period: Waves per second
    """

    KIND: ClassVar[KeyframeKind] = KeyframeKind.TIME_CYCLE


@dataclass(frozen=True)
class TriggerKeyframe(BaseKeyframe):
    """
    Named event fired when progress crosses frame_index.
    """

    KIND: ClassVar[KeyframeKind] = KeyframeKind.TRIGGER

    name: str = ""
    direction: TriggerDirection = TriggerDirection.BOTH


Keyframe = Union[PositionKeyframe, AttributeKeyframe, CycleKeyframe, TimeCycleKeyframe, TriggerKeyframe]


# =====================================================================
# Ordered collection
# =====================================================================

class KeyframeSet:
    """
    Immutable, frame-ordered collection of keyframes of any kind.

    Ordering is stable: keyframes sharing a frame_index keep their
    insertion order.

    Example:
        keys = KeyframeSet([PositionKeyframe(50, "button", x=0.5, y=0.5)])
        keys.of_kind(KeyframeKind.POSITION, "button")
    """

    def __init__(self, keyframes: Optional[Iterable[Keyframe]] = None):
        self._keyframes: tuple = tuple(sorted(keyframes or (), key=lambda k: k.frame_index))
        self._by_kind: Dict[KeyframeKind, tuple] = {}
        for kind in KeyframeKind:
            self._by_kind[kind] = tuple(k for k in self._keyframes if k.kind is kind)

    def of_kind(self, kind: KeyframeKind, widget_id: Any = None) -> List[Keyframe]:
        """Keyframes of one kind that apply to widget_id, in frame order"""
        return [k for k in self._by_kind[kind] if k.matches(widget_id)]

    def has(self, kind: KeyframeKind) -> bool:
        return bool(self._by_kind[kind])

    def __iter__(self):
        return iter(self._keyframes)

    def __len__(self) -> int:
        return len(self._keyframes)

    def __bool__(self) -> bool:
        return bool(self._keyframes)

    def __repr__(self) -> str:
        counts = {kind.name: len(items) for kind, items in self._by_kind.items() if items}
        return f"KeyframeSet({counts})"
