"""
Serialization utilities - enum and model conversion to plain dicts

Provides bidirectional conversion between:
- Enums ↔ Strings (PathMode, Visibility, WaveShape, ...)
- FrameSnapshot ↔ Dict (debug dumps, fixtures)
- Keyframes ↔ Dict (tagged by "kind")
"""

from typing import TypeVar, Type, Any, Dict, Optional
from enum import Enum

from models.enums import Visibility, KeyframeKind, WaveShape, TriggerDirection
from models.color import RGBA
from models.frame_snapshot import FrameSnapshot, TRANSFORM_FIELDS
from models.keyframes import (
    WILDCARD,
    BaseKeyframe,
    PositionKeyframe,
    AttributeKeyframe,
    CycleKeyframe,
    TimeCycleKeyframe,
    TriggerKeyframe,
)
from utils.enum_helper import EnumHelper
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GENERAL)

T = TypeVar('T', bound=Enum)


class Serializer:
    """Central enum and model serialization"""

    # ========================================================================
    # ENUM SERIALIZATION
    # ========================================================================

    @staticmethod
    def enum_to_str(value: Optional[Enum]) -> Optional[str]:
        """Convert any enum to string name"""
        return value.name if value else None

    @staticmethod
    def str_to_enum(value: str, enum_type: Type[T]) -> T:
        """Convert string to enum (case-insensitive), raise ValueError if invalid"""
        try:
            return EnumHelper.from_string(enum_type, value)
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid {enum_type.__name__}: {value}")

    # ========================================================================
    # SNAPSHOT SERIALIZATION
    # ========================================================================

    @staticmethod
    def snapshot_to_dict(snapshot: FrameSnapshot) -> Dict[str, Any]:
        """
        Serialize snapshot to dict

        Unset transform fields are omitted; widget reference is reduced to
        its id.
        """
        result: Dict[str, Any] = {
            "bounds": [snapshot.left, snapshot.top, snapshot.right, snapshot.bottom],
            "visibility": snapshot.visibility.name,
        }
        for name in TRANSFORM_FIELDS:
            value = getattr(snapshot, name)
            if value is not None:
                result[name] = value
        if snapshot.custom_colors:
            result["custom_colors"] = {k: list(c.as_tuple()) for k, c in snapshot.custom_colors.items()}
        if snapshot.custom_floats:
            result["custom_floats"] = dict(snapshot.custom_floats)
        if snapshot.widget_id is not None:
            result["widget_id"] = snapshot.widget_id
        return result

    @staticmethod
    def dict_to_snapshot(data: Dict[str, Any]) -> FrameSnapshot:
        """
        Deserialize dict to FrameSnapshot

        Colors may be given as [r, g, b, a] lists or hex strings.
        """
        try:
            snapshot = FrameSnapshot()
            left, top, right, bottom = data.get("bounds", (0, 0, 0, 0))
            snapshot.set_bounds(int(left), int(top), int(right), int(bottom))

            for name in TRANSFORM_FIELDS:
                if data.get(name) is not None:
                    setattr(snapshot, name, float(data[name]))

            if "visibility" in data:
                snapshot.visibility = Serializer.str_to_enum(data["visibility"], Visibility)

            for name, value in (data.get("custom_colors") or {}).items():
                color = RGBA.from_hex(value) if isinstance(value, str) else RGBA(*value)
                snapshot.add_custom_color(name, color.r, color.g, color.b, color.a)

            for name, value in (data.get("custom_floats") or {}).items():
                snapshot.add_custom_float(name, value)

            return snapshot
        except (KeyError, TypeError, ValueError) as e:
            log.error(f"Failed to deserialize snapshot: {e}")
            raise

    # ========================================================================
    # KEYFRAME SERIALIZATION
    # ========================================================================

    @staticmethod
    def keyframe_to_dict(keyframe: BaseKeyframe) -> Dict[str, Any]:
        """Serialize any keyframe variant, tagged with its kind"""
        result: Dict[str, Any] = {
            "kind": keyframe.kind.name,
            "frame": keyframe.frame_index,
            "target": keyframe.target,
        }
        if isinstance(keyframe, PositionKeyframe):
            result.update(x=keyframe.x, y=keyframe.y)
        elif isinstance(keyframe, AttributeKeyframe):
            result["values"] = dict(keyframe.values)
            if keyframe.custom_floats:
                result["custom_floats"] = dict(keyframe.custom_floats)
        elif isinstance(keyframe, CycleKeyframe):
            result.update(
                attribute=keyframe.attribute,
                wave_shape=keyframe.wave_shape.name,
                period=keyframe.period,
                offset=keyframe.offset,
                amplitude=keyframe.amplitude,
                phase=keyframe.phase,
            )
        elif isinstance(keyframe, TriggerKeyframe):
            result.update(name=keyframe.name, direction=keyframe.direction.name)
        return result

    @staticmethod
    def dict_to_keyframe(data: Dict[str, Any]) -> BaseKeyframe:
        """
        Deserialize a keyframe dict produced by keyframe_to_dict()

        Raises:
            ValueError: Unknown kind or invalid field values
        """
        kind = Serializer.str_to_enum(data["kind"], KeyframeKind)
        frame = int(data["frame"])
        target = data.get("target", WILDCARD)

        if kind is KeyframeKind.POSITION:
            return PositionKeyframe(frame, target, x=float(data.get("x", 0.0)), y=float(data.get("y", 0.0)))

        if kind is KeyframeKind.ATTRIBUTE:
            return AttributeKeyframe(
                frame, target,
                values={k: float(v) for k, v in (data.get("values") or {}).items()},
                custom_floats={k: float(v) for k, v in (data.get("custom_floats") or {}).items()},
            )

        if kind in (KeyframeKind.CYCLE, KeyframeKind.TIME_CYCLE):
            cls = CycleKeyframe if kind is KeyframeKind.CYCLE else TimeCycleKeyframe
            return cls(
                frame, target,
                attribute=data.get("attribute", "alpha"),
                wave_shape=Serializer.str_to_enum(data.get("wave_shape", "SIN"), WaveShape),
                period=float(data.get("period", 1.0)),
                offset=float(data.get("offset", 0.0)),
                amplitude=float(data.get("amplitude", 0.0)),
                phase=float(data.get("phase", 0.0)),
            )

        return TriggerKeyframe(
            frame, target,
            name=str(data.get("name", "")),
            direction=Serializer.str_to_enum(data.get("direction", "BOTH"), TriggerDirection),
        )
