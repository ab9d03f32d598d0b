"""
CurveCache - per-widget memo owned by the calling animation session.

The engine never creates one; callers pass the same instance into every
interpolate() call of a session. Entries are created lazily the first time
a widget is interpolated and live as long as the cache does.

Tracks, per widget:
- Last interpolated progress (trigger crossing detection)
- Clock origin of time-driven cycles
- State key of the last written frame (change detection)

Warstwa: ENGINE / CACHE
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from models.enums import LogCategory
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.CACHE)


@dataclass
class WidgetCurveState:
    """
    Runtime memo for a single widget.

    Attributes:
        widget_id: Widget this entry belongs to
        last_progress: Progress of the previous interpolate() call
        time_origin_nanos: Timestamp of the first call, origin for time cycles
        last_state_key: FrameSnapshot.state_key() of the last written frame
        frames: Number of interpolate() calls seen
    """

    widget_id: Any
    last_progress: Optional[float] = None
    time_origin_nanos: Optional[int] = None
    last_state_key: Optional[tuple] = None
    frames: int = 0

    def elapsed_seconds(self, time_nanos: int) -> float:
        """Seconds since the first timestamp seen; sets the origin on first use"""
        if self.time_origin_nanos is None:
            self.time_origin_nanos = time_nanos
        return (time_nanos - self.time_origin_nanos) / 1e9

    def record_frame(self, state_key: tuple) -> bool:
        """
        Store the new frame state.

        Returns:
            True if it differs from the previous one (always True first time)
        """
        changed = state_key != self.last_state_key
        self.last_state_key = state_key
        self.frames += 1
        return changed

    def reset(self) -> None:
        self.last_progress = None
        self.time_origin_nanos = None
        self.last_state_key = None
        self.frames = 0

    def __repr__(self) -> str:
        return (
            f"WidgetCurveState({self.widget_id!r}, "
            f"last_progress={self.last_progress}, "
            f"frames={self.frames})"
        )


class CurveCache:
    """
    Map of widget id → WidgetCurveState.

    Example:
        cache = CurveCache()
        engine.interpolate(out, 0.25, time.monotonic_ns(), cache)
        cache.get("button").last_progress  # 0.25
    """

    def __init__(self):
        self._states: Dict[Any, WidgetCurveState] = {}

    def state_for(self, widget_id: Any) -> WidgetCurveState:
        """Return the entry for widget_id, creating it on first use"""
        state = self._states.get(widget_id)
        if state is None:
            state = WidgetCurveState(widget_id=widget_id)
            self._states[widget_id] = state
            log.debug("Curve state created", widget=widget_id)
        return state

    def get(self, widget_id: Any) -> Optional[WidgetCurveState]:
        return self._states.get(widget_id)

    def reset(self, widget_id: Any = None) -> None:
        """Forget one widget's history, or every widget's when widget_id is None"""
        if widget_id is None:
            for state in self._states.values():
                state.reset()
            return
        state = self._states.get(widget_id)
        if state is not None:
            state.reset()

    def clear(self) -> None:
        self._states.clear()

    def __contains__(self, widget_id: Any) -> bool:
        return widget_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[WidgetCurveState]:
        return iter(self._states.values())
