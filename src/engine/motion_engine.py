"""
MotionEngine - composition root of the interpolation pipeline

One engine instance drives one motion session: a start snapshot, an end
snapshot and the keyframes between them. Every interpolate() call writes
the widget's visual state at a progress value into a caller-owned output
snapshot.

Pipeline per call:
    easing → visibility collapse → position window → path
           → attribute blend → cycles → triggers → change detection

Single-threaded and synchronous; no I/O in the hot path beyond logging.

Warstwa: ENGINE
"""

from __future__ import annotations
from typing import Iterable, Optional

from models.config import EngineConfig
from models.enums import KeyframeKind, LogCategory, LogLevel, PathMode, TriggerDirection
from models.frame_snapshot import FrameSnapshot
from models.keyframes import KeyframeSet, TriggerKeyframe, MAX_FRAME
from models.transition import TransitionConfig
from engine.attribute_blender import (
    apply_cycles,
    blend_custom_attributes,
    blend_transform,
    blend_visibility,
    collapse_for_visibility,
)
from engine.curve_cache import CurveCache, WidgetCurveState
from engine.keyframe_resolver import resolve_position_window
from engine.path_interpolator import interpolate_path
from engine.trigger_bus import TriggerBus, TriggerEvent
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.ENGINE)


class MotionEngine:
    """
    Interpolates a widget between two snapshots

    Example:
        engine = MotionEngine()
        engine.configure(start, end, keyframes=[PositionKeyframe(50, x=0.2, y=0.8)],
                         parent_width=1000, parent_height=800)
        out = FrameSnapshot()
        cache = CurveCache()
        changed = engine.interpolate(out, 0.5, time.monotonic_ns(), cache)
    """

    def __init__(self, config: Optional[EngineConfig] = None, trigger_bus: Optional[TriggerBus] = None):
        self.config = config or EngineConfig()
        self._trigger_bus = trigger_bus or TriggerBus()

        self.start: Optional[FrameSnapshot] = None
        self.end: Optional[FrameSnapshot] = None
        self.keyframes = KeyframeSet()
        self.transition = TransitionConfig(self.config.path_mode, self.config.duration_ms, self.config.easing)
        self.parent_width = self.config.parent_width
        self.parent_height = self.config.parent_height

    @classmethod
    def from_config(cls, config: EngineConfig) -> 'MotionEngine':
        return cls(config=config)

    @property
    def trigger_bus(self) -> TriggerBus:
        return self._trigger_bus

    @property
    def path_mode(self) -> PathMode:
        return self.transition.path_mode

    @property
    def is_configured(self) -> bool:
        return self.start is not None and self.end is not None

    # ------------------------------------------------------------
    # Session setup
    # ------------------------------------------------------------

    def configure(
        self,
        start: FrameSnapshot,
        end: FrameSnapshot,
        keyframes: Iterable = (),
        path_mode: Optional[PathMode] = None,
        parent_width: Optional[int] = None,
        parent_height: Optional[int] = None,
        duration_ms: Optional[int] = None,
        easing: Optional[str] = None,
    ) -> 'MotionEngine':
        """
        Set up a motion session

        Snapshots are copied, so later changes to the caller's objects do not
        affect the session. Arguments left as None fall back to the engine
        config.

        Args:
            start: Pose at progress 0
            end: Pose at progress 1
            keyframes: Any keyframe variants, in any order
            path_mode: Position path shape
            parent_width, parent_height: Container size for keyframe fractions
            duration_ms: Session duration, used by progress_at()
            easing: Easing name or expression (see parse_easing)

        Returns:
            self, for chaining

        Raises:
            ValueError: If start/end is None or the easing cannot be parsed
        """
        if start is None or end is None:
            raise ValueError("configure() needs both start and end snapshots")

        self.start = start.copy()
        self.end = end.copy()
        self.keyframes = keyframes if isinstance(keyframes, KeyframeSet) else KeyframeSet(keyframes)
        self.transition = TransitionConfig(
            path_mode=path_mode if path_mode is not None else self.config.path_mode,
            duration_ms=duration_ms if duration_ms is not None else self.config.duration_ms,
            easing=easing if easing is not None else self.config.easing,
        )
        self.parent_width = parent_width if parent_width is not None else self.config.parent_width
        self.parent_height = parent_height if parent_height is not None else self.config.parent_height

        log.info(
            "Motion configured",
            widget=self.start.widget_id,
            path=self.transition.path_mode.name,
            easing=self.transition.easing_name,
            keyframes=len(self.keyframes),
            parent=f"{self.parent_width}x{self.parent_height}",
        )
        return self

    def progress_at(self, time_nanos: int, start_nanos: int = 0) -> float:
        """Progress of the session at time_nanos (not clamped)"""
        return (time_nanos - start_nanos) / (self.transition.duration_ms * 1_000_000)

    # ------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------

    def interpolate(
        self,
        out: FrameSnapshot,
        progress: float,
        time_nanos: int = 0,
        cache: Optional[CurveCache] = None,
    ) -> bool:
        """
        Write the interpolated state at progress into out

        Args:
            out: Destination snapshot (reused between calls)
            progress: Global progress; values outside 0..1 extrapolate
            time_nanos: Monotonic timestamp, drives time cycles
            cache: Session memo; needed for trigger crossing detection

        Returns:
            True if the visual state differs from the previous call for this
            widget (with cache) or from out's previous content (without)

        Raises:
            ValueError: If out is None
            RuntimeError: If configure() was never called
        """
        if out is None:
            raise ValueError("Output snapshot must not be None")
        if not self.is_configured:
            raise RuntimeError("MotionEngine.interpolate() called before configure()")

        start, end = self.start, self.end
        widget_id = start.widget_id
        state = cache.state_for(widget_id) if cache is not None else None
        previous_key = out.state_key() if state is None else None

        eased = self.transition.ease_function(progress)

        collapsed = collapse_for_visibility(start, end)
        window = resolve_position_window(
            self.keyframes, widget_id, eased, collapsed.anchors, self.parent_width, self.parent_height
        )
        bounds = interpolate_path(window.anchors, window.progress, self.transition.path_mode, size_progress=eased)
        out.set_bounds(bounds.left, bounds.top, bounds.right, bounds.bottom)

        attribute_keys = self.keyframes.of_kind(KeyframeKind.ATTRIBUTE, widget_id)
        blend_transform(out, start, end, eased, collapsed.start_alpha, collapsed.end_alpha, attribute_keys)
        blend_custom_attributes(out, start, end, eased, attribute_keys)
        out.visibility = blend_visibility(start.visibility, end.visibility, eased)
        out.widget = start.widget

        self._apply_cycles(out, widget_id, eased, time_nanos, state)
        if state is not None:
            self._fire_triggers(widget_id, eased, state)

        if state is not None:
            changed = state.record_frame(out.state_key())
            state.last_progress = eased
        else:
            changed = out.state_key() != previous_key

        if log.is_enabled_for(LogLevel.DEBUG):
            log.debug(
                "Frame interpolated",
                widget=widget_id,
                progress=f"{progress:.4f}",
                bounds=str(out),
                changed=changed,
            )
        return changed

    def _apply_cycles(
        self,
        out: FrameSnapshot,
        widget_id,
        progress: float,
        time_nanos: int,
        state: Optional[WidgetCurveState],
    ) -> None:
        cycles = self.keyframes.of_kind(KeyframeKind.CYCLE, widget_id)
        cycles += self.keyframes.of_kind(KeyframeKind.TIME_CYCLE, widget_id)
        if not cycles:
            return
        elapsed = state.elapsed_seconds(time_nanos) if state is not None else time_nanos / 1e9
        apply_cycles(out, cycles, progress, elapsed)

    def _fire_triggers(self, widget_id, progress: float, state: WidgetCurveState) -> None:
        """Publish every trigger crossed between the previous and current progress"""
        last = state.last_progress
        if last is None or last == progress:
            return

        direction = TriggerDirection.POSITIVE if progress > last else TriggerDirection.NEGATIVE
        for trigger in self.keyframes.of_kind(KeyframeKind.TRIGGER, widget_id):
            if not _crossed(trigger, last, progress):
                continue
            if trigger.direction is not TriggerDirection.BOTH and trigger.direction is not direction:
                continue
            self._trigger_bus.publish(TriggerEvent(
                name=trigger.name,
                widget_id=widget_id,
                frame_index=trigger.frame_index,
                direction=direction,
                progress=progress,
            ))


def _crossed(trigger: TriggerKeyframe, last: float, current: float) -> bool:
    """True when progress arrived at or passed the trigger moving from last to current"""
    position = trigger.frame_index / float(MAX_FRAME)
    if current > last:
        return last < position <= current
    return current <= position < last
