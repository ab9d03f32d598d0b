"""
Keyframe window resolution.

Finds the [previous, next] keyframe bracket around the current frame and
re-normalizes progress inside it, so the path interpolator always sees a
single 0..1 segment even when the timeline is split by keyframes.

Warstwa: ENGINE / KEYFRAMES
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from models.enums import KeyframeKind, LogCategory, LogLevel
from models.keyframes import BaseKeyframe, KeyframeSet, MIN_FRAME, MAX_FRAME
from engine.path_interpolator import PathAnchors
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.KEYFRAME)


@dataclass(frozen=True)
class KeyframeWindow:
    """
    Bracket around a frame number.

    previous/next are None when the bracket edge falls back to the
    timeline start (0) or end (100).
    """

    previous: Optional[BaseKeyframe]
    next: Optional[BaseKeyframe]
    start_frame: int
    end_frame: int

    @property
    def is_valid(self) -> bool:
        return self.end_frame > self.start_frame

    def local_progress(self, progress: float) -> float:
        """Map global progress into this window (caller checks is_valid)"""
        return (progress * 100.0 - self.start_frame) / float(self.end_frame - self.start_frame)


@dataclass(frozen=True)
class WindowResult:
    """Anchors and progress to feed the path interpolator"""

    anchors: PathAnchors
    progress: float
    window: Optional[KeyframeWindow] = None


def timeline_position(progress: float) -> float:
    """
    Position on the 0..100 keyframe timeline for a progress value.

    Not rounded, so windows switch exactly at keyframe frames.
    """
    return progress * 100.0


def find_window(keyframes: Sequence[BaseKeyframe], frame_number: float) -> KeyframeWindow:
    """
    Bracket frame_number with the nearest keyframes on each side.

    keyframes must be ordered by frame_index. previous is the last one with
    frame_index <= frame_number, next the first one with frame_index >=
    frame_number. When both resolve to the same keyframe, next is dropped.
    """
    previous = None
    following = None
    for keyframe in keyframes:
        if keyframe.frame_index <= frame_number:
            previous = keyframe
        if keyframe.frame_index >= frame_number and following is None:
            following = keyframe

    if previous is not None and previous is following:
        following = None

    return KeyframeWindow(
        previous=previous,
        next=following,
        start_frame=previous.frame_index if previous is not None else MIN_FRAME,
        end_frame=following.frame_index if following is not None else MAX_FRAME,
    )


def resolve_position_window(
    keyframes: KeyframeSet,
    widget_id: Any,
    progress: float,
    anchors: PathAnchors,
    parent_width: int,
    parent_height: int,
) -> WindowResult:
    """
    Override path anchors with the position keyframes bracketing progress.

    No matching keyframes → anchors and progress pass through unchanged.
    A degenerate window (end <= start) also passes through, for this call
    only.

    Args:
        keyframes: All keyframes of the session
        widget_id: Identity of the widget being interpolated
        progress: Global progress
        anchors: Anchors derived from the start/end snapshots
        parent_width, parent_height: Container size for fractional positions

    Returns:
        WindowResult with possibly overridden anchors and local progress
    """
    positions = keyframes.of_kind(KeyframeKind.POSITION, widget_id)
    if not positions:
        return WindowResult(anchors=anchors, progress=progress)

    frame_number = timeline_position(progress)
    window = find_window(positions, frame_number)

    if not window.is_valid:
        if log.is_enabled_for(LogLevel.DEBUG):
            log.debug(
                "Degenerate keyframe window, using plain interpolation",
                widget=widget_id,
                frame=frame_number,
                window=f"{window.start_frame} → {window.end_frame}",
            )
        return WindowResult(anchors=anchors, progress=progress)

    if window.previous is not None:
        anchors = anchors.with_start(window.previous.x * parent_width, window.previous.y * parent_height)
    if window.next is not None:
        anchors = anchors.with_end(window.next.x * parent_width, window.next.y * parent_height)

    return WindowResult(anchors=anchors, progress=window.local_progress(progress), window=window)
