"""
Trigger Bus - synchronous routing of trigger keyframe events

Implements a small pub-sub for TriggerKeyframe crossings:
- Publisher: MotionEngine.interpolate() when progress crosses a trigger
- Subscribers: subscribe(handler, priority, filter_fn)

Handlers run inline on the interpolation thread, in priority order.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from models.enums import LogCategory, TriggerDirection
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.TRIGGER)


@dataclass(frozen=True)
class TriggerEvent:
    """
    One trigger crossing.

    direction is POSITIVE when progress increased past the trigger and
    NEGATIVE when it decreased past it.
    """

    name: str
    widget_id: Any
    frame_index: int
    direction: TriggerDirection
    progress: float
    timestamp: float = field(default_factory=time.time)


@dataclass
class TriggerHandler:
    """Trigger handler registration"""
    handler: Callable[[TriggerEvent], None]
    priority: int
    filter_fn: Optional[Callable[[TriggerEvent], bool]]


class TriggerBus:
    """
    Pub-sub for trigger events

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Fault tolerance (one handler crash doesn't stop others)
    - Bounded event history for debugging

    Example:
        bus = TriggerBus()
        bus.subscribe(
            on_trigger,
            filter_fn=lambda e: e.name == "show_label"
        )
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: List[TriggerHandler] = []
        self._event_history: List[TriggerEvent] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        handler: Callable[[TriggerEvent], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[TriggerEvent], bool]] = None
    ) -> None:
        """
        Subscribe to trigger events

        Args:
            handler: Function called with each TriggerEvent
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        self._handlers.append(TriggerHandler(handler, priority, filter_fn))
        self._handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Trigger handler subscribed",
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, handler: Callable[[TriggerEvent], None]) -> None:
        self._handlers = [h for h in self._handlers if h.handler != handler]

    def publish(self, event: TriggerEvent) -> None:
        """
        Deliver event to all matching handlers

        A handler raising is logged and skipped; remaining handlers still run.
        """
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        log.info(
            f"Trigger '{event.name}' fired",
            widget=event.widget_id,
            frame=event.frame_index,
            direction=event.direction.name
        )

        for handler_entry in self._handlers:
            if handler_entry.filter_fn and not handler_entry.filter_fn(event):
                continue

            try:
                handler_entry.handler(event)
            except Exception as e:
                log.error(
                    f"Trigger handler failed: {getattr(handler_entry.handler, '__name__', handler_entry.handler)}",
                    trigger=event.name,
                    exception=e
                )

    def get_event_history(self, limit: int = 10) -> List[TriggerEvent]:
        """Recent events, newest last"""
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()
