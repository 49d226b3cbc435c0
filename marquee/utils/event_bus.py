# marquee/utils/event_bus.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List

log = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], None]

# Event names
SELECTION_CHANGED = "selection_changed"
GESTURE_CANCELLED = "gesture_cancelled"


class EventBus:
    """
    Ultra-light pub/sub bus for selection notifications:
        off = bus.on(SELECTION_CHANGED, lambda payload: ...)
        bus.emit(SELECTION_CHANGED, entered=..., exited=..., selected=...)
        off()  # unsubscribe

    A failing handler is logged and skipped so one subscriber cannot break
    the frame that emitted the event.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> Callable[[], None]:
        self._subs[event].append(handler)

        def off() -> None:
            try:
                self._subs[event].remove(handler)
            except ValueError:
                pass

        return off

    def emit(self, event: str, **payload: Any) -> None:
        for h in list(self._subs.get(event, ())):
            try:
                h(payload)
            except Exception:
                log.exception("Handler %r failed for event %r", h, event)

    def clear(self) -> None:
        self._subs.clear()


# shared instance
bus = EventBus()
