"""Synchronous event bus for column settings notifications.

The editing session publishes :class:`ColumnEvent` notifications so table
hosts, status bars or loggers can react without holding a reference to the
session. Dispatch is synchronous and in subscription order. A raising handler
is logged and does not stop the remaining handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "ColumnEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class ColumnEvent(str, Enum):
    COLUMNS_CHANGED = "columns_changed"
    HISTORY_UNDONE = "history_undone"
    PRESET_APPLIED = "preset_applied"
    DRAG_STARTED = "drag_started"
    DRAG_ENDED = "drag_ended"
    COLUMNS_APPLIED = "columns_applied"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - structural
    def __call__(self, event: Event) -> None: ...  # pragma: no cover


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _event_key(name: str | ColumnEvent) -> str:
    return name.value if isinstance(name, ColumnEvent) else name


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}

    def subscribe(self, name: str | ColumnEvent, handler: EventHandler) -> Subscription:
        sub = Subscription(event=_event_key(name), handler=handler)
        self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = [s for s in self._subs.get(sub.event, ()) if s is not sub]
        if bucket:
            self._subs[sub.event] = bucket
        else:
            self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | ColumnEvent, payload: Any = None) -> Event:
        evt = Event(name=_event_key(name), payload=payload, timestamp=perf_counter())
        # Iterate a copy so handlers may (un)subscribe while being called.
        for sub in list(self._subs.get(evt.name, ())):
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception:  # noqa: BLE001 - isolate handler failures
                _logger.exception("column event handler failed for %s", evt.name)
        return evt
