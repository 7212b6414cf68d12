"""Drag & drop reorder tracking.

Gesture recognition lives in the presentation layer; this module only
consumes its two signals and keeps the two-state machine::

    IDLE --drag_start(key)--> DRAGGING --drag_end(source, target)--> IDLE

At most one drag is in flight. A reorder is issued only on ``drag_end`` with
a target; dropping outside a valid zone (target None) or onto the dragged
column itself leaves the order untouched.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..models import ColumnConfig
from .column_store import ColumnStore

__all__ = ["DragState", "DragTracker"]

_logger = logging.getLogger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragTracker:
    def __init__(self, store: ColumnStore) -> None:
        self._store = store
        self._state = DragState.IDLE
        self._active_key: Optional[str] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active_key(self) -> Optional[str]:
        return self._active_key

    @property
    def active_column(self) -> Optional[ColumnConfig]:
        """Column shown in the drag overlay, if a drag is in flight."""
        if self._active_key is None:
            return None
        return self._store.get(self._active_key)

    def drag_start(self, key: str) -> bool:
        if self._store.get(key) is None:
            _logger.debug("drag_start ignored: unknown key %r", key)
            return False
        # A second start while dragging replaces the active column.
        self._state = DragState.DRAGGING
        self._active_key = key
        return True

    def drag_end(self, source_key: str, target_key: Optional[str] = None) -> bool:
        """Finish the drag; returns True when the store order changed."""
        if self._state is not DragState.DRAGGING:
            _logger.debug("drag_end ignored: no drag in flight")
            return False
        self._reset()
        if target_key is None:
            return False
        return self._store.reorder(source_key, target_key)

    def cancel(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._active_key = None
