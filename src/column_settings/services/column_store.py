"""Column store: the mutation engine behind the column settings editor.

Holds the live column sequence for one editing session together with its
undo history. Every structural or visibility edit pushes the pre-edit
sequence onto the :class:`HistoryStack` before installing the new one; width
edits are continuous slider adjustments and are not tracked.

Failure policy:
 - Unknown keys are silent no-ops (no history entry, returns False).
 - Widths are clamped into range, never rejected.
 - Reorders onto the same column or with a missing key are no-ops.
 - Arrow moves at the sequence boundary are no-ops and do not consume a
   history slot.

All mutators return ``True`` when the edit was applied (a history entry was
recorded, or for widths, the value was stored).
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from ..design.accessible_reorder import (
    ReorderActionResult,
    move_bottom,
    move_down,
    move_to,
    move_top,
    move_up,
)
from ..models import (
    ColumnConfig,
    ColumnSequence,
    PinState,
    Preset,
    clamp_width,
    ensure_unique_keys,
)
from .history import HistoryStack

__all__ = ["ColumnStore"]

_logger = logging.getLogger(__name__)


class ColumnStore:
    def __init__(
        self, columns: Iterable[ColumnConfig] = (), *, history: HistoryStack | None = None
    ) -> None:
        self._columns: ColumnSequence = ensure_unique_keys(columns)
        self._history = history if history is not None else HistoryStack()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def columns(self) -> ColumnSequence:
        return self._columns

    def keys(self) -> List[str]:
        return [c.key for c in self._columns]

    def get(self, key: str) -> Optional[ColumnConfig]:
        idx = self._index(key)
        return None if idx is None else self._columns[idx]

    def index_of(self, key: str) -> Optional[int]:
        return self._index(key)

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def history_depth(self) -> int:
        return len(self._history)

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self):
        return iter(self._columns)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _index(self, key: str) -> Optional[int]:
        for i, col in enumerate(self._columns):
            if col.key == key:
                return i
        return None

    def _commit(self, new_columns: Sequence[ColumnConfig], op: str) -> bool:
        self._history.push(self._columns)
        self._columns = tuple(new_columns)
        _logger.debug("column store %s (history=%d)", op, len(self._history))
        return True

    def _update_one(
        self, key: str, op: str, change: Callable[[ColumnConfig], ColumnConfig]
    ) -> bool:
        idx = self._index(key)
        if idx is None:
            _logger.debug("column store %s ignored: unknown key %r", op, key)
            return False
        updated = list(self._columns)
        updated[idx] = change(updated[idx])
        return self._commit(updated, f"{op}({key})")

    def _update_all(self, op: str, change: Callable[[ColumnConfig], ColumnConfig]) -> bool:
        return self._commit([change(c) for c in self._columns], op)

    def _apply_move(self, result: ReorderActionResult[ColumnConfig], op: str) -> bool:
        if not result.changed:
            return False
        return self._commit(result.items, op)

    # ------------------------------------------------------------------
    # Visibility / pinning / width
    # ------------------------------------------------------------------
    def toggle_visibility(self, key: str) -> bool:
        # ColumnConfig forces required columns back to visible.
        return self._update_one(
            key, "toggle_visibility", lambda c: c.with_changes(visible=not c.visible)
        )

    def cycle_pin(self, key: str) -> bool:
        return self._update_one(key, "cycle_pin", lambda c: c.with_changes(pinned=c.pinned.next()))

    def set_width(self, key: str, width: int) -> bool:
        idx = self._index(key)
        if idx is None:
            return False
        updated = list(self._columns)
        updated[idx] = updated[idx].with_changes(width=clamp_width(width))
        self._columns = tuple(updated)
        return True

    def select_all(self) -> bool:
        return self._update_all("select_all", lambda c: c.with_changes(visible=True))

    def deselect_all(self) -> bool:
        return self._update_all("deselect_all", lambda c: c.with_changes(visible=c.required))

    def unpin_all(self) -> bool:
        return self._update_all("unpin_all", lambda c: c.with_changes(pinned=PinState.NONE))

    def apply_preset(self, preset: Preset) -> bool:
        return self._update_all(
            f"apply_preset({preset.name})",
            lambda c: c.with_changes(visible=preset.wants_visible(c)),
        )

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------
    def move_up(self, key: str) -> bool:
        idx = self._index(key)
        if idx is None:
            return False
        return self._apply_move(move_up(self._columns, idx), f"move_up({key})")

    def move_down(self, key: str) -> bool:
        idx = self._index(key)
        if idx is None:
            return False
        return self._apply_move(move_down(self._columns, idx), f"move_down({key})")

    def move_to_top(self, key: str) -> bool:
        idx = self._index(key)
        if idx is None:
            return False
        return self._apply_move(move_top(self._columns, idx), f"move_to_top({key})")

    def move_to_bottom(self, key: str) -> bool:
        idx = self._index(key)
        if idx is None:
            return False
        return self._apply_move(move_bottom(self._columns, idx), f"move_to_bottom({key})")

    def reorder(self, source_key: str, target_key: str) -> bool:
        """Move ``source_key`` to the position currently held by ``target_key``."""
        if source_key == target_key:
            return False
        src = self._index(source_key)
        dest = self._index(target_key)
        if src is None or dest is None:
            _logger.debug("reorder ignored: %r -> %r", source_key, target_key)
            return False
        return self._apply_move(
            move_to(self._columns, src, dest), f"reorder({source_key}->{target_key})"
        )

    # ------------------------------------------------------------------
    # Whole-sequence operations
    # ------------------------------------------------------------------
    def reset(self, default_columns: Iterable[ColumnConfig]) -> bool:
        return self._commit(ensure_unique_keys(default_columns), "reset")

    def reinitialize(self, columns: Iterable[ColumnConfig]) -> None:
        """Replace the live sequence from an external source and drop history."""
        self._columns = ensure_unique_keys(columns)
        self._history.clear()

    def undo(self) -> bool:
        previous = self._history.pop()
        if previous is None:
            return False
        self._columns = previous
        _logger.debug("column store undo (history=%d)", len(self._history))
        return True
