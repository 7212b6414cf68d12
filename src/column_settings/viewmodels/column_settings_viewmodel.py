"""ViewModel for the column settings editor.

Separates the editor's state and derivation logic from any widget so the
whole editing session can be exercised without a GUI:

 - ``committed``: the configuration the host table currently uses. It only
   changes on :meth:`ColumnSettingsViewModel.apply`.
 - an editing session (store + undo history + drag tracker + search text)
   opened from the committed configuration and discarded on close.

On apply the session result is written through the persistence service,
handed to the host callback exactly once, and published as
``ColumnEvent.COLUMNS_APPLIED``. Intermediate edits only publish
``COLUMNS_CHANGED``; they are never persisted.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from ..design.accessible_reorder import interpret_key_command
from ..models import ColumnConfig, ColumnSequence, PinState, Preset, ensure_unique_keys
from ..services.column_persistence import ColumnConfigPersistenceService
from ..services.column_store import ColumnStore
from ..services.drag_tracker import DragState, DragTracker
from ..services.event_bus import ColumnEvent, EventBus
from ..services.presets import PresetEngine
from ..services.section_view import (
    ColumnSummary,
    Section,
    SectionKind,
    derive_sections,
    summarize,
)

__all__ = ["ColumnRow", "ColumnSettingsViewModel", "pin_tooltip"]


_PIN_TOOLTIPS = {
    PinState.NONE: "Click to pin left",
    PinState.LEFT: "Pinned left (click to pin right)",
    PinState.RIGHT: "Pinned right (click to unpin)",
}


def pin_tooltip(pinned: PinState) -> str:
    return _PIN_TOOLTIPS[pinned]


@dataclass(frozen=True)
class ColumnRow:
    """One row of the editor list, with the affordances it should offer."""

    column: ColumnConfig
    section: SectionKind
    is_first: bool
    is_last: bool
    show_width_editor: bool

    @property
    def show_controls(self) -> bool:
        # Move and pin buttons are not offered for hidden columns.
        return self.section is not SectionKind.HIDDEN

    @property
    def can_toggle(self) -> bool:
        return not self.column.required

    @property
    def display_width(self) -> int:
        return self.column.effective_width

    @property
    def pin_tooltip(self) -> str:
        return pin_tooltip(self.column.pinned)


class ColumnSettingsViewModel:
    def __init__(
        self,
        default_columns: Iterable[ColumnConfig],
        *,
        persistence: ColumnConfigPersistenceService | None = None,
        presets: PresetEngine | None = None,
        on_apply: Callable[[ColumnSequence], None] | None = None,
        event_bus: EventBus | None = None,
    ):
        self._defaults: ColumnSequence = ensure_unique_keys(default_columns)
        self._persistence = persistence
        self._on_apply = on_apply
        self._bus = event_bus
        self.presets = presets if presets is not None else PresetEngine()
        self.committed: ColumnSequence = (
            persistence.load(self._defaults) if persistence else self._defaults
        )
        self.store = ColumnStore(self.committed)
        self.drag = DragTracker(self.store)
        self._search = ""
        self.show_width_editors = False
        self.is_open = False

    # Session lifecycle ----------------------------------------------
    def open(self, columns: Iterable[ColumnConfig] | None = None) -> None:
        """Start a session from ``columns`` (default: the committed config)."""
        self.store.reinitialize(self.committed if columns is None else columns)
        self.drag.cancel()
        self._search = ""
        self.is_open = True

    def close(self) -> None:
        """Discard the session without committing."""
        self.drag.cancel()
        self.is_open = False

    def apply(self) -> ColumnSequence:
        result = self.store.columns
        if self._persistence is not None:
            self._persistence.save(result)
        self.committed = result
        if self._on_apply is not None:
            self._on_apply(result)
        self._emit(ColumnEvent.COLUMNS_APPLIED, result)
        self.close()
        return result

    @property
    def columns(self) -> ColumnSequence:
        return self.store.columns

    @property
    def defaults(self) -> ColumnSequence:
        return self._defaults

    # Derived display state --------------------------------------------
    @property
    def search_text(self) -> str:
        return self._search

    @search_text.setter
    def search_text(self, text: str) -> None:
        self._search = text or ""

    def sections(self) -> List[Section]:
        return derive_sections(self.store.columns, self._search)

    def rows(self, section: Section) -> List[ColumnRow]:
        last = len(section.columns) - 1
        return [
            ColumnRow(
                column=col,
                section=section.kind,
                is_first=i == 0,
                is_last=i == last,
                show_width_editor=(
                    self.show_width_editors
                    and col.visible
                    and section.kind is not SectionKind.HIDDEN
                ),
            )
            for i, col in enumerate(section.columns)
        ]

    def summary(self) -> ColumnSummary:
        return summarize(self.store.columns)

    def no_match_message(self) -> Optional[str]:
        if self._search and not self.sections():
            return f'No columns match "{self._search}"'
        return None

    def toggle_width_editors(self) -> bool:
        self.show_width_editors = not self.show_width_editors
        return self.show_width_editors

    @property
    def can_undo(self) -> bool:
        return self.store.can_undo

    # Edits --------------------------------------------------------------
    def toggle_visibility(self, key: str) -> bool:
        return self._changed(self.store.toggle_visibility(key), "toggle_visibility", key)

    def cycle_pin(self, key: str) -> bool:
        return self._changed(self.store.cycle_pin(key), "cycle_pin", key)

    def set_width(self, key: str, width: int) -> bool:
        return self._changed(self.store.set_width(key, width), "set_width", key)

    def move_up(self, key: str) -> bool:
        return self._changed(self.store.move_up(key), "move_up", key)

    def move_down(self, key: str) -> bool:
        return self._changed(self.store.move_down(key), "move_down", key)

    def handle_key(self, key: str, command: str) -> bool:
        """Keyboard reorder fallback (``up``, ``down``, ``home``, ``end``...)."""
        verb = interpret_key_command(command)
        ops = {
            "up": self.store.move_up,
            "down": self.store.move_down,
            "top": self.store.move_to_top,
            "bottom": self.store.move_to_bottom,
        }
        if verb not in ops:
            return False
        return self._changed(ops[verb](key), f"key:{verb}", key)

    def select_all(self) -> bool:
        return self._changed(self.store.select_all(), "select_all")

    def deselect_all(self) -> bool:
        return self._changed(self.store.deselect_all(), "deselect_all")

    def unpin_all(self) -> bool:
        return self._changed(self.store.unpin_all(), "unpin_all")

    def reset(self) -> bool:
        return self._changed(self.store.reset(self._defaults), "reset")

    def apply_preset(self, preset: Preset | str) -> bool:
        applied = self.presets.apply(self.store, preset)
        if applied:
            name = preset if isinstance(preset, str) else preset.name
            self._emit(ColumnEvent.PRESET_APPLIED, name)
        return self._changed(applied, "apply_preset")

    def undo(self) -> bool:
        undone = self.store.undo()
        if undone:
            self._emit(ColumnEvent.HISTORY_UNDONE, self.store.history_depth)
        return self._changed(undone, "undo")

    # Drag & drop ----------------------------------------------------------
    def drag_start(self, key: str) -> bool:
        started = self.drag.drag_start(key)
        if started:
            self._emit(ColumnEvent.DRAG_STARTED, key)
        return started

    def drag_end(self, source_key: str, target_key: Optional[str] = None) -> bool:
        was_dragging = self.drag.state is DragState.DRAGGING
        moved = self.drag.drag_end(source_key, target_key)
        if was_dragging:
            self._emit(ColumnEvent.DRAG_ENDED, {"source": source_key, "target": target_key})
        return self._changed(moved, "reorder", source_key)

    # Internal -------------------------------------------------------------
    def _changed(self, applied: bool, op: str, key: str | None = None) -> bool:
        if applied:
            self._emit(ColumnEvent.COLUMNS_CHANGED, {"op": op, "key": key})
        return applied

    def _emit(self, name: ColumnEvent, payload: Any) -> None:
        if self._bus is not None:
            self._bus.publish(name, payload)
