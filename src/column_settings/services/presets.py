"""Column visibility presets.

A preset is a named set of column keys to show; every other column is hidden
except required ones. An empty key set is the "show everything" preset.

The engine is stateless: it only holds the preset list (the built-in
defaults unless the caller supplies its own) and delegates application to
:meth:`ColumnStore.apply_preset`, so applying a preset is an ordinary
undoable edit.

Caller-supplied lists can also come from JSON::

    [
        {"name": "Compact", "description": "Essential columns only",
         "columns": ["name", "status", "action"]},
        {"name": "Detailed", "columns": []}
    ]
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional, Sequence

from ..errors import MalformedRecordError
from ..models import Preset
from .column_store import ColumnStore

__all__ = ["DEFAULT_PRESETS", "PresetEngine"]


DEFAULT_PRESETS: Sequence[Preset] = (
    Preset("Compact", "Essential columns only", frozenset({"name", "status", "action"})),
    Preset("Detailed", "All columns visible", frozenset()),
    Preset(
        "Status Focus",
        "Status-related columns",
        frozenset(
            {
                "name",
                "operationalStatus",
                "status",
                "operationalStatusSince",
                "operationalStatusDuration",
                "action",
            }
        ),
    ),
)


class PresetEngine:
    def __init__(self, presets: Iterable[Preset] | None = None):
        self._presets: List[Preset] = list(DEFAULT_PRESETS if presets is None else presets)

    @classmethod
    def from_json_obj(cls, obj: Any) -> "PresetEngine":
        if not isinstance(obj, list):
            raise MalformedRecordError("preset list must be a JSON array")
        presets = []
        for entry in obj:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                raise MalformedRecordError(f"invalid preset entry: {entry!r}")
            columns = entry.get("columns", [])
            if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
                raise MalformedRecordError(f"invalid columns for preset {entry['name']!r}")
            presets.append(
                Preset(entry["name"], str(entry.get("description", "")), frozenset(columns))
            )
        return cls(presets)

    def all(self) -> List[Preset]:  # pragma: no cover - trivial
        return list(self._presets)

    def names(self) -> List[str]:
        return [p.name for p in self._presets]

    def get(self, name: str) -> Optional[Preset]:
        for p in self._presets:
            if p.name == name:
                return p
        return None

    def apply(self, store: ColumnStore, preset: Preset | str) -> bool:
        """Apply a preset (object or name) to ``store``.

        Unknown names are ignored and return False.
        """
        resolved = self.get(preset) if isinstance(preset, str) else preset
        if resolved is None:
            return False
        return store.apply_preset(resolved)

    def __iter__(self) -> Iterator[Preset]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)
