"""Column configuration models.

``ColumnConfig`` values are frozen: every edit produces a new instance so a
captured sequence (undo snapshot, committed configuration) can never be
changed through a later mutation.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from .errors import DuplicateColumnKeyError
from .settings import DEFAULT_COLUMN_WIDTH, MAX_COLUMN_WIDTH, MIN_COLUMN_WIDTH

__all__ = [
    "PinState",
    "ColumnConfig",
    "ColumnSequence",
    "Preset",
    "clamp_width",
    "ensure_unique_keys",
]


class PinState(str, Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"

    def next(self) -> "PinState":
        """Return the following state in the cycle NONE -> LEFT -> RIGHT -> NONE."""
        return _PIN_CYCLE[self]

    @property
    def is_pinned(self) -> bool:
        return self is not PinState.NONE

    def to_json(self) -> Any:
        # Unpinned is stored as ``false`` to stay compatible with records
        # written by the web frontend.
        return self.value if self.is_pinned else False

    @classmethod
    def from_json(cls, raw: Any) -> "PinState":
        if raw is None or raw is False:
            return cls.NONE
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.lower())
            except ValueError:
                pass
        raise ValueError(f"invalid pin value: {raw!r}")


_PIN_CYCLE = {
    PinState.NONE: PinState.LEFT,
    PinState.LEFT: PinState.RIGHT,
    PinState.RIGHT: PinState.NONE,
}


def clamp_width(width: int) -> int:
    return max(MIN_COLUMN_WIDTH, min(MAX_COLUMN_WIDTH, int(width)))


@dataclass(frozen=True)
class ColumnConfig:
    key: str
    title: str
    visible: bool = True
    pinned: PinState = PinState.NONE
    required: bool = False
    width: Optional[int] = None
    group: Optional[str] = None

    def __post_init__(self):
        # Required columns can never be hidden, whatever the source of the value.
        if self.required and not self.visible:
            object.__setattr__(self, "visible", True)
        if not isinstance(self.pinned, PinState):
            object.__setattr__(self, "pinned", PinState.from_json(self.pinned))
        if self.width is not None:
            object.__setattr__(self, "width", clamp_width(self.width))

    @property
    def effective_width(self) -> int:
        return self.width if self.width is not None else DEFAULT_COLUMN_WIDTH

    @property
    def is_pinned(self) -> bool:
        return self.pinned.is_pinned

    def with_changes(self, **changes: Any) -> "ColumnConfig":
        return replace(self, **changes)

    def to_json_obj(self) -> Dict[str, Any]:
        # width/group are written even when None so a reload cannot pick up
        # a different default for a value the user explicitly cleared.
        return {
            "key": self.key,
            "title": self.title,
            "visible": self.visible,
            "pinned": self.pinned.to_json(),
            "required": self.required,
            "width": self.width,
            "group": self.group,
        }

    @classmethod
    def from_json_obj(cls, obj: Dict[str, Any]) -> "ColumnConfig":
        """Build a column from a schema entry; raises ValueError on bad input."""
        if not isinstance(obj, dict) or not isinstance(obj.get("key"), str):
            raise ValueError(f"column entry needs a string key: {obj!r}")
        return cls(
            key=obj["key"],
            title=str(obj.get("title", obj["key"])),
            visible=bool(obj.get("visible", True)),
            pinned=PinState.from_json(obj.get("pinned")),
            required=bool(obj.get("required", False)),
            width=obj.get("width"),
            group=obj.get("group"),
        )


ColumnSequence = Tuple[ColumnConfig, ...]


def ensure_unique_keys(columns: Iterable[ColumnConfig]) -> ColumnSequence:
    """Return ``columns`` as a tuple, raising on duplicate keys."""
    seen = set()
    out = []
    for col in columns:
        if col.key in seen:
            raise DuplicateColumnKeyError(col.key)
        seen.add(col.key)
        out.append(col)
    return tuple(out)


@dataclass(frozen=True)
class Preset:
    """Named visibility template. An empty ``columns`` set means show all."""

    name: str
    description: str = ""
    columns: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.columns, frozenset):
            object.__setattr__(self, "columns", frozenset(self.columns))

    @property
    def shows_all(self) -> bool:
        return not self.columns

    def wants_visible(self, column: ColumnConfig) -> bool:
        return self.shows_all or column.key in self.columns or column.required
