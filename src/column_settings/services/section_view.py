"""Section derivation for the column settings list.

Pure functions of (column sequence, search text). Nothing is cached: the
sequences involved hold tens of entries and every read recomputes from the
live sequence, so derived groups can never drift out of sync with the store.

Sections, in fixed display order:
 - Pinned Left   (visible columns pinned left)
 - Pinned Right  (visible columns pinned right)
 - Visible Columns (visible, unpinned)
 - Hidden Columns (any hidden column, regardless of pin)

Empty sections are omitted.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from ..models import ColumnConfig, PinState

__all__ = [
    "SectionKind",
    "Section",
    "ColumnSummary",
    "filter_columns",
    "derive_sections",
    "summarize",
    "table_columns",
]


class SectionKind(str, Enum):
    PINNED_LEFT = "pinned_left"
    PINNED_RIGHT = "pinned_right"
    VISIBLE = "visible"
    HIDDEN = "hidden"

    @property
    def title(self) -> str:
        return _SECTION_TITLES[self]


_SECTION_TITLES: Dict[SectionKind, str] = {
    SectionKind.PINNED_LEFT: "Pinned Left",
    SectionKind.PINNED_RIGHT: "Pinned Right",
    SectionKind.VISIBLE: "Visible Columns",
    SectionKind.HIDDEN: "Hidden Columns",
}

_SECTION_RULES: Tuple[Tuple[SectionKind, Callable[[ColumnConfig], bool]], ...] = (
    (SectionKind.PINNED_LEFT, lambda c: c.visible and c.pinned is PinState.LEFT),
    (SectionKind.PINNED_RIGHT, lambda c: c.visible and c.pinned is PinState.RIGHT),
    (SectionKind.VISIBLE, lambda c: c.visible and c.pinned is PinState.NONE),
    (SectionKind.HIDDEN, lambda c: not c.visible),
)


@dataclass(frozen=True)
class Section:
    kind: SectionKind
    columns: Tuple[ColumnConfig, ...]

    @property
    def title(self) -> str:
        return self.kind.title

    @property
    def label(self) -> str:
        return f"{self.title} ({len(self.columns)})"

    def keys(self) -> List[str]:
        return [c.key for c in self.columns]

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class ColumnSummary:
    total: int = 0
    visible: int = 0
    pinned: int = 0

    @property
    def hidden(self) -> int:
        return self.total - self.visible

    def as_text(self) -> str:
        return f"{self.visible} visible, {self.pinned} pinned, {self.hidden} hidden"


def filter_columns(columns: Iterable[ColumnConfig], search: str | None = None) -> List[ColumnConfig]:
    """Keep columns whose title contains ``search`` (case-insensitive substring)."""
    if not search:
        return list(columns)
    needle = search.lower()
    return [c for c in columns if needle in c.title.lower()]


def derive_sections(columns: Sequence[ColumnConfig], search: str | None = None) -> List[Section]:
    filtered = filter_columns(columns, search)
    sections: List[Section] = []
    for kind, rule in _SECTION_RULES:
        members = tuple(c for c in filtered if rule(c))
        if members:
            sections.append(Section(kind, members))
    return sections


def summarize(columns: Sequence[ColumnConfig]) -> ColumnSummary:
    """Counts over the unfiltered sequence."""
    return ColumnSummary(
        total=len(columns),
        visible=sum(1 for c in columns if c.visible),
        pinned=sum(1 for c in columns if c.is_pinned),
    )


_EDGE_RANK = {PinState.LEFT: 0, PinState.NONE: 1, PinState.RIGHT: 2}


def table_columns(columns: Iterable[ColumnConfig]) -> List[ColumnConfig]:
    """Project a committed sequence onto the columns a table should render.

    Hidden columns are dropped; left-pinned columns come first and
    right-pinned columns last, relative order otherwise preserved.
    """
    visible = [c for c in columns if c.visible]
    return sorted(visible, key=lambda c: _EDGE_RANK[c.pinned])

