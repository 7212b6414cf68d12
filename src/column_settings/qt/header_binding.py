"""Apply a committed column configuration to a PyQt6 table header.

Host-side consumer for Qt tables. The table model keeps its own (logical)
column order, given as ``logical_keys``; this module only rearranges the
header's *visual* order, hides sections and sets widths, so the model is
never rebuilt when the user edits the column settings.

Visual order follows :func:`table_columns` (left-pinned, unpinned,
right-pinned) with hidden sections parked at the end.
"""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

from PyQt6.QtWidgets import QHeaderView, QTableView

from ..models import ColumnConfig
from ..services.section_view import table_columns

__all__ = ["apply_to_header", "apply_to_table"]


def apply_to_header(
    header: QHeaderView, columns: Iterable[ColumnConfig], logical_keys: Sequence[str]
) -> int:
    """Returns the number of header sections that were configured.

    Keys unknown to the model (``logical_keys``) are skipped.
    """
    columns = list(columns)
    logical: Dict[str, int] = {key: i for i, key in enumerate(logical_keys)}
    shown = table_columns(columns)
    ordered = shown + [c for c in columns if not c.visible]
    visual = 0
    for col in ordered:
        idx = logical.get(col.key)
        if idx is None or idx >= header.count():
            continue
        current = header.visualIndex(idx)
        if current != visual:
            header.moveSection(current, visual)
        header.setSectionHidden(idx, not col.visible)
        if col.visible:
            header.resizeSection(idx, col.effective_width)
        visual += 1
    return visual


def apply_to_table(
    view: QTableView, columns: Iterable[ColumnConfig], logical_keys: Sequence[str]
) -> int:
    return apply_to_header(view.horizontalHeader(), columns, logical_keys)
