"""Bounded undo history for the column store.

Snapshots are whole column sequences (tuples of frozen ``ColumnConfig``),
so storing them needs no copying: a snapshot can never be mutated through
the live sequence. The buffer is a ``deque`` with ``maxlen``; pushing past
capacity drops the oldest snapshot.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional

from ..models import ColumnConfig, ColumnSequence
from ..settings import HISTORY_CAPACITY

__all__ = ["HistoryStack"]


class HistoryStack:
    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        self._capacity = max(1, capacity)
        self._snapshots: Deque[ColumnSequence] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, sequence: Iterable[ColumnConfig]) -> None:
        self._snapshots.append(tuple(sequence))

    def pop(self) -> Optional[ColumnSequence]:
        """Remove and return the newest snapshot (None when empty)."""
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def peek(self) -> Optional[ColumnSequence]:
        return self._snapshots[-1] if self._snapshots else None

    def clear(self) -> None:
        self._snapshots.clear()

    def snapshots(self) -> List[ColumnSequence]:  # oldest first
        return list(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)
