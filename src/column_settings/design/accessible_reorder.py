"""Keyboard friendly column reordering helpers.

Headless move operations used by :class:`ColumnStore` for arrow-button and
drag reordering, and by the settings session as the keyboard fallback for
drag & drop. Every helper takes an immutable view of the items and returns a
new tuple, so the caller's sequence is never modified in place.

Each result carries the new order, whether anything changed, the index that
should receive focus and a short screen-reader announcement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Sequence, Tuple, TypeVar

__all__ = [
    "ReorderActionResult",
    "move_up",
    "move_down",
    "move_top",
    "move_bottom",
    "move_to",
    "interpret_key_command",
]

T = TypeVar("T")


@dataclass(frozen=True)
class ReorderActionResult(Generic[T]):
    items: Tuple[T, ...]
    changed: bool
    focus_index: int
    announcement: str


def _in_range(items: Sequence[T], index: int) -> bool:
    return 0 <= index < len(items)


def _unchanged(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return ReorderActionResult(tuple(items), False, index, "No change")


def _move(items: Sequence[T], src: int, dest: int, verb: str) -> ReorderActionResult[T]:
    if src == dest or not _in_range(items, src) or not _in_range(items, dest):
        return _unchanged(items, src)
    lst: List[T] = list(items)
    lst.insert(dest, lst.pop(src))
    return ReorderActionResult(
        tuple(lst), True, dest, f"Moved column from {src + 1} to {dest + 1} ({verb})."
    )


def move_up(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _move(items, index, index - 1, "move-up")


def move_down(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _move(items, index, index + 1, "move-down")


def move_top(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _move(items, index, 0, "move-top")


def move_bottom(items: Sequence[T], index: int) -> ReorderActionResult[T]:
    return _move(items, index, len(items) - 1, "move-bottom")


def move_to(items: Sequence[T], index: int, target_index: int) -> ReorderActionResult[T]:
    """Remove the item at ``index`` and reinsert it at ``target_index``.

    Items between the two positions shift by one, matching list "move"
    semantics used by drag & drop (``[A, B, C]`` moving 2 -> 0 gives
    ``[C, A, B]``).
    """
    return _move(items, index, target_index, "move-to")


def interpret_key_command(command: str) -> str:
    """Map an abstract key command to an operation verb.

    Returns one of ``up``, ``down``, ``top``, ``bottom``; unknown commands
    return an empty string.
    """
    cmd = command.strip().lower()
    if cmd in {"up", "arrowup", "alt+up"}:
        return "up"
    if cmd in {"down", "arrowdown", "alt+down"}:
        return "down"
    if cmd in {"home", "ctrl+home", "top"}:
        return "top"
    if cmd in {"end", "ctrl+end", "bottom"}:
        return "bottom"
    return ""
