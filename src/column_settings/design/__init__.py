"""Interaction helpers shared by column settings front ends."""

from .accessible_reorder import (  # noqa: F401
    ReorderActionResult,
    interpret_key_command,
    move_bottom,
    move_down,
    move_to,
    move_top,
    move_up,
)
