"""PyQt6 bindings (requires the ``qt`` extra)."""

from .header_binding import apply_to_header, apply_to_table  # noqa: F401

__all__ = ["apply_to_header", "apply_to_table"]
