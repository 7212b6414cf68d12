"""Shared column fixtures for tests."""

from __future__ import annotations

from column_settings.models import ColumnConfig, PinState


def asset_columns():
    return (
        ColumnConfig("assetId", "Asset ID", visible=True, width=200, group="Basic"),
        ColumnConfig("name", "Asset Name", visible=False, width=120, group="Basic"),
        ColumnConfig("category", "Category", width=180, group="Organization"),
        ColumnConfig("operationalStatus", "Operational Status", width=150, group="Status"),
        ColumnConfig("status", "Status", width=150, group="Status"),
        ColumnConfig("operationalStatusSince", "Op. Status Since", width=140, group="Status"),
        ColumnConfig(
            "operationalStatusDuration", "Op. Status Duration", width=160, group="Status"
        ),
        ColumnConfig("action", "Actions", required=True, width=50, group="Actions"),
    )


def abc(required_a: bool = False, hidden_b: bool = False):
    return (
        ColumnConfig("A", "Alpha", required=required_a),
        ColumnConfig("B", "Beta", visible=not hidden_b),
        ColumnConfig("C", "Gamma"),
    )


def keys(columns):
    return [c.key for c in columns]


__all__ = ["asset_columns", "abc", "keys", "PinState"]
