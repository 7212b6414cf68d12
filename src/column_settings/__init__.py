"""Column settings public API.

Curated surface for table hosts: column models, the editing session
view model, persistence and presets. Qt bindings live in
``column_settings.qt`` and are not imported here.
"""

from __future__ import annotations

from .errors import (  # noqa: F401
    ColumnSettingsError,
    DuplicateColumnKeyError,
    MalformedRecordError,
)
from .models import ColumnConfig, ColumnSequence, PinState, Preset  # noqa: F401
from .services import (  # noqa: F401
    ColumnConfigPersistenceService,
    ColumnEvent,
    ColumnStore,
    DEFAULT_PRESETS,
    DragTracker,
    EventBus,
    HistoryStack,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    PresetEngine,
    SectionKind,
    derive_sections,
    summarize,
    table_columns,
)
from .viewmodels import ColumnSettingsViewModel  # noqa: F401

__all__ = [
    "ColumnSettingsError",
    "DuplicateColumnKeyError",
    "MalformedRecordError",
    "ColumnConfig",
    "ColumnSequence",
    "PinState",
    "Preset",
    "ColumnConfigPersistenceService",
    "ColumnEvent",
    "ColumnStore",
    "DEFAULT_PRESETS",
    "DragTracker",
    "EventBus",
    "HistoryStack",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PresetEngine",
    "SectionKind",
    "derive_sections",
    "summarize",
    "table_columns",
    "ColumnSettingsViewModel",
]
