"""Service layer exports.

Responsibilities:
 - Column store (mutations + undo history)
 - Section derivation and summary counts
 - Persistence (load/merge, save) over pluggable key-value stores
 - Presets and drag tracking
 - EventBus for column notifications
"""

from .event_bus import EventBus, ColumnEvent  # noqa: F401
from .history import HistoryStack  # noqa: F401
from .column_store import ColumnStore  # noqa: F401
from .section_view import (  # noqa: F401
    ColumnSummary,
    Section,
    SectionKind,
    derive_sections,
    filter_columns,
    summarize,
    table_columns,
)
from .column_persistence import (  # noqa: F401
    ColumnConfigPersistenceService,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    merge_saved_columns,
    serialize_columns,
)
from .presets import DEFAULT_PRESETS, PresetEngine  # noqa: F401
from .drag_tracker import DragState, DragTracker  # noqa: F401
