"""Column configuration persistence (load/merge + save).

The persisted record is the serialized column sequence: a JSON array of
objects using the ``ColumnConfig`` field names, order significant::

    [
        {"key": "assetId", "title": "Asset ID", "visible": true,
         "pinned": "left", "required": false, "width": 200, "group": "Basic"},
        ...
    ]

Loading is a left join keyed by the *default schema*: the result always has
exactly the default's keys in the default's order. Saved entries override
the matching default field by field; saved keys missing from the default
(columns removed since the last save) are dropped, and new default columns
appear with their default values. Schema evolution therefore needs no
migration code.

Failure & Safety:
 - A record that is not valid JSON, not an array, or holds entries without
   a string ``key`` is discarded wholesale; the default schema is returned
   and nothing is raised. When the backing store supports it the offending
   record is quarantined (file stores rename it with a ``.corrupt`` suffix).
 - A single saved field with an unusable value (e.g. ``"width": "wide"``)
   keeps the default's value for that field only.
 - ``save`` returns False instead of raising on I/O failure.

Stores are keyed by the caller's namespace. Sessions sharing one namespace
are not arbitrated: the last ``save`` wins.
"""

from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Protocol, Union

from ..errors import MalformedRecordError
from ..models import ColumnConfig, ColumnSequence, PinState, ensure_unique_keys
from ..settings import DATA_DIR, DEFAULT_NAMESPACE

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "ColumnConfigPersistenceService",
    "parse_record",
    "merge_saved_columns",
    "serialize_columns",
]

_logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Key-value stores
# ----------------------------------------------------------------------
class KeyValueStore(Protocol):  # noqa: D401 - structural
    def get(self, namespace: str) -> Optional[Union[str, bytes]]: ...  # pragma: no cover

    def set(self, namespace: str, raw: str) -> None: ...  # pragma: no cover


class InMemoryKeyValueStore:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, namespace: str) -> Optional[str]:
        return self._data.get(namespace)

    def set(self, namespace: str, raw: str) -> None:
        self._data[namespace] = raw

    def delete(self, namespace: str) -> bool:
        return self._data.pop(namespace, None) is not None


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


class JsonFileKeyValueStore:
    """One JSON file per namespace inside ``base_dir``."""

    def __init__(self, base_dir: str = DATA_DIR) -> None:
        self.base_dir = base_dir

    def path_for(self, namespace: str) -> str:
        safe = _UNSAFE_CHARS.sub("_", namespace) or "default"
        return os.path.join(self.base_dir, f"columns_{safe}.json")

    def get(self, namespace: str) -> Optional[Union[str, bytes]]:
        path = self.path_for(namespace)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as exc:
            _logger.warning("could not read column settings %s: %s", path, exc)
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            # Undecodable bytes go to the parser, which reports them as malformed.
            return data

    def set(self, namespace: str, raw: str) -> None:
        os.makedirs(self.base_dir, exist_ok=True)
        path = self.path_for(namespace)
        tmp = path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(raw)
        os.replace(tmp, path)

    def delete(self, namespace: str) -> bool:
        path = self.path_for(namespace)
        if not os.path.exists(path):
            return False
        try:
            os.remove(path)
            return True
        except OSError:
            return False

    def quarantine(self, namespace: str) -> Optional[str]:
        """Rename a corrupt record out of the way; returns the backup path."""
        path = self.path_for(namespace)
        if not os.path.exists(path):
            return None
        backup = path + f".corrupt.{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')}"
        try:
            os.replace(path, backup)
        except OSError:  # pragma: no cover
            return None
        return backup


# ----------------------------------------------------------------------
# Record parsing / merging
# ----------------------------------------------------------------------
def parse_record(raw: Any) -> Dict[str, Dict[str, Any]]:
    """Parse a raw persisted record into ``{key: saved_fields}``.

    ``raw`` may be JSON text or an already decoded list. ``None`` (no record)
    yields an empty mapping. Raises :class:`MalformedRecordError` for any
    structural problem.
    """
    if raw is None:
        return {}
    data = raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise MalformedRecordError(f"record is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise MalformedRecordError("record is nested too deeply") from exc
    if not isinstance(data, list):
        raise MalformedRecordError(f"expected a list of columns, got {type(data).__name__}")
    saved: Dict[str, Dict[str, Any]] = {}
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get("key"), str):
            raise MalformedRecordError(f"invalid column entry: {entry!r}")
        saved.setdefault(entry["key"], entry)  # first occurrence wins
    return saved


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(value)
    return value


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(value)
    return value


def _as_optional_str(value: Any) -> Optional[str]:
    return None if value is None else _as_str(value)


def _as_optional_width(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(value)
    return int(value)


_FIELD_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "title": _as_str,
    "visible": _as_bool,
    "pinned": PinState.from_json,
    "required": _as_bool,
    "width": _as_optional_width,
    "group": _as_optional_str,
}


def _merge_entry(default: ColumnConfig, saved: Dict[str, Any]) -> ColumnConfig:
    changes: Dict[str, Any] = {}
    for name, coerce in _FIELD_COERCERS.items():
        if name not in saved:
            continue
        try:
            changes[name] = coerce(saved[name])
        except (ValueError, OverflowError):
            _logger.debug("ignoring saved %s=%r for column %r", name, saved[name], default.key)
    return default.with_changes(**changes) if changes else default


def merge_saved_columns(default_columns: Iterable[ColumnConfig], raw: Any) -> ColumnSequence:
    """Reconcile a raw saved record against the default schema.

    Never raises for bad saved data: a malformed record yields the default
    schema unchanged.
    """
    defaults = ensure_unique_keys(default_columns)
    try:
        saved = parse_record(raw)
    except MalformedRecordError as exc:
        _logger.warning("discarding malformed column settings record: %s", exc)
        return defaults
    return _join(defaults, saved)


def _join(defaults: ColumnSequence, saved: Dict[str, Dict[str, Any]]) -> ColumnSequence:
    return tuple(
        _merge_entry(col, saved[col.key]) if col.key in saved else col for col in defaults
    )


def serialize_columns(columns: Iterable[ColumnConfig]) -> str:
    return json.dumps([c.to_json_obj() for c in columns], ensure_ascii=False, indent=2)


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------
class ColumnConfigPersistenceService:
    def __init__(self, store: KeyValueStore, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.store = store
        self.namespace = namespace

    def load(self, default_columns: Iterable[ColumnConfig]) -> ColumnSequence:
        defaults = ensure_unique_keys(default_columns)
        raw = self.store.get(self.namespace)
        if raw is None:
            return defaults
        try:
            saved = parse_record(raw)
        except MalformedRecordError as exc:
            _logger.warning("discarding malformed column settings %r: %s", self.namespace, exc)
            quarantine = getattr(self.store, "quarantine", None)
            if callable(quarantine):
                backup = quarantine(self.namespace)
                if backup:
                    _logger.warning("corrupt column settings moved to %s", backup)
            return defaults
        return _join(defaults, saved)

    def save(self, columns: Iterable[ColumnConfig]) -> bool:
        try:
            self.store.set(self.namespace, serialize_columns(columns))
            return True
        except OSError as exc:
            _logger.warning("could not save column settings %r: %s", self.namespace, exc)
            return False

    def clear(self) -> bool:
        delete = getattr(self.store, "delete", None)
        if not callable(delete):
            return False
        return bool(delete(self.namespace))
