import json
import logging
import os

import pytest

from column_settings.errors import MalformedRecordError
from column_settings.models import ColumnConfig, PinState
from column_settings.services.column_persistence import (
    ColumnConfigPersistenceService,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    merge_saved_columns,
    parse_record,
    serialize_columns,
)

from tests.factories import asset_columns, keys


def _defaults():
    return (
        ColumnConfig("a", "A", width=100),
        ColumnConfig("b", "B"),
        ColumnConfig("c", "C", group="grp"),
    )


def test_no_record_returns_defaults():
    assert merge_saved_columns(_defaults(), None) == _defaults()


def test_saved_fields_override_field_by_field():
    saved = json.dumps(
        [
            {"key": "b", "visible": False, "pinned": "left"},
            {"key": "a", "width": 300},
        ]
    )
    merged = merge_saved_columns(_defaults(), saved)
    assert keys(merged) == ["a", "b", "c"]  # default order wins
    assert merged[0] == ColumnConfig("a", "A", width=300)
    assert merged[1] == ColumnConfig("b", "B", visible=False, pinned=PinState.LEFT)
    assert merged[2] == _defaults()[2]


def test_removed_columns_dropped_and_new_columns_added():
    saved = [{"key": "gone", "title": "Old"}, {"key": "a", "title": "Renamed"}]
    merged = merge_saved_columns(_defaults(), saved)
    assert keys(merged) == ["a", "b", "c"]
    assert merged[0].title == "Renamed"


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"columns": []}),
        json.dumps([1, 2, 3]),
        json.dumps([{"title": "no key"}]),
        json.dumps("a string"),
    ],
)
def test_malformed_record_falls_back_to_defaults(raw, caplog):
    with caplog.at_level(logging.WARNING):
        assert merge_saved_columns(_defaults(), raw) == _defaults()
    assert "malformed" in caplog.text


def test_parse_record_raises_internally():
    with pytest.raises(MalformedRecordError):
        parse_record("[{]")


def test_invalid_field_values_keep_default_field():
    saved = [{"key": "a", "width": "wide", "visible": "yes", "pinned": "top", "title": "A2"}]
    merged = merge_saved_columns(_defaults(), saved)
    assert merged[0] == ColumnConfig("a", "A2", width=100)


def test_saved_width_is_clamped():
    merged = merge_saved_columns(_defaults(), [{"key": "b", "width": 9000}])
    assert merged[1].width == 400


def test_saved_cannot_hide_required_column():
    defaults = (ColumnConfig("action", "Actions", required=True),)
    merged = merge_saved_columns(defaults, [{"key": "action", "visible": False}])
    assert merged[0].visible is True


def test_load_is_idempotent_under_resave():
    saved = json.dumps(
        [
            {"key": "c", "pinned": "right", "width": None},
            {"key": "a", "width": None, "group": "x"},
            {"key": "zzz"},
        ]
    )
    once = merge_saved_columns(_defaults(), saved)
    twice = merge_saved_columns(_defaults(), serialize_columns(once))
    assert twice == once


def test_result_always_has_default_keys_in_order():
    defaults = asset_columns()
    shuffled = list(reversed([c.to_json_obj() for c in defaults]))[:5]
    merged = merge_saved_columns(defaults, json.dumps(shuffled))
    assert keys(merged) == keys(defaults)


def test_service_round_trip_in_memory():
    store = InMemoryKeyValueStore()
    svc = ColumnConfigPersistenceService(store, "assets")
    assert svc.load(_defaults()) == _defaults()
    edited = (
        _defaults()[2].with_changes(visible=False),
        _defaults()[0].with_changes(pinned=PinState.LEFT),
        _defaults()[1],
    )
    assert svc.save(edited) is True
    raw = json.loads(store.get("assets"))
    assert [e["key"] for e in raw] == ["c", "a", "b"]  # saved verbatim
    loaded = svc.load(_defaults())
    # Order comes from the default schema, values from the saved record.
    assert keys(loaded) == ["a", "b", "c"]
    assert loaded[0].pinned is PinState.LEFT
    assert loaded[2].visible is False


def test_namespaces_are_independent():
    store = InMemoryKeyValueStore()
    ColumnConfigPersistenceService(store, "one").save([_defaults()[0].with_changes(visible=False)])
    assert ColumnConfigPersistenceService(store, "two").load(_defaults()) == _defaults()


def test_file_store_round_trip(tmp_path):
    svc = ColumnConfigPersistenceService(JsonFileKeyValueStore(str(tmp_path)), "assets/v2")
    svc.save([_defaults()[1].with_changes(width=222)])
    path = svc.store.path_for("assets/v2")
    assert os.path.basename(path) == "columns_assets_v2.json"
    assert os.path.exists(path)
    assert svc.load(_defaults())[1].width == 222
    assert svc.clear() is True
    assert svc.clear() is False


def test_file_store_quarantines_corrupt_record(tmp_path):
    store = JsonFileKeyValueStore(str(tmp_path))
    path = store.path_for("assets")
    with open(path, "w", encoding="utf-8") as f:
        f.write("{corrupt")
    svc = ColumnConfigPersistenceService(store, "assets")
    assert svc.load(_defaults()) == _defaults()
    assert not os.path.exists(path)
    backups = [p for p in os.listdir(tmp_path) if ".corrupt." in p]
    assert len(backups) == 1


def test_save_failure_returns_false():
    class Broken:
        def get(self, namespace):
            return None

        def set(self, namespace, raw):
            raise OSError("disk full")

    assert ColumnConfigPersistenceService(Broken(), "x").save(_defaults()) is False


def test_file_store_undecodable_record_falls_back_and_is_quarantined(tmp_path):
    store = JsonFileKeyValueStore(str(tmp_path))
    path = store.path_for("ns")
    with open(path, "wb") as f:
        f.write(b'[{"key": "a", "title": "\xff\xfe"}]')
    svc = ColumnConfigPersistenceService(store, "ns")
    assert svc.load(_defaults()) == _defaults()
    assert not os.path.exists(path)
    assert any(".corrupt." in p for p in os.listdir(tmp_path))


def test_deeply_nested_record_is_malformed():
    raw = "[" * 200000 + "]" * 200000
    with pytest.raises(MalformedRecordError):
        parse_record(raw)
    assert merge_saved_columns(_defaults(), raw) == _defaults()
    svc = ColumnConfigPersistenceService(InMemoryKeyValueStore({"deep": raw}), "deep")
    assert svc.load(_defaults()) == _defaults()
