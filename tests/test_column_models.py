import dataclasses

import pytest

from column_settings.errors import DuplicateColumnKeyError
from column_settings.models import (
    ColumnConfig,
    PinState,
    Preset,
    clamp_width,
    ensure_unique_keys,
)


def test_pin_cycle_order():
    assert PinState.NONE.next() is PinState.LEFT
    assert PinState.LEFT.next() is PinState.RIGHT
    assert PinState.RIGHT.next() is PinState.NONE


@pytest.mark.parametrize("state", list(PinState))
def test_pin_cycle_has_order_three(state):
    assert state.next().next().next() is state


@pytest.mark.parametrize(
    "raw,expected",
    [
        (False, PinState.NONE),
        (None, PinState.NONE),
        ("left", PinState.LEFT),
        ("RIGHT", PinState.RIGHT),
        ("none", PinState.NONE),
    ],
)
def test_pin_from_json(raw, expected):
    assert PinState.from_json(raw) is expected


def test_pin_from_json_rejects_unknown():
    with pytest.raises(ValueError):
        PinState.from_json("top")
    with pytest.raises(ValueError):
        PinState.from_json(True)


def test_pin_to_json_writes_false_when_unpinned():
    assert PinState.NONE.to_json() is False
    assert PinState.LEFT.to_json() == "left"


@pytest.mark.parametrize("w,expected", [(-5, 50), (0, 50), (50, 50), (200, 200), (400, 400), (999, 400)])
def test_clamp_width(w, expected):
    assert clamp_width(w) == expected


def test_required_column_is_forced_visible():
    col = ColumnConfig("action", "Actions", visible=False, required=True)
    assert col.visible is True
    assert col.with_changes(visible=False).visible is True


def test_width_clamped_on_construction_and_default_width():
    assert ColumnConfig("a", "A", width=1000).width == 400
    col = ColumnConfig("a", "A")
    assert col.width is None
    assert col.effective_width == 150


def test_pinned_given_as_text_is_normalised():
    col = ColumnConfig("k", "K", pinned="left")
    assert col.pinned is PinState.LEFT
    assert col.pinned.next() is PinState.RIGHT
    assert ColumnConfig("k", "K", pinned=False).pinned is PinState.NONE
    with pytest.raises(ValueError):
        ColumnConfig("k", "K", pinned="top")


def test_column_is_immutable():
    col = ColumnConfig("a", "A")
    with pytest.raises(dataclasses.FrozenInstanceError):
        col.visible = False  # type: ignore[misc]


def test_json_round_trip_of_single_column():
    col = ColumnConfig("a", "A", visible=False, pinned=PinState.RIGHT, width=90, group="G")
    obj = col.to_json_obj()
    assert obj == {
        "key": "a",
        "title": "A",
        "visible": False,
        "pinned": "right",
        "required": False,
        "width": 90,
        "group": "G",
    }
    assert ColumnConfig.from_json_obj(obj) == col


def test_from_json_obj_requires_key():
    with pytest.raises(ValueError):
        ColumnConfig.from_json_obj({"title": "No key"})


def test_ensure_unique_keys_rejects_duplicates():
    with pytest.raises(DuplicateColumnKeyError) as info:
        ensure_unique_keys([ColumnConfig("a", "A"), ColumnConfig("a", "Again")])
    assert info.value.key == "a"


def test_preset_empty_columns_shows_all():
    preset = Preset("Detailed", columns=[])
    assert preset.shows_all
    assert preset.wants_visible(ColumnConfig("x", "X"))
    assert isinstance(Preset("P", columns=["a"]).columns, frozenset)
