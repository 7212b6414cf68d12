import logging

from column_settings.services.event_bus import ColumnEvent, EventBus


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []
    bus.subscribe(ColumnEvent.COLUMNS_CHANGED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(ColumnEvent.COLUMNS_CHANGED, {"op": "select_all"})
    assert received == [("columns_changed", {"op": "select_all"})]


def test_string_and_enum_names_are_equivalent():
    bus = EventBus()
    hits = []
    bus.subscribe("columns_applied", hits.append)
    bus.publish(ColumnEvent.COLUMNS_APPLIED)
    assert len(hits) == 1


def test_error_isolation(caplog):
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    bus.subscribe(ColumnEvent.HISTORY_UNDONE, bad)
    bus.subscribe(ColumnEvent.HISTORY_UNDONE, lambda _: order.append("good"))
    with caplog.at_level(logging.ERROR):
        bus.publish(ColumnEvent.HISTORY_UNDONE)
    assert order == ["bad", "good"]
    assert "history_undone" in caplog.text


def test_unsubscribe_and_cancel():
    bus = EventBus()
    hits = []
    sub = bus.subscribe(ColumnEvent.PRESET_APPLIED, hits.append)
    other = bus.subscribe(ColumnEvent.PRESET_APPLIED, hits.append)
    other.cancel()
    bus.publish(ColumnEvent.PRESET_APPLIED, "Compact")
    assert len(hits) == 1
    bus.unsubscribe(sub)
    bus.publish(ColumnEvent.PRESET_APPLIED, "Compact")
    assert len(hits) == 1


def test_handler_may_unsubscribe_itself():
    bus = EventBus()
    hits = []

    def once(evt):
        hits.append(evt.name)
        bus.unsubscribe(sub)

    sub = bus.subscribe(ColumnEvent.DRAG_STARTED, once)
    bus.publish(ColumnEvent.DRAG_STARTED)
    bus.publish(ColumnEvent.DRAG_STARTED)
    assert hits == ["drag_started"]
