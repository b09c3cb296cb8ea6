import pytest

from mvc_console.domain.exceptions import ListenerError
from mvc_console.events import EventManager, ListenerAggregate, MvcEvent


def test_trigger_orders_by_priority_then_registration():
    events = EventManager()
    order = []
    events.attach("evt", lambda e: order.append("low"), priority=-5)
    events.attach("evt", lambda e: order.append("first"))
    events.attach("evt", lambda e: order.append("high"), priority=10)
    events.attach("evt", lambda e: order.append("second"))
    events.trigger("evt", MvcEvent())
    assert order == ["high", "first", "second", "low"]


def test_trigger_returns_listener_results_and_sets_name():
    events = EventManager()
    events.attach("evt", lambda e: e.name)
    e = MvcEvent()
    assert events.trigger("evt", e) == ["evt"]
    assert events.trigger("other", e) == []


def test_stop_propagation():
    events = EventManager()
    order = []

    def stopper(e):
        order.append("stopper")
        e.stop_propagation()

    events.attach("evt", stopper, priority=5)
    events.attach("evt", lambda e: order.append("never"))
    events.trigger("evt", MvcEvent())
    assert order == ["stopper"]


def test_detach_is_idempotent_per_handle():
    events = EventManager()
    handle = events.attach("evt", lambda e: None)
    assert events.detach(handle) is True
    assert events.detach(handle) is False
    assert events.listeners("evt") == []


def test_detach_foreign_handle_rejected():
    handle = EventManager().attach("evt", lambda e: None)
    with pytest.raises(ListenerError) as info:
        EventManager().detach(handle)
    assert info.value.code == "LISTENER_FOREIGN_HANDLE"


def test_listener_aggregate_detach_clears_handles():
    class Aggregate(ListenerAggregate):
        def attach(self, events, priority=1):
            self.listeners.append(events.attach("a", self.on_event, priority))
            self.listeners.append(events.attach("b", self.on_event, priority))

        def on_event(self, e):
            return "handled"

    events = EventManager()
    events.attach("a", lambda e: "other")
    agg = Aggregate()
    agg.attach(events)
    assert events.trigger("a", MvcEvent()) == ["other", "handled"]
    agg.detach(events)
    assert agg.listeners == []
    assert events.trigger("a", MvcEvent()) == ["other"]
    assert events.trigger("b", MvcEvent()) == []


def test_mvc_event_accessors():
    e = MvcEvent(params={"exception": None})
    assert e.get_error() is None
    assert not e.is_error()
    e.set_error("error-exception").set_param("controller", "index")
    assert e.is_error()
    assert e.get_param("controller") == "index"
    assert e.get_param("missing", 1) == 1


def test_listener_aggregate_detach_skips_other_managers():
    class Aggregate(ListenerAggregate):
        def attach(self, events, priority=1):
            self.listeners.append(events.attach("a", lambda e: "handled", priority))

    first = EventManager()
    second = EventManager()
    agg = Aggregate()
    agg.attach(first)
    agg.attach(second)
    agg.detach(first)
    assert [h.owner_id for h in agg.listeners] == [id(second)]
    assert first.trigger("a", MvcEvent()) == []
    assert second.trigger("a", MvcEvent()) == ["handled"]
