from battlecore.events.bus import EventBus


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    calls = []
    bus.subscribe("ping", lambda s, **k: calls.append("first"))
    bus.subscribe("ping", lambda s, **k: calls.append("second"))
    bus.subscribe("ping", lambda s, **k: calls.append("third"))
    bus.emit("ping")
    assert calls == ["first", "second", "third"]


def test_payload_is_passed_as_keywords_and_sender_is_bus():
    bus = EventBus()
    seen = []
    bus.subscribe("ping", lambda sender, **k: seen.append((sender, k)))
    bus.emit("ping", value=3)
    assert seen == [(bus, {"value": 3})]


def test_bound_methods_of_unreferenced_objects_stay_subscribed():
    bus = EventBus()
    calls = []

    class Listener:
        def __init__(self, event_bus):
            event_bus.subscribe("ping", self.on_ping)

        def on_ping(self, sender, **payload):
            calls.append(payload)

    Listener(bus)
    bus.emit("ping", n=1)
    assert calls == [{"n": 1}]


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []

    def handler(sender, **payload):
        calls.append(payload)

    bus.subscribe("ping", handler)
    bus.unsubscribe("ping", handler)
    bus.emit("ping")
    assert calls == []


def test_emit_without_subscribers_is_noop():
    EventBus().emit("nobody_listens", x=1)
