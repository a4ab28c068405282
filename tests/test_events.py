from datetime import datetime

from spendwise.events import (
    CATEGORY_DELETED,
    Event,
    EventBus,
    GOAL_CONTRIBUTED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    change_message,
)


def test_event_bus_subscribe_and_publish():
    bus = EventBus()
    collected = []

    def handler(event: Event) -> dict:
        collected.append(event.payload)
        return {"processed": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    results = bus.publish(TRANSACTION_ADDED, {"amount": -50})

    assert results == [{"processed": True}]
    assert collected == [{"amount": -50}]


def test_publish_without_subscribers():
    assert EventBus().publish(TRANSACTION_ADDED, {}) == []


def test_wildcard_subscriber_sees_every_event():
    bus = EventBus()
    names = []
    bus.subscribe("*", lambda e: names.append(e.name))

    bus.publish(TRANSACTION_ADDED, {"id": 1})
    bus.publish(TRANSACTION_DELETED, {"id": 1})

    assert names == [TRANSACTION_ADDED, TRANSACTION_DELETED]


def test_event_bus_unsubscribe():
    bus = EventBus()
    calls = []

    def handler(event: Event):
        calls.append(event.payload)

    bus.subscribe(TRANSACTION_ADDED, handler)
    bus.publish(TRANSACTION_ADDED, {"amount": -100})
    bus.unsubscribe(TRANSACTION_ADDED, handler)
    bus.unsubscribe(TRANSACTION_ADDED, handler)
    bus.publish(TRANSACTION_ADDED, {"amount": -200})

    assert len(calls) == 1


def test_change_message():
    ts = datetime.now().isoformat()
    contributed = Event(GOAL_CONTRIBUTED, ts, {"name": "Car", "amount": 150})
    assert change_message(contributed) == "Successfully contributed 150.00 to Car"

    deleted = Event(CATEGORY_DELETED, ts, {"category": "Food", "reassigned": 2})
    assert "Food" in change_message(deleted)
    assert "2 transaction(s)" in change_message(deleted)
