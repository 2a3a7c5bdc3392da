"""Tests for the domain event bus."""

from uuid import uuid4

from src.events import (
    EventBus,
    GuestCreatedEvent,
    GuestGroupChangedEvent,
    RSVPStatusChangedEvent,
)


def make_event(event_id=None) -> GuestCreatedEvent:
    return GuestCreatedEvent(
        event_id=event_id or uuid4(),
        guest_id=uuid4(),
        guest_name="Jane Doe",
        guest_email="jane@x.com",
    )


def test_event_types_are_set():
    assert make_event().event_type == "guest.created"
    rsvp = RSVPStatusChangedEvent(
        event_id=uuid4(), guest_id=uuid4(), previous_status="pending", new_status="confirmed"
    )
    assert rsvp.event_type == "guest.rsvp_status_changed"
    group = GuestGroupChangedEvent(event_id=uuid4(), group_id=uuid4(), action="deleted")
    assert group.event_type == "guest_group.deleted"


def test_publish_reaches_every_subscriber():
    bus = EventBus()
    first, second = [], []
    bus.subscribe(first.append)
    bus.subscribe(second.append)

    event = make_event()
    bus.publish(event)

    assert first == [event]
    assert second == [event]


def test_subscribing_twice_delivers_once():
    bus = EventBus()
    received = []
    bus.subscribe(received.append)
    bus.subscribe(received.append)

    bus.publish(make_event())

    assert len(received) == 1


def test_unsubscribed_handler_is_not_called():
    bus = EventBus()
    received = []
    bus.subscribe(received.append)
    bus.unsubscribe(received.append)

    bus.publish(make_event())

    assert received == []
    assert bus.subscribers == []


def test_failing_subscriber_does_not_stop_publishing(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    bus.publish(make_event())

    assert len(received) == 1
    assert "failed to handle guest.created" in caplog.text
