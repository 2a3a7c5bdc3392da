"""
Domain events for the guest management service.

Write models publish these after a mutation has been committed. Subscribers
(such as the dashboard cache) use them for:
- Revalidating cached views of an event's guest list
- Audit logging
- Notifications

Note that ``event_id`` always refers to the owning occasion (the wedding,
party, ...), not to the domain event itself.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class DomainEvent:
    """Base domain event."""

    event_id: UUID
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    event_type: str = ""


@dataclass(kw_only=True)
class GuestCreatedEvent(DomainEvent):
    """Event fired when a new guest is created."""

    guest_id: UUID
    guest_name: str
    guest_email: str

    def __post_init__(self):
        self.event_type = "guest.created"


@dataclass(kw_only=True)
class GuestUpdatedEvent(DomainEvent):
    """Event fired when guest details change."""

    guest_id: UUID
    changed_fields: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.event_type = "guest.updated"


@dataclass(kw_only=True)
class GuestDeletedEvent(DomainEvent):
    guest_id: UUID

    def __post_init__(self):
        self.event_type = "guest.deleted"


@dataclass(kw_only=True)
class RSVPStatusChangedEvent(DomainEvent):
    """Event fired when a guest's RSVP status is set."""

    guest_id: UUID
    previous_status: str
    new_status: str

    def __post_init__(self):
        self.event_type = "guest.rsvp_status_changed"


@dataclass(kw_only=True)
class GuestInvitedEvent(DomainEvent):
    """Event fired when an invitation is marked as sent."""

    guest_id: UUID
    reinvited: bool = False

    def __post_init__(self):
        self.event_type = "guest.invited"


@dataclass(kw_only=True)
class GuestGroupChangedEvent(DomainEvent):
    group_id: UUID
    action: str

    def __post_init__(self):
        self.event_type = f"guest_group.{self.action}"


Subscriber = Callable[[DomainEvent], None]


class EventBus:
    """Synchronous fan-out of domain events to subscribers.

    Publishing never fails the caller: a subscriber that raises is logged and
    the remaining subscribers still run.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    @property
    def subscribers(self) -> list[Subscriber]:
        return list(self._subscribers)

    def publish(self, event: DomainEvent) -> None:
        logger.debug("Publishing %s for event %s", event.event_type, event.event_id)
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.exception("Subscriber %r failed to handle %s", subscriber, event.event_type)
