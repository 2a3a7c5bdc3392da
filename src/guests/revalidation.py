"""Per-event cache of the guest management view.

Each cached view is stored with the ``GuestListVersionDTO`` it was built from
and is only served while the database still reports that version, so writes
made by other processes are picked up on the next read. The cache also
subscribes to the app's ``EventBus`` and drops an event's view as soon as a
mutation in this process commits.
"""

import logging
from uuid import UUID

from src.events import DomainEvent, EventBus
from src.guests.dtos import GuestDashboardDTO, GuestListVersionDTO

logger = logging.getLogger(__name__)


class GuestViewCache:
    def __init__(self) -> None:
        self._views: dict[UUID, tuple[GuestListVersionDTO, GuestDashboardDTO]] = {}

    def get(self, event_id: UUID, version: GuestListVersionDTO) -> GuestDashboardDTO | None:
        """The cached view, or None when there is none or it was built from another version."""
        entry = self._views.get(event_id)
        if entry is None:
            return None
        cached_version, view = entry
        if cached_version != version:
            self.invalidate(event_id)
            return None
        return view

    def set(self, event_id: UUID, version: GuestListVersionDTO, view: GuestDashboardDTO) -> None:
        self._views[event_id] = (version, view)

    def invalidate(self, event_id: UUID) -> None:
        if self._views.pop(event_id, None) is not None:
            logger.debug("Revalidated guest view for event %s", event_id)

    def clear(self) -> None:
        self._views.clear()

    def __contains__(self, event_id: UUID) -> bool:
        return event_id in self._views

    def on_event(self, event: DomainEvent) -> None:
        self.invalidate(event.event_id)

    def attach(self, event_bus: EventBus) -> None:
        event_bus.subscribe(self.on_event)

    def detach(self, event_bus: EventBus) -> None:
        event_bus.unsubscribe(self.on_event)
