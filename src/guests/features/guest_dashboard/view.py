"""Composition of the guest management page: guests, groups, stats and invitations."""

import logging
from uuid import UUID

from src.guests.dtos import GroupWithCountDTO, GuestDashboardDTO
from src.guests.repository.read_models import GuestReadModel
from src.guests.revalidation import GuestViewCache
from src.guests.stats import (
    compute_guest_stats,
    compute_invitation_summary,
    count_guests_by_group,
)

logger = logging.getLogger(__name__)


class GuestDashboardView:
    def __init__(self, read_model: GuestReadModel, cache: GuestViewCache) -> None:
        self.read_model = read_model
        self.cache = cache

    async def load(self, event_id: UUID) -> GuestDashboardDTO:
        version = await self.read_model.get_version(event_id)
        cached = self.cache.get(event_id, version)
        if cached is not None:
            return cached

        guests = await self.read_model.list_guests(event_id)
        groups = await self.read_model.list_groups(event_id)
        counts = count_guests_by_group(guests, groups)

        view = GuestDashboardDTO(
            event_id=event_id,
            guests=guests,
            groups=[GroupWithCountDTO(group=group, guest_count=counts[group.id]) for group in groups],
            stats=compute_guest_stats(guests),
            invitation_summary=compute_invitation_summary(guests),
        )
        self.cache.set(event_id, version, view)
        logger.debug("Built guest view for event %s (%d guests)", event_id, len(guests))
        return view
