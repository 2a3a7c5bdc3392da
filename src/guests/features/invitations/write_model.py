"""Write model for invitation tracking.

Sending the invitation itself happens outside this service; these operations
only record that it went out.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from src.events import GuestInvitedEvent
from src.guests.dtos import GuestDTO, RSVPStatus
from src.guests.repository.write_models import SqlWriteModel
from src.models.base import utc_now

logger = logging.getLogger(__name__)


class InvitationWriteModel(ABC):
    """Abstract base class for invitation tracking."""

    @abstractmethod
    async def mark_invitation_sent(
        self, guest_id: UUID, sent_at: datetime | None = None
    ) -> GuestDTO:
        """Flag the guest's invitation as sent. The RSVP status is left alone."""
        raise NotImplementedError

    @abstractmethod
    async def reinvite_guest(self, guest_id: UUID) -> GuestDTO:
        """Send the invitation again and reset the guest's RSVP to pending."""
        raise NotImplementedError


class SqlInvitationWriteModel(SqlWriteModel, InvitationWriteModel):
    """SQL implementation of invitation tracking."""

    async def mark_invitation_sent(
        self, guest_id: UUID, sent_at: datetime | None = None
    ) -> GuestDTO:
        async with self.session() as session:
            guest = await self._get_guest(session, guest_id)
            guest.invitation_sent = True
            guest.invitation_sent_date = sent_at or utc_now()
            guest.updated_at = utc_now()
            await session.flush()
            guest_dto = GuestDTO.from_orm(guest)

        logger.info("Invitation marked as sent for guest %s", guest_id)
        self.publish(GuestInvitedEvent(event_id=guest_dto.event_id, guest_id=guest_id))
        return guest_dto

    async def reinvite_guest(self, guest_id: UUID) -> GuestDTO:
        async with self.session() as session:
            guest = await self._get_guest(session, guest_id)
            now = utc_now()
            guest.invitation_sent = True
            guest.invitation_sent_date = now
            guest.rsvp_status = RSVPStatus.PENDING
            guest.rsvp_response_date = None
            guest.updated_at = now
            await session.flush()
            guest_dto = GuestDTO.from_orm(guest)

        logger.info("Guest %s re-invited, RSVP reset to pending", guest_id)
        self.publish(
            GuestInvitedEvent(event_id=guest_dto.event_id, guest_id=guest_id, reinvited=True)
        )
        return guest_dto
