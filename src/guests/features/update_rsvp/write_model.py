"""Write model for RSVP status transitions."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.events import EventBus, RSVPStatusChangedEvent
from src.guests.dtos import GuestDTO, RSVPStatus
from src.guests.repository.write_models import SqlWriteModel
from src.guests.rsvp_policy import RSVPTransitionPolicy, get_transition_policy, parse_status
from src.models.base import utc_now

logger = logging.getLogger(__name__)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def set_rsvp_status(
        self,
        guest_id: UUID,
        status: RSVPStatus,
        response_date: datetime | None = None,
    ) -> GuestDTO:
        """
        Set a guest's RSVP status.
        ``rsvp_response_date`` becomes ``response_date`` or, when omitted, the current time.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(SqlWriteModel, RSVPWriteModel):
    """SQL implementation of RSVP transitions, guarded by a transition policy."""

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        event_bus: EventBus | None = None,
        policy: RSVPTransitionPolicy | None = None,
    ) -> None:
        super().__init__(session_overwrite=session_overwrite, event_bus=event_bus)
        self.policy = policy or get_transition_policy(settings.rsvp_transition_policy)

    async def set_rsvp_status(
        self,
        guest_id: UUID,
        status: RSVPStatus,
        response_date: datetime | None = None,
    ) -> GuestDTO:
        status = parse_status(status)

        async with self.session() as session:
            guest = await self._get_guest(session, guest_id)
            previous_status = RSVPStatus(guest.rsvp_status)
            self.policy.ensure_transition(previous_status, status)

            guest.rsvp_status = status
            guest.rsvp_response_date = response_date or utc_now()
            guest.updated_at = utc_now()
            await session.flush()
            guest_dto = GuestDTO.from_orm(guest)

        logger.info(
            "Guest %s RSVP %s -> %s", guest_id, previous_status.value, status.value
        )
        self.publish(
            RSVPStatusChangedEvent(
                event_id=guest_dto.event_id,
                guest_id=guest_id,
                previous_status=previous_status.value,
                new_status=status.value,
            )
        )
        return guest_dto
