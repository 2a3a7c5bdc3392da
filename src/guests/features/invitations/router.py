from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.events import EventBus
from src.guests.dependencies import get_event_bus, http_error
from src.guests.errors import GuestServiceError
from src.guests.features.invitations.write_model import (
    InvitationWriteModel,
    SqlInvitationWriteModel,
)
from src.guests.schemas import GuestResponse
from src.guests.urls import GUEST_INVITATION_URL, GUEST_REINVITE_URL

router = APIRouter()


class InvitationSentRequest(BaseModel):
    sent_at: datetime | None = None


def get_invitation_write_model(
    event_bus: EventBus = Depends(get_event_bus),
) -> InvitationWriteModel:
    """Dependency to get invitation write model instance."""
    return SqlInvitationWriteModel(event_bus=event_bus)


@router.post(GUEST_INVITATION_URL, response_model=GuestResponse)
async def mark_invitation_sent(
    guest_id: UUID,
    request: InvitationSentRequest | None = None,
    write_model: InvitationWriteModel = Depends(get_invitation_write_model),
) -> GuestResponse:
    """Record that the guest's invitation went out."""
    try:
        guest = await write_model.mark_invitation_sent(
            guest_id, sent_at=request.sent_at if request else None
        )
    except GuestServiceError as e:
        raise http_error(e)
    return GuestResponse.model_validate(guest)


@router.post(GUEST_REINVITE_URL, response_model=GuestResponse)
async def reinvite_guest(
    guest_id: UUID,
    write_model: InvitationWriteModel = Depends(get_invitation_write_model),
) -> GuestResponse:
    """Invite the guest again; their RSVP goes back to pending."""
    try:
        guest = await write_model.reinvite_guest(guest_id)
    except GuestServiceError as e:
        raise http_error(e)
    return GuestResponse.model_validate(guest)
