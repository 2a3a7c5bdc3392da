from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.events import EventBus
from src.guests.dependencies import get_event_bus, http_error
from src.guests.dtos import RSVPStatus
from src.guests.errors import GuestServiceError
from src.guests.features.update_rsvp.write_model import RSVPWriteModel, SqlRSVPWriteModel
from src.guests.schemas import GuestResponse
from src.guests.urls import GUEST_RSVP_URL

router = APIRouter()


class RSVPUpdateRequest(BaseModel):
    status: RSVPStatus
    response_date: datetime | None = None


def get_rsvp_write_model(event_bus: EventBus = Depends(get_event_bus)) -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel(event_bus=event_bus)


@router.put(GUEST_RSVP_URL, response_model=GuestResponse)
async def set_rsvp_status(
    guest_id: UUID,
    rsvp_data: RSVPUpdateRequest,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> GuestResponse:
    """
    Set a guest's RSVP status.
    The response date defaults to now. Which transitions are allowed depends on
    the configured transition policy.
    """
    try:
        guest = await write_model.set_rsvp_status(
            guest_id,
            rsvp_data.status,
            response_date=rsvp_data.response_date,
        )
    except GuestServiceError as e:
        raise http_error(e)
    return GuestResponse.model_validate(guest)
