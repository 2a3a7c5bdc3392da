from uuid import UUID

from fastapi import APIRouter, Depends

from src.guests.dependencies import get_guest_read_model
from src.guests.repository.read_models import GuestReadModel
from src.guests.schemas import GuestStatsResponse
from src.guests.stats import compute_guest_stats
from src.guests.urls import GUEST_STATS_URL

router = APIRouter()


@router.get(GUEST_STATS_URL, response_model=GuestStatsResponse)
async def get_guest_stats(
    event_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestStatsResponse:
    """RSVP counts for the event's current guest list."""
    guests = await read_model.list_guests(event_id)
    return GuestStatsResponse.model_validate(compute_guest_stats(guests))
