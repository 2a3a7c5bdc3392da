from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.guests.dependencies import get_guest_read_model, get_guest_view_cache
from src.guests.features.guest_dashboard.view import GuestDashboardView
from src.guests.repository.read_models import GuestReadModel
from src.guests.revalidation import GuestViewCache
from src.guests.schemas import (
    GuestGroupResponse,
    GuestResponse,
    GuestStatsResponse,
    InvitationSummaryResponse,
)
from src.guests.urls import GUEST_DASHBOARD_URL

router = APIRouter()


class GroupWithCountResponse(GuestGroupResponse):
    guest_count: int


class GuestDashboardResponse(BaseModel):
    event_id: UUID
    guests: list[GuestResponse]
    groups: list[GroupWithCountResponse]
    stats: GuestStatsResponse
    invitation_summary: InvitationSummaryResponse


def get_guest_dashboard_view(
    read_model: GuestReadModel = Depends(get_guest_read_model),
    cache: GuestViewCache = Depends(get_guest_view_cache),
) -> GuestDashboardView:
    return GuestDashboardView(read_model=read_model, cache=cache)


@router.get(GUEST_DASHBOARD_URL, response_model=GuestDashboardResponse)
async def get_guest_dashboard(
    event_id: UUID,
    view: GuestDashboardView = Depends(get_guest_dashboard_view),
) -> GuestDashboardResponse:
    """
    Everything the guest management page shows for one event.
    Served from cache until a guest or group of the event changes.
    """
    dashboard = await view.load(event_id)
    return GuestDashboardResponse(
        event_id=dashboard.event_id,
        guests=[GuestResponse.model_validate(guest) for guest in dashboard.guests],
        groups=[
            GroupWithCountResponse(
                **GuestGroupResponse.model_validate(item.group).model_dump(),
                guest_count=item.guest_count,
            )
            for item in dashboard.groups
        ],
        stats=GuestStatsResponse.model_validate(dashboard.stats),
        invitation_summary=InvitationSummaryResponse.model_validate(dashboard.invitation_summary),
    )
