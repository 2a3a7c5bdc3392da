"""Response models shared by the guest routers."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.guests.dtos import RSVPStatus


class GuestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    name: str
    email: str
    phone: str | None = None
    rsvp_status: RSVPStatus
    rsvp_response_date: datetime | None = None
    dietary_restrictions: str | None = None
    plus_one_name: str | None = None
    plus_one_dietary_restrictions: str | None = None
    group_category: str | None = None
    group_id: UUID | None = None
    notes: str | None = None
    invitation_sent: bool
    invitation_sent_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GuestGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    name: str
    color: str
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GuestStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    confirmed: int
    maybe: int
    pending: int
    declined: int


class InvitationSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    sent: int
    not_sent: int
    responded: int
    response_rate: int
