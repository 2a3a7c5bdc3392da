from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from src.guests.repository.orm_models import Guest, GuestGroup


class RSVPStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    MAYBE = "maybe"


class GroupAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


GUEST_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "email",
        "phone",
        "group_category",
        "group_id",
        "dietary_restrictions",
        "plus_one_name",
        "plus_one_dietary_restrictions",
        "notes",
    }
)
GUEST_REQUIRED_FIELDS = frozenset({"name", "email"})
GROUP_UPDATABLE_FIELDS = frozenset({"name", "color", "sort_order"})


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


@dataclass(frozen=True)
class GuestDTO:
    """DTO for guest data."""

    id: UUID
    event_id: UUID
    name: str
    email: str
    rsvp_status: RSVPStatus = RSVPStatus.PENDING
    invitation_sent: bool = False
    phone: str | None = None
    rsvp_response_date: datetime | None = None
    dietary_restrictions: str | None = None
    plus_one_name: str | None = None
    plus_one_dietary_restrictions: str | None = None
    group_category: str | None = None
    group_id: UUID | None = None
    notes: str | None = None
    invitation_sent_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_orm(cls, guest: "Guest") -> "GuestDTO":
        """Create GuestDTO from Guest ORM model."""
        return cls(
            id=guest.id,
            event_id=guest.event_id,
            name=guest.name,
            email=guest.email,
            rsvp_status=RSVPStatus(guest.rsvp_status),
            invitation_sent=bool(guest.invitation_sent),
            phone=guest.phone,
            rsvp_response_date=as_utc(guest.rsvp_response_date),
            dietary_restrictions=guest.dietary_restrictions,
            plus_one_name=guest.plus_one_name,
            plus_one_dietary_restrictions=guest.plus_one_dietary_restrictions,
            group_category=guest.group_category,
            group_id=guest.group_id,
            notes=guest.notes,
            invitation_sent_date=as_utc(guest.invitation_sent_date),
            created_at=as_utc(guest.created_at),
            updated_at=as_utc(guest.updated_at),
        )


@dataclass(frozen=True)
class GuestGroupDTO:
    """DTO for guest group data."""

    id: UUID
    event_id: UUID
    name: str
    color: str
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_orm(cls, group: "GuestGroup") -> "GuestGroupDTO":
        return cls(
            id=group.id,
            event_id=group.event_id,
            name=group.name,
            color=group.color,
            sort_order=group.sort_order,
            created_at=as_utc(group.created_at),
            updated_at=as_utc(group.updated_at),
        )


@dataclass(frozen=True)
class GuestStatsDTO:
    """RSVP counts for a set of guests."""

    total: int = 0
    confirmed: int = 0
    maybe: int = 0
    pending: int = 0
    declined: int = 0


@dataclass(frozen=True)
class InvitationSummaryDTO:
    total: int = 0
    sent: int = 0
    not_sent: int = 0
    responded: int = 0
    response_rate: int = 0


@dataclass(frozen=True)
class GroupWithCountDTO:
    group: GuestGroupDTO
    guest_count: int = 0


@dataclass(frozen=True)
class GuestDashboardDTO:
    """Everything the guest management page renders for one event."""

    event_id: UUID
    guests: list[GuestDTO] = field(default_factory=list)
    groups: list[GroupWithCountDTO] = field(default_factory=list)
    stats: GuestStatsDTO = field(default_factory=GuestStatsDTO)
    invitation_summary: InvitationSummaryDTO = field(default_factory=InvitationSummaryDTO)


@dataclass(frozen=True)
class GuestListVersionDTO:
    """What is stored for an event right now; any committed write changes it."""

    guest_count: int = 0
    guests_changed_at: datetime | None = None
    group_count: int = 0
    groups_changed_at: datetime | None = None
