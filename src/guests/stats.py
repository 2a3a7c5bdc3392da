"""Aggregations over an event's guest list.

Pure functions over already-fetched guests; callers decide when to refetch.
"""

from collections import Counter
from collections.abc import Iterable
from uuid import UUID

from src.guests.dtos import (
    GuestDTO,
    GuestGroupDTO,
    GuestStatsDTO,
    InvitationSummaryDTO,
    RSVPStatus,
)


def compute_guest_stats(guests: Iterable[GuestDTO]) -> GuestStatsDTO:
    counts = Counter(RSVPStatus(guest.rsvp_status) for guest in guests)
    return GuestStatsDTO(
        total=sum(counts.values()),
        confirmed=counts[RSVPStatus.CONFIRMED],
        maybe=counts[RSVPStatus.MAYBE],
        pending=counts[RSVPStatus.PENDING],
        declined=counts[RSVPStatus.DECLINED],
    )


def compute_invitation_summary(guests: Iterable[GuestDTO]) -> InvitationSummaryDTO:
    guests = list(guests)
    total = len(guests)
    sent = sum(1 for guest in guests if guest.invitation_sent)
    responded = sum(1 for guest in guests if guest.rsvp_status != RSVPStatus.PENDING)
    return InvitationSummaryDTO(
        total=total,
        sent=sent,
        not_sent=total - sent,
        responded=responded,
        response_rate=round(100 * responded / total) if total else 0,
    )


def count_guests_by_group(
    guests: Iterable[GuestDTO], groups: Iterable[GuestGroupDTO]
) -> dict[UUID, int]:
    """Count guests per group.

    A guest belongs to a group through ``group_id``; guests without one are
    matched on their free-text ``group_category`` instead.
    """
    groups = list(groups)
    counts = {group.id: 0 for group in groups}
    ids_by_name: dict[str, list[UUID]] = {}
    for group in groups:
        ids_by_name.setdefault(group.name, []).append(group.id)

    for guest in guests:
        if guest.group_id is not None:
            if guest.group_id in counts:
                counts[guest.group_id] += 1
        elif guest.group_category:
            for group_id in ids_by_name.get(guest.group_category, []):
                counts[group_id] += 1
    return counts


def search_guests(
    guests: Iterable[GuestDTO],
    search: str = "",
    status: RSVPStatus | None = None,
) -> list[GuestDTO]:
    """Case-insensitive match on name or email, optionally filtered by status."""
    term = (search or "").strip().lower()
    return [
        guest
        for guest in guests
        if (not term or term in guest.name.lower() or term in guest.email.lower())
        and (status is None or guest.rsvp_status == status)
    ]
