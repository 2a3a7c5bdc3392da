import abc
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.guests.dtos import GuestDTO, GuestGroupDTO, GuestListVersionDTO, RSVPStatus, as_utc
from src.guests.repository.orm_models import Guest, GuestGroup


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_guests(
        self,
        event_id: UUID,
        search: str = "",
        status: RSVPStatus | None = None,
    ) -> list[GuestDTO]:
        """
        List an event's guests ordered by name.
        ``search`` matches name or email case-insensitively; ``status=None`` means all.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_group(self, group_id: UUID) -> GuestGroupDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_groups(self, event_id: UUID) -> list[GuestGroupDTO]:
        """List an event's groups in display order."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_version(self, event_id: UUID) -> GuestListVersionDTO:
        """Row counts and latest ``updated_at`` of the event's guests and groups."""
        raise NotImplementedError


class SqlGuestReadModel(GuestReadModel):
    """SQL implementation of the guest read model."""

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            return GuestDTO.from_orm(guest) if guest else None

    async def list_guests(
        self,
        event_id: UUID,
        search: str = "",
        status: RSVPStatus | None = None,
    ) -> list[GuestDTO]:
        stmt = select(Guest).where(Guest.event_id == event_id)

        term = (search or "").strip().lower()
        if term:
            stmt = stmt.where(
                or_(
                    func.lower(Guest.name).contains(term, autoescape=True),
                    func.lower(Guest.email).contains(term, autoescape=True),
                )
            )
        if status is not None:
            stmt = stmt.where(Guest.rsvp_status == RSVPStatus(status))

        stmt = stmt.order_by(Guest.name, Guest.created_at)

        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [GuestDTO.from_orm(guest) for guest in result.scalars().all()]

    async def get_group(self, group_id: UUID) -> GuestGroupDTO | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            group = await session.get(GuestGroup, group_id)
            return GuestGroupDTO.from_orm(group) if group else None

    async def list_groups(self, event_id: UUID) -> list[GuestGroupDTO]:
        stmt = (
            select(GuestGroup)
            .where(GuestGroup.event_id == event_id)
            .order_by(GuestGroup.sort_order, GuestGroup.name)
        )
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [GuestGroupDTO.from_orm(group) for group in result.scalars().all()]

    async def get_version(self, event_id: UUID) -> GuestListVersionDTO:
        guests_stmt = select(func.count(Guest.id), func.max(Guest.updated_at)).where(
            Guest.event_id == event_id
        )
        groups_stmt = select(func.count(GuestGroup.id), func.max(GuestGroup.updated_at)).where(
            GuestGroup.event_id == event_id
        )
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest_count, guests_changed_at = (await session.execute(guests_stmt)).one()
            group_count, groups_changed_at = (await session.execute(groups_stmt)).one()

        return GuestListVersionDTO(
            guest_count=guest_count,
            guests_changed_at=as_utc(guests_changed_at),
            group_count=group_count,
            groups_changed_at=as_utc(groups_changed_at),
        )
