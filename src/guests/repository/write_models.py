"""Guest and guest group write models - return DTOs, never ORM models.

Every operation runs in one session: it commits on success and rolls back on
error. Domain events are published only after the session has closed cleanly.
"""

import contextlib
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events import (
    DomainEvent,
    EventBus,
    GuestCreatedEvent,
    GuestDeletedEvent,
    GuestGroupChangedEvent,
    GuestUpdatedEvent,
)
from src.guests.dtos import (
    GROUP_UPDATABLE_FIELDS,
    GUEST_REQUIRED_FIELDS,
    GUEST_UPDATABLE_FIELDS,
    GroupAction,
    GuestDTO,
    GuestGroupDTO,
    RSVPStatus,
)
from src.guests.errors import NotFoundError, PersistenceError, ValidationError
from src.guests.repository.orm_models import Guest, GuestGroup
from src.models.base import utc_now
from src.models.event import Event

logger = logging.getLogger(__name__)


def require_text(value: str | None, field_name: str) -> str:
    """Return the stripped value or raise ValidationError when it is blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def check_changes(changes: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    unknown = set(changes) - allowed
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    return dict(changes)


def driver_message(error: SQLAlchemyError) -> str:
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class SqlWriteModel:
    """Session handling and event publishing shared by the SQL write models."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.event_bus = event_bus

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session, translating database failures into PersistenceError."""
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                yield session
        except SQLAlchemyError as e:
            logger.warning("Database rejected write: %s", driver_message(e))
            raise PersistenceError(driver_message(e)) from e

    def publish(self, event: DomainEvent) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    async def _get_guest(self, session: AsyncSession, guest_id: UUID) -> Guest:
        guest = await session.get(Guest, guest_id)
        if guest is None:
            raise NotFoundError("Guest", guest_id)
        return guest

    async def _get_group(self, session: AsyncSession, group_id: UUID) -> GuestGroup:
        group = await session.get(GuestGroup, group_id)
        if group is None:
            raise NotFoundError("Guest group", group_id)
        return group

    async def _ensure_event(self, session: AsyncSession, event_id: UUID) -> None:
        if await session.get(Event, event_id) is None:
            raise NotFoundError("Event", event_id)

    async def _ensure_group_in_event(
        self, session: AsyncSession, group_id: UUID, event_id: UUID
    ) -> None:
        group = await session.get(GuestGroup, group_id)
        if group is None or group.event_id != event_id:
            raise ValidationError(f"Guest group {group_id} does not belong to event {event_id}")


class GuestWriteModel(ABC):
    """Abstract base class for guest write operations."""

    @abstractmethod
    async def create_guest(
        self,
        event_id: UUID,
        name: str,
        email: str,
        phone: str | None = None,
        group_category: str | None = None,
        group_id: UUID | None = None,
        dietary_restrictions: str | None = None,
        plus_one_name: str | None = None,
        plus_one_dietary_restrictions: str | None = None,
        notes: str | None = None,
    ) -> GuestDTO:
        """Create a pending, not-yet-invited guest for an event. Returns DTO."""
        raise NotImplementedError

    @abstractmethod
    async def update_guest(self, guest_id: UUID, changes: Mapping[str, Any]) -> GuestDTO:
        """Merge ``changes`` into the guest and stamp ``updated_at``. Returns DTO."""
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> None:
        raise NotImplementedError


class SqlGuestWriteModel(SqlWriteModel, GuestWriteModel):
    """SQL implementation of guest write operations."""

    async def create_guest(
        self,
        event_id: UUID,
        name: str,
        email: str,
        phone: str | None = None,
        group_category: str | None = None,
        group_id: UUID | None = None,
        dietary_restrictions: str | None = None,
        plus_one_name: str | None = None,
        plus_one_dietary_restrictions: str | None = None,
        notes: str | None = None,
    ) -> GuestDTO:
        name = require_text(name, "name")
        email = require_text(email, "email")

        async with self.session() as session:
            await self._ensure_event(session, event_id)
            if group_id is not None:
                await self._ensure_group_in_event(session, group_id, event_id)

            guest = Guest(
                event_id=event_id,
                name=name,
                email=email,
                phone=phone,
                group_category=group_category,
                group_id=group_id,
                dietary_restrictions=dietary_restrictions,
                plus_one_name=plus_one_name,
                plus_one_dietary_restrictions=plus_one_dietary_restrictions,
                notes=notes,
                invitation_sent=False,
                rsvp_status=RSVPStatus.PENDING,
            )
            session.add(guest)
            await session.flush()
            guest_dto = GuestDTO.from_orm(guest)

        logger.info("Created guest %s for event %s", guest_dto.id, event_id)
        self.publish(
            GuestCreatedEvent(
                event_id=event_id,
                guest_id=guest_dto.id,
                guest_name=guest_dto.name,
                guest_email=guest_dto.email,
            )
        )
        return guest_dto

    async def update_guest(self, guest_id: UUID, changes: Mapping[str, Any]) -> GuestDTO:
        changes = check_changes(changes, GUEST_UPDATABLE_FIELDS)
        for field_name in GUEST_REQUIRED_FIELDS & changes.keys():
            changes[field_name] = require_text(changes[field_name], field_name)

        async with self.session() as session:
            guest = await self._get_guest(session, guest_id)
            if changes.get("group_id") is not None:
                await self._ensure_group_in_event(session, changes["group_id"], guest.event_id)

            for field_name, value in changes.items():
                setattr(guest, field_name, value)
            guest.updated_at = utc_now()
            await session.flush()
            guest_dto = GuestDTO.from_orm(guest)

        logger.info("Updated guest %s (%s)", guest_id, ", ".join(sorted(changes)) or "no fields")
        self.publish(
            GuestUpdatedEvent(
                event_id=guest_dto.event_id,
                guest_id=guest_id,
                changed_fields=sorted(changes),
            )
        )
        return guest_dto

    async def delete_guest(self, guest_id: UUID) -> None:
        async with self.session() as session:
            guest = await self._get_guest(session, guest_id)
            event_id = guest.event_id
            await session.delete(guest)
            await session.flush()

        logger.info("Deleted guest %s from event %s", guest_id, event_id)
        self.publish(GuestDeletedEvent(event_id=event_id, guest_id=guest_id))


class GuestGroupWriteModel(ABC):
    """Abstract base class for guest group write operations."""

    @abstractmethod
    async def create_group(
        self,
        event_id: UUID,
        name: str,
        color: str,
        sort_order: int | None = None,
    ) -> GuestGroupDTO:
        """Create a group; without ``sort_order`` it goes after the event's last group."""
        raise NotImplementedError

    @abstractmethod
    async def update_group(self, group_id: UUID, changes: Mapping[str, Any]) -> GuestGroupDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_group(self, group_id: UUID) -> None:
        """Delete a group. Guests keep their ``group_category``."""
        raise NotImplementedError


class SqlGuestGroupWriteModel(SqlWriteModel, GuestGroupWriteModel):
    """SQL implementation of guest group write operations."""

    async def create_group(
        self,
        event_id: UUID,
        name: str,
        color: str,
        sort_order: int | None = None,
    ) -> GuestGroupDTO:
        name = require_text(name, "name")
        color = require_text(color, "color")

        async with self.session() as session:
            await self._ensure_event(session, event_id)
            if sort_order is None:
                sort_order = await self._next_sort_order(session, event_id)

            group = GuestGroup(event_id=event_id, name=name, color=color, sort_order=sort_order)
            session.add(group)
            await session.flush()
            group_dto = GuestGroupDTO.from_orm(group)

        logger.info("Created guest group %s for event %s", group_dto.id, event_id)
        self.publish(
            GuestGroupChangedEvent(
                event_id=event_id, group_id=group_dto.id, action=GroupAction.CREATED.value
            )
        )
        return group_dto

    async def update_group(self, group_id: UUID, changes: Mapping[str, Any]) -> GuestGroupDTO:
        changes = check_changes(changes, GROUP_UPDATABLE_FIELDS)
        for field_name in {"name", "color"} & changes.keys():
            changes[field_name] = require_text(changes[field_name], field_name)
        if "sort_order" in changes and changes["sort_order"] is None:
            raise ValidationError("sort_order is required")

        async with self.session() as session:
            group = await self._get_group(session, group_id)
            for field_name, value in changes.items():
                setattr(group, field_name, value)
            group.updated_at = utc_now()
            await session.flush()
            group_dto = GuestGroupDTO.from_orm(group)

        logger.info("Updated guest group %s", group_id)
        self.publish(
            GuestGroupChangedEvent(
                event_id=group_dto.event_id, group_id=group_id, action=GroupAction.UPDATED.value
            )
        )
        return group_dto

    async def delete_group(self, group_id: UUID) -> None:
        async with self.session() as session:
            group = await self._get_group(session, group_id)
            event_id = group.event_id

            # ON DELETE SET NULL for group_id, done here so it holds on every backend.
            # updated_at is kept as-is, like the database would.
            await session.execute(
                update(Guest)
                .where(Guest.group_id == group_id)
                .values(group_id=None, updated_at=Guest.updated_at)
            )
            await session.delete(group)
            await session.flush()

        logger.info("Deleted guest group %s from event %s", group_id, event_id)
        self.publish(
            GuestGroupChangedEvent(
                event_id=event_id, group_id=group_id, action=GroupAction.DELETED.value
            )
        )

    async def _next_sort_order(self, session: AsyncSession, event_id: UUID) -> int:
        result = await session.execute(
            select(func.coalesce(func.max(GuestGroup.sort_order), 0)).where(
                GuestGroup.event_id == event_id
            )
        )
        return int(result.scalar_one()) + 1
