from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import RSVPStatus
from src.models.base import Base, TimeStamp


class GuestGroup(Base, TimeStamp):
    __tablename__ = TableNames.GUEST_GROUPS.value

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # presentation token, e.g. "#3B82F6"
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    # caller-assigned; no uniqueness or gap filling
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<GuestGroup {self.name} ({self.sort_order})>"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    rsvp_status: Mapped[str] = mapped_column(
        Enum(RSVPStatus, name="rsvp_status_enum", values_callable=lambda x: [e.value for e in x]),
        default=RSVPStatus.PENDING,
        nullable=False,
    )
    rsvp_response_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    plus_one_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    plus_one_dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Legacy free-text category; never touched by group operations
    group_category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    group_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.GUEST_GROUPS.value}.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    invitation_sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    invitation_sent_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Guest {self.name} - {self.rsvp_status}>"
