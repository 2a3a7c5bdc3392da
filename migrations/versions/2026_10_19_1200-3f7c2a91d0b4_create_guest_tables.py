"""create_guest_tables

Revision ID: 3f7c2a91d0b4
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f7c2a91d0b4"
down_revision = None
branch_labels = None
depends_on = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(length=500), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "guest_groups",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=32), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guest_groups_event_id", "guest_groups", ["event_id"])

    op.create_table(
        "guests",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column(
            "rsvp_status",
            sa.Enum("pending", "confirmed", "declined", "maybe", name="rsvp_status_enum"),
            nullable=False,
        ),
        sa.Column("rsvp_response_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("plus_one_name", sa.String(length=255), nullable=True),
        sa.Column("plus_one_dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("group_category", sa.String(length=255), nullable=True),
        sa.Column("group_id", sa.UUID(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("invitation_sent", sa.Boolean(), nullable=False),
        sa.Column("invitation_sent_date", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["group_id"], ["guest_groups.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guests_event_id", "guests", ["event_id"])
    op.create_index("ix_guests_name", "guests", ["name"])
    op.create_index("ix_guests_email", "guests", ["email"])
    op.create_index("ix_guests_group_id", "guests", ["group_id"])


def downgrade() -> None:
    op.drop_index("ix_guests_group_id", table_name="guests")
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_index("ix_guests_name", table_name="guests")
    op.drop_index("ix_guests_event_id", table_name="guests")
    op.drop_table("guests")
    op.drop_index("ix_guest_groups_event_id", table_name="guest_groups")
    op.drop_table("guest_groups")
    op.drop_table("events")

    sa.Enum(name="rsvp_status_enum").drop(op.get_bind(), checkfirst=True)
