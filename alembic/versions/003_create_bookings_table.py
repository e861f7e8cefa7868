"""create bookings table

Revision ID: 003
Revises: 002
Create Date: 2025-05-13 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("venue_id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # No ON DELETE CASCADE: parents with bookings cannot be deleted
        sa.ForeignKeyConstraint(["venue_id"], ["venues.id"]),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        # A venue can only be booked once per date
        sa.UniqueConstraint(
            "venue_id", "booking_date", name="uq_bookings_venue_date"
        ),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"], unique=False)
    op.create_index("ix_bookings_venue_id", "bookings", ["venue_id"], unique=False)
    op.create_index("ix_bookings_event_id", "bookings", ["event_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_bookings_event_id", table_name="bookings")
    op.drop_index("ix_bookings_venue_id", table_name="bookings")
    op.drop_index("ix_bookings_id", table_name="bookings")
    op.drop_table("bookings")
