"""create booking_view joining bookings with venues and events

Revision ID: 004
Revises: 003
Create Date: 2025-05-14 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(
        """
        CREATE VIEW booking_view AS
        SELECT
            b.id AS booking_id,
            v.name AS venue_name,
            v.location AS location,
            e.name AS event_name,
            e.event_date AS event_date,
            b.booking_date AS booking_date
        FROM bookings b
        JOIN venues v ON v.id = b.venue_id
        JOIN events e ON e.id = b.event_id
        """
    )


def downgrade() -> None:
    op.execute("DROP VIEW booking_view")
