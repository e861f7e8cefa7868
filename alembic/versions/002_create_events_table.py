"""create events table

Revision ID: 002
Revises: 001
Create Date: 2025-05-12 10:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("LENGTH(name) > 0", name="ck_events_name_not_empty"),
        sa.CheckConstraint(
            "LENGTH(description) > 0", name="ck_events_description_not_empty"
        ),
    )
    op.create_index("ix_events_id", "events", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_events_id", table_name="events")
    op.drop_table("events")
