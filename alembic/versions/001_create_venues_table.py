"""create venues table

Revision ID: 001
Revises:
Create Date: 2025-05-12 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "venues",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("image_key", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # Exact, case-sensitive match: "Hall A" and "hall a" may coexist
        sa.UniqueConstraint("name", name="uq_venues_name"),
        sa.CheckConstraint("capacity > 0", name="ck_venues_capacity_positive"),
        sa.CheckConstraint("LENGTH(name) > 0", name="ck_venues_name_not_empty"),
        sa.CheckConstraint(
            "LENGTH(location) > 0", name="ck_venues_location_not_empty"
        ),
        sa.CheckConstraint(
            "LENGTH(image_key) > 0", name="ck_venues_image_key_not_empty"
        ),
    )
    op.create_index("ix_venues_id", "venues", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_venues_id", table_name="venues")
    op.drop_table("venues")
