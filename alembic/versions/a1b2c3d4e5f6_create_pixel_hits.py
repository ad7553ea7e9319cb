"""create pixel hits table

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "pixel_hits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("ip_address", sa.Text(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("camo_id", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_pixel_hits_id"), "pixel_hits", ["id"])
    op.create_index("idx_pixel_hits_timestamp", "pixel_hits", ["timestamp"])


def downgrade() -> None:
    op.drop_index("idx_pixel_hits_timestamp", table_name="pixel_hits")
    op.drop_index(op.f("ix_pixel_hits_id"), table_name="pixel_hits")
    op.drop_table("pixel_hits")
