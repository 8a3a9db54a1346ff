"""Create tutorials table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

Creates the `tutorials` table backing every /tutorials endpoint.
Rollback: downgrade() drops the table (all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tutorials",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "published",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Backs GET /tutorials/published
    op.create_index("ix_tutorials_published", "tutorials", ["published"])


def downgrade() -> None:
    op.drop_index("ix_tutorials_published", table_name="tutorials")
    op.drop_table("tutorials")
