"""
Track whether a post excerpt was supplied by the client.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-17

- posts.excerpt_explicit: Set for excerpts that differ from the start of the
  description; derived excerpts follow later description edits
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# Revision identifiers, used by Alembic
revision: str = "0002"
down_revision: str | Sequence[str] | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Apply schema changes for this revision."""
    with op.batch_alter_table("posts") as batch_op:
        batch_op.add_column(
            sa.Column("excerpt_explicit", sa.Boolean(), server_default="0", nullable=False),
        )

    # Backfill: anything other than the 160-character description prefix was set by hand
    posts = sa.table(
        "posts",
        sa.column("excerpt", sa.String),
        sa.column("description", sa.String),
        sa.column("excerpt_explicit", sa.Boolean),
    )
    op.execute(
        posts.update()
        .where(posts.c.excerpt != sa.func.substr(posts.c.description, 1, 160))
        .values(excerpt_explicit=True),
    )


def downgrade() -> None:
    """Revert schema changes for this revision."""
    with op.batch_alter_table("posts") as batch_op:
        batch_op.drop_column("excerpt_explicit")
