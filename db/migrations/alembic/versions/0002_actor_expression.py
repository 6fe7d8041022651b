"""actor expression

Revision ID: 0002_actor_expression
Revises: 0001_init_schema
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0002_actor_expression"
down_revision = "0001_init_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Added nullable, backfilled, then tightened: SQLite can't ADD COLUMN ... NOT NULL without a default.
    op.add_column("actors", sa.Column("expression", sa.Text(), nullable=True))

    actors = sa.table("actors", sa.column("expression", sa.Text()))
    op.execute(actors.update().where(actors.c.expression.is_(None)).values(expression=""))

    with op.batch_alter_table("actors") as batch_op:
        batch_op.alter_column("expression", existing_type=sa.Text(), nullable=False)


def downgrade() -> None:
    with op.batch_alter_table("actors") as batch_op:
        batch_op.drop_column("expression")
