"""init schema

Revision ID: 0001_init_schema
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_init_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "designers",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
    )

    # favorite_actor_or_designer_id points into the table named by
    # favorite_actor_or_designer_type, so no foreign key is declared.
    op.create_table(
        "actors",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("favorite_actor_or_designer_type", sa.Text(), nullable=False),
        sa.Column("favorite_actor_or_designer_id", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("actors")
    op.drop_table("designers")
