"""actor favorite designer

Revision ID: 0003_actor_favorite_designer
Revises: 0002_actor_expression
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0003_actor_favorite_designer"
down_revision = "0002_actor_expression"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Plain integer, no foreign key to designers.
    op.add_column("actors", sa.Column("favorite_designer_id", sa.Integer(), nullable=True))

    actors = sa.table(
        "actors",
        sa.column("id", sa.Integer()),
        sa.column("favorite_actor_or_designer_type", sa.Text()),
        sa.column("favorite_actor_or_designer_id", sa.Integer()),
        sa.column("favorite_designer_id", sa.Integer()),
    )
    designers = sa.table("designers", sa.column("id", sa.Integer()))
    fav = actors.alias("fav")
    unset = actors.c.favorite_designer_id.is_(None)

    # Existing rows: a designer favorite is also the favorite designer.
    op.execute(
        actors.update()
        .where(unset, actors.c.favorite_actor_or_designer_type == "designers")
        .values(favorite_designer_id=actors.c.favorite_actor_or_designer_id)
    )
    # An actor favorite lends its own favorite designer (one hop).
    op.execute(
        actors.update()
        .where(unset, actors.c.favorite_actor_or_designer_type == "actors")
        .values(
            favorite_designer_id=sa.select(fav.c.favorite_designer_id)
            .where(fav.c.id == actors.c.favorite_actor_or_designer_id)
            .scalar_subquery()
        )
    )
    # Anything still unresolved falls back to the first designer.
    op.execute(
        actors.update().where(unset).values(favorite_designer_id=sa.select(sa.func.min(designers.c.id)).scalar_subquery())
    )

    with op.batch_alter_table("actors") as batch_op:
        batch_op.alter_column("favorite_designer_id", existing_type=sa.Integer(), nullable=False)


def downgrade() -> None:
    with op.batch_alter_table("actors") as batch_op:
        batch_op.drop_column("favorite_designer_id")
