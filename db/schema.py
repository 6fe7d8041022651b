from __future__ import annotations

import sqlalchemy as sa


# Values stored in actors.favorite_actor_or_designer_type. They name the target table.
FAVORITE_ACTOR = "actors"
FAVORITE_DESIGNER = "designers"
FAVORITE_TYPES: tuple[str, ...] = (FAVORITE_ACTOR, FAVORITE_DESIGNER)


metadata = sa.MetaData()

designers = sa.Table(
    "designers",
    metadata,
    sa.Column("id", sa.Integer(), sa.Identity(always=True), primary_key=True),
    sa.Column("name", sa.Text(), nullable=False),
)

# The favorite columns carry no ForeignKey: the target table of
# favorite_actor_or_designer_id depends on favorite_actor_or_designer_type.
actors = sa.Table(
    "actors",
    metadata,
    sa.Column("id", sa.Integer(), sa.Identity(always=True), primary_key=True),
    sa.Column("name", sa.Text(), nullable=False),
    sa.Column("expression", sa.Text(), nullable=False),
    sa.Column("favorite_actor_or_designer_type", sa.Text(), nullable=False),
    sa.Column("favorite_actor_or_designer_id", sa.Integer(), nullable=False),
    sa.Column("favorite_designer_id", sa.Integer(), nullable=False),
)

TABLES_BY_NAME: dict[str, sa.Table] = {FAVORITE_ACTOR: actors, FAVORITE_DESIGNER: designers}
# Singular type name for each favorite table, as the data is presented to clients.
TYPE_NAMES: dict[str, str] = {FAVORITE_ACTOR: "Actor", FAVORITE_DESIGNER: "Designer"}


def name_lookup(table: sa.Table, name: str) -> sa.ScalarSelect:
    """`(SELECT id FROM <table> WHERE name = :name)`; NULL when no row matches."""
    return sa.select(table.c.id).where(table.c.name == name).scalar_subquery()


def live_columns(conn: sa.Connection, table: sa.Table) -> list[str]:
    """Columns of `table` that exist in the connected database, in declaration order."""
    present = {c["name"] for c in sa.inspect(conn).get_columns(table.name)}
    return [c.name for c in table.columns if c.name in present]
