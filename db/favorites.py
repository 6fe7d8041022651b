from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa

from db.logging import logger
from db.schema import (
    FAVORITE_DESIGNER,
    FAVORITE_TYPES,
    TABLES_BY_NAME,
    TYPE_NAMES,
    actors,
    designers,
    live_columns,
)


class UnknownFavoriteType(ValueError):
    pass


@dataclass(frozen=True)
class DanglingFavorite:
    actor_id: int
    actor_name: str
    column: str
    target_type: str
    target_id: int | None

    def describe(self) -> str:
        return f"actor {self.actor_id} ({self.actor_name}): {self.column} -> {self.target_type}.id={self.target_id}"


class FavoriteIntegrityError(ValueError):
    def __init__(self, dangling: list[DanglingFavorite]) -> None:
        self.dangling = dangling
        super().__init__("dangling favorite references: " + "; ".join(d.describe() for d in dangling))


@dataclass(frozen=True)
class Favorite:
    # Table name as stored in favorite_actor_or_designer_type ("actors" or "designers").
    type: str
    id: int
    name: str

    @property
    def type_name(self) -> str:
        """Singular type name of the target ("Actor" or "Designer")."""
        return TYPE_NAMES[self.type]


def _target_table(type_name: str) -> sa.Table:
    try:
        return TABLES_BY_NAME[type_name]
    except KeyError:
        raise UnknownFavoriteType(f"unknown favorite type {type_name!r}") from None


def resolve_favorite(conn: sa.Connection, actor_id: int) -> Favorite | None:
    """
    Follow an actor's polymorphic favorite pointer.

    The type column names the table to look in, the id column the row. Returns None
    when that row does not exist; the schema does not prevent this.
    """
    row = conn.execute(
        sa.select(actors.c.favorite_actor_or_designer_type, actors.c.favorite_actor_or_designer_id).where(
            actors.c.id == actor_id
        )
    ).first()
    if row is None:
        raise LookupError(f"no actor with id {actor_id}")

    type_name, target_id = row
    target = _target_table(type_name)
    hit = conn.execute(sa.select(target.c.id, target.c.name).where(target.c.id == target_id)).first()
    if hit is None:
        return None
    return Favorite(type=type_name, id=hit.id, name=hit.name)


def find_dangling_favorites(conn: sa.Connection) -> list[DanglingFavorite]:
    out: list[DanglingFavorite] = []
    fav_type = actors.c.favorite_actor_or_designer_type
    fav_id = actors.c.favorite_actor_or_designer_id

    for type_name in FAVORITE_TYPES:
        # Aliased so actors -> actors references don't get correlated away.
        target = TABLES_BY_NAME[type_name].alias("target")
        q = sa.select(actors.c.id, actors.c.name, fav_id).where(
            fav_type == type_name,
            ~sa.exists().where(target.c.id == fav_id),
        )
        for r in conn.execute(q):
            out.append(DanglingFavorite(r.id, r.name, fav_id.name, type_name, r.favorite_actor_or_designer_id))

    q = sa.select(actors.c.id, actors.c.name, fav_type, fav_id).where(fav_type.not_in(FAVORITE_TYPES))
    for r in conn.execute(q):
        out.append(
            DanglingFavorite(
                r.id, r.name, fav_type.name, r.favorite_actor_or_designer_type, r.favorite_actor_or_designer_id
            )
        )

    # Only present from the 0003 revision on.
    if actors.c.favorite_designer_id.name in live_columns(conn, actors):
        target = designers.alias("target")
        fav_designer = actors.c.favorite_designer_id
        q = sa.select(actors.c.id, actors.c.name, fav_designer).where(~sa.exists().where(target.c.id == fav_designer))
        for r in conn.execute(q):
            out.append(DanglingFavorite(r.id, r.name, fav_designer.name, FAVORITE_DESIGNER, r.favorite_designer_id))

    out.sort(key=lambda d: (d.actor_id, d.column))
    return out


def check_favorites(conn: sa.Connection) -> int:
    """Raise FavoriteIntegrityError if any actor reference dangles; return the number of actors checked."""
    dangling = find_dangling_favorites(conn)
    if dangling:
        for d in dangling:
            logger.warning(
                "favorites.dangling",
                actor_id=d.actor_id,
                column=d.column,
                target_type=d.target_type,
                target_id=d.target_id,
            )
        raise FavoriteIntegrityError(dangling)
    return conn.execute(sa.select(sa.func.count()).select_from(actors)).scalar_one()
