from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateTable

from db.favorites import check_favorites
from db.logging import configure_logging, logger
from db.schema import FAVORITE_ACTOR, FAVORITE_DESIGNER, TABLES_BY_NAME, actors, designers, live_columns, name_lookup
from db.settings import SETTINGS


@dataclass(frozen=True)
class ActorSpec:
    name: str
    expression: str
    # Table name stored in favorite_actor_or_designer_type.
    favorite_type: str
    # Looked up by name in the favorite_type table at insert time.
    favorite_name: str
    favorite_designer: str


DESIGNER_NAMES: list[str] = ["Proenza Schouler", "Ralph Lauren"]

# Insertion order matters: later rows may name earlier actors as their favorite.
ACTOR_SPECS: list[ActorSpec] = [
    ActorSpec(
        name="Katie Cassidy",
        expression="no Serena you can't have the key",
        favorite_type=FAVORITE_DESIGNER,
        favorite_name="Proenza Schouler",
        favorite_designer="Proenza Schouler",
    ),
    ActorSpec(
        name="Jessica Szohr",
        expression="Dan where did you go I don't like you",
        favorite_type=FAVORITE_ACTOR,
        favorite_name="Katie Cassidy",
        favorite_designer="Ralph Lauren",
    ),
]

_DIALECTS = {"postgresql": postgresql.dialect, "sqlite": sqlite.dialect}


def actor_values(actor: ActorSpec) -> dict[str, object]:
    """Column values for one actor; foreign ids are scalar subqueries resolved by name."""
    return {
        "name": actor.name,
        "expression": actor.expression,
        "favorite_actor_or_designer_type": actor.favorite_type,
        "favorite_actor_or_designer_id": name_lookup(TABLES_BY_NAME[actor.favorite_type], actor.favorite_name),
        "favorite_designer_id": name_lookup(designers, actor.favorite_designer),
    }


def actor_insert(actor: ActorSpec, columns: list[str] | None = None) -> sa.Insert:
    values = actor_values(actor)
    if columns is not None:
        values = {k: v for k, v in values.items() if k in columns}
    return actors.insert().values(values)


def insert_actor(conn: sa.Connection, actor: ActorSpec, columns: list[str] | None = None) -> None:
    # A name that matches nothing makes the subquery NULL and the NOT NULL column rejects the row.
    conn.execute(actor_insert(actor, columns))


def render_script(dialect: str = "postgresql") -> str:
    """The full seed as a SQL statement stream (DDL then DML, literal values inlined)."""
    d = _DIALECTS[dialect]()
    statements: list[str] = [
        str(CreateTable(designers).compile(dialect=d)).strip(),
        str(designers.insert().values([{"name": n} for n in DESIGNER_NAMES]).compile(
            dialect=d, compile_kwargs={"literal_binds": True}
        )),
        str(CreateTable(actors).compile(dialect=d)).strip(),
    ]
    for actor in ACTOR_SPECS:
        statements.append(str(actor_insert(actor).compile(dialect=d, compile_kwargs={"literal_binds": True})))
    return "\n\n".join(s + ";" for s in statements) + "\n"


def _counts(conn: sa.Connection) -> dict[str, int]:
    return {
        t.name: conn.execute(sa.select(sa.func.count()).select_from(t)).scalar_one() for t in (designers, actors)
    }


def seed(database_url: str) -> dict[str, int]:
    engine = sa.create_engine(database_url, future=True)
    try:
        # Delete and reload in one transaction for deterministic idempotence in dev.
        with engine.begin() as conn:
            columns = live_columns(conn, actors)
            conn.execute(actors.delete())
            conn.execute(designers.delete())

            conn.execute(designers.insert(), [{"name": n} for n in DESIGNER_NAMES])
            logger.info("seed.designers_inserted", count=len(DESIGNER_NAMES))

            for actor in ACTOR_SPECS:
                insert_actor(conn, actor, columns)
            logger.info("seed.actors_inserted", count=len(ACTOR_SPECS), columns=columns)

            check_favorites(conn)
            counts = _counts(conn)
    finally:
        engine.dispose()

    logger.info("seed.complete", counts=counts)
    return counts


def check(database_url: str) -> dict[str, int]:
    engine = sa.create_engine(database_url, future=True)
    try:
        with engine.connect() as conn:
            checked = check_favorites(conn)
            counts = _counts(conn)
    finally:
        engine.dispose()
    logger.info("favorites.ok", actors_checked=checked)
    return counts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Load the designers/actors sample data.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    parser.add_argument("--log-level", default=SETTINGS.log_level)
    parser.add_argument("--log-format", choices=["json", "console"], default=SETTINGS.log_format)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--emit-sql", action="store_true", help="Print the seed as SQL instead of loading it.")
    mode.add_argument("--check-only", action="store_true", help="Only verify favorite references.")
    parser.add_argument("--dialect", choices=sorted(_DIALECTS), default="postgresql", help="Dialect for --emit-sql.")
    args = parser.parse_args(argv)

    if args.emit_sql:
        print(render_script(args.dialect), end="")
        return

    configure_logging(args.log_level, args.log_format)
    if args.check_only:
        counts = check(args.database_url)
    else:
        counts = seed(args.database_url)
    print(json.dumps({"mode": "check" if args.check_only else "seed", "counts": counts}, indent=2))


if __name__ == "__main__":
    main()
