from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from testcontainers.postgres import PostgresContainer


def _docker_available() -> bool:
    docker = pytest.importorskip("docker")
    try:
        docker.from_env().ping()
    except Exception:
        return False
    return True


@pytest.fixture(scope="session")
def postgres_url() -> Iterator[str]:
    if not _docker_available():
        pytest.skip("docker daemon not reachable")
    with PostgresContainer("postgres:16") as pg:
        # Normalize testcontainers URL (may be postgresql:// or postgresql+psycopg2://) to psycopg3.
        base = pg.get_connection_url().replace("postgresql+psycopg2://", "postgresql://")
        yield base.replace("postgresql://", "postgresql+psycopg://", 1)


@pytest.fixture()
def pg_seeded_db(postgres_url: str, migrate: Callable[..., None]) -> str:
    from db.seed import seed

    migrate(postgres_url)
    seed(postgres_url)
    return postgres_url
