from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import sqlalchemy as sa
import structlog


@pytest.fixture()
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'casting.db'}"


@pytest.fixture()
def migrated_db(sqlite_url: str, migrate: Callable[..., None]) -> str:
    migrate(sqlite_url)
    return sqlite_url


@pytest.fixture()
def seeded_db(migrated_db: str) -> str:
    from db.seed import seed

    seed(migrated_db)
    return migrated_db


@pytest.fixture()
def engine(seeded_db: str) -> Iterator[sa.Engine]:
    eng = sa.create_engine(seeded_db, future=True)
    yield eng
    eng.dispose()


@pytest.fixture()
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    # configure_logging caches on first use; drop the logger bound to the captured stream.
    from db.logging import logger

    vars(logger).pop("bind", None)
