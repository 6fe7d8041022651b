from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config


REPO_ROOT = Path(__file__).resolve().parents[1]

# Ensure the repo root is importable (so `import db.*` works in tests).
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture()
def alembic_cfg() -> Config:
    return Config(str(REPO_ROOT / "db" / "migrations" / "alembic.ini"))


@pytest.fixture()
def migrate(alembic_cfg: Config, monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    # env.py reads DATABASE_URL before falling back to the ini.
    def _migrate(database_url: str, revision: str = "head") -> None:
        monkeypatch.setenv("DATABASE_URL", database_url)
        command.upgrade(alembic_cfg, revision)

    return _migrate
