from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from moodlog.app.core import config
from moodlog.db import create_engine, create_session_factory, init_db


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def test_client(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("VERSION", "0.1.0-test")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "moodlog.log"))
    db_path = tmp_path / f"api_{uuid4().hex}.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    config.get_settings.cache_clear()

    from moodlog.app.main import app

    try:
        with TestClient(app) as client:
            yield client
    finally:
        config.get_settings.cache_clear()


@pytest.fixture()
async def temp_session_factory(tmp_path: Path, anyio_backend: str):
    db_path = tmp_path / f"unit_{uuid4().hex}.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    engine = create_engine(database_url)
    session_factory = create_session_factory(engine)
    await init_db(engine, session_factory, "test")
    try:
        yield session_factory
    finally:
        await engine.dispose()
