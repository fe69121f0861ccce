"""
Every test gets its own SQLite file; the app and the ORM fixtures share it.
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from liftlog.db import Database
from liftlog.main import create_app
from liftlog.settings import Settings

class FakeClock:
    """Callable clock that only moves when told to."""
    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **delta) -> datetime:
        self.current += timedelta(**delta)
        return self.current

@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL_OVERRIDE=f"sqlite:///{tmp_path / 'liftlog.db'}",
        CREATE_TABLES=True,
        LOG_LEVEL="WARNING",
    )

@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c

@pytest.fixture
def db(settings):
    database = Database(settings.DATABASE_URL).open()
    database.create_all()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.close()

@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 9, 30, 0))
