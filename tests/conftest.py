from __future__ import annotations

import pytest

from src.attendance_registry.attendance_registry.container import build_container
from src.attendance_registry.attendance_registry.database.memory import MemoryDatabase
from src.attendance_registry.attendance_registry.main import create_app

ADMIN = "0x00000000000000000000000000000000000000ad"


class FakeClock:
    """Ledger clock the test moves by hand."""

    def __init__(self, value: int = 0):
        self.value = value

    def now(self) -> int:
        return self.value


@pytest.fixture
def memory_db() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(0)


@pytest.fixture
def container(memory_db, clock):
    return build_container(admin_identity=ADMIN, memory_db=memory_db, clock=clock)


@pytest.fixture
def registry(container):
    return container.registry


@pytest.fixture
def app(monkeypatch, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"ADMIN_IDENTITY": ADMIN}, clock=clock)


@pytest.fixture
def client(app):
    return app.test_client()
