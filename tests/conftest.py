"""Shared fixtures for valueparams tests."""

import datetime as dt

import pytest

from valueparams.database import EngineRegistry
from valueparams.errors import DatabaseConnectionError
from valueparams.parameters import FixedClock


class FakeEngine:
    """In-memory engine recording every call made by a connector."""

    engine_type = "fake"

    def __init__(self, fail_on=()):
        self.connected = False
        self.connections = []
        self.disconnects = 0
        self.fail_on = set(fail_on)

    def connect(self, connection_string):
        if connection_string in self.fail_on:
            raise DatabaseConnectionError(f"cannot reach {connection_string}")
        self.connected = True
        self.connections.append(connection_string)

    def disconnect(self):
        self.connected = False
        self.disconnects += 1

    def is_connected(self):
        return self.connected


# ============================================================================
# Clock fixtures
# ============================================================================


@pytest.fixture
def fixed_instant():
    """A leap-day afternoon."""
    return dt.datetime(2024, 2, 29, 13, 45, 30)


@pytest.fixture
def fixed_clock(fixed_instant):
    """Clock frozen at fixed_instant."""
    return FixedClock(fixed_instant)


# ============================================================================
# Database fixtures
# ============================================================================


@pytest.fixture
def fake_engine_cls():
    """The fake engine class, for registering or subclassing."""
    return FakeEngine


@pytest.fixture
def fake_engine():
    """Engine that always connects."""
    return FakeEngine()


@pytest.fixture
def failing_engine():
    """Engine that refuses the connection string 'unreachable'."""
    return FakeEngine(fail_on={"unreachable"})


@pytest.fixture
def fake_registry():
    """Registry holding only the fake engine."""
    registry = EngineRegistry()
    registry.register(FakeEngine.engine_type, FakeEngine)
    return registry


@pytest.fixture
def settings_file(tmp_path):
    """YAML connector settings with a SQLite and a fake connector."""
    path = tmp_path / "connectors.yaml"
    path.write_text(
        "connectors:\n"
        "  main:\n"
        "    engine: sqlite\n"
        "    connection_string: ':memory:'\n"
        "    connect: true\n"
        "  audit:\n"
        "    engine: fake\n"
        "    connection_string: audit-db\n"
    )
    return path
