"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from simple_todos.infra.db import DatabaseEngine
from simple_todos.infra.config import Settings
from simple_todos.infra.repository import MemoryKeyValueStore


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = DatabaseEngine("sqlite://")
    engine.create_tables()

    yield engine

    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a new session for a test"""
    with db_engine.get_session() as session:
        yield session


@pytest.fixture
def memory_storage():
    return MemoryKeyValueStore()


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings whose config and data directories live under tmp_path"""
    # Keep a developer's config/settings.yaml out of the tests
    monkeypatch.chdir(tmp_path)
    return Settings(config_dir=tmp_path / "config_home", data_dir=tmp_path / "data")


class FailingStorage:
    """A store that is always unavailable."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.set_calls = 0

    def get(self, key):
        if self.fail_get:
            raise OSError("storage unavailable")
        return None

    def set(self, key, value):
        self.set_calls += 1
        if self.fail_set:
            raise OSError("quota exceeded")


class RecordingStorage(MemoryKeyValueStore):
    """Memory store that counts writes."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = []

    def set(self, key, value):
        self.writes.append((key, value))
        super().set(key, value)


@pytest.fixture
def recording_storage():
    return RecordingStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def write_failing_storage():
    return FailingStorage(fail_get=False)
