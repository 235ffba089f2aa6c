from datetime import datetime

import pytest

from habit_tracker.core.database import JsonFileStore, MemoryStore
from habit_tracker.services.habit_service import HabitService
from habit_tracker.utils import datetime_utils


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "habits_store.json"


@pytest.fixture
def file_store(store_path):
    return JsonFileStore(store_path)


@pytest.fixture
def service(memory_store):
    return HabitService(memory_store)


@pytest.fixture
def freeze_today(monkeypatch):
    """Pin the clock to a given YYYY-MM-DD day (noon local time)."""
    def _freeze(day_id):
        frozen = datetime.strptime(day_id, "%Y-%m-%d").replace(hour=12)
        monkeypatch.setattr(datetime_utils, "now_local", lambda: frozen)
        return day_id
    return _freeze
