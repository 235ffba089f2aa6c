import pytest

from habit_tracker.core.database import JsonFileStore
from habit_tracker.core.models import Theme, ValidationError
from habit_tracker.services.preferences import PreferencesService


def test_default_theme_is_light(memory_store):
    assert PreferencesService(memory_store).theme == Theme.LIGHT


def test_set_and_toggle_theme(memory_store):
    prefs = PreferencesService(memory_store)

    assert prefs.set_theme("dark") == Theme.DARK
    assert memory_store.get("theme") == "dark"
    assert prefs.toggle_theme() == Theme.LIGHT
    assert prefs.toggle_theme() == Theme.DARK


def test_theme_persists(store_path):
    PreferencesService(JsonFileStore(store_path)).set_theme(Theme.DARK)
    assert PreferencesService(JsonFileStore(store_path)).theme == Theme.DARK


def test_unknown_stored_theme_falls_back(memory_store):
    memory_store.set("theme", "solarized")
    assert PreferencesService(memory_store).theme == Theme.LIGHT


def test_set_invalid_theme(memory_store):
    with pytest.raises(ValidationError):
        PreferencesService(memory_store).set_theme("neon")
    assert "theme" not in memory_store
