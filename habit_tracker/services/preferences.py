# services/preferences.py

import logging
from typing import Union

from habit_tracker.config import config
from habit_tracker.core.database import KeyValueStore
from habit_tracker.core.models import Theme, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_THEME = Theme.LIGHT

class PreferencesService:
    """Display preferences persisted next to the habits"""

    def __init__(self, store: KeyValueStore, theme_key: str = None):
        self.store = store
        self.theme_key = theme_key or config.storage.theme_key

    @property
    def theme(self) -> Theme:
        value = self.store.get(self.theme_key, DEFAULT_THEME.value)
        try:
            return Theme(value)
        except ValueError:
            logger.warning(f"⚠️ Unknown theme {value!r} in store, using {DEFAULT_THEME.value}")
            return DEFAULT_THEME

    def set_theme(self, theme: Union[Theme, str]) -> Theme:
        try:
            theme = Theme(theme)
        except ValueError:
            valid_values = [t.value for t in Theme]
            raise ValidationError(f"theme must be one of: {valid_values}")

        self.store.set(self.theme_key, theme.value)
        logger.info(f"🎨 Theme set to {theme.value}")
        return theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT)
