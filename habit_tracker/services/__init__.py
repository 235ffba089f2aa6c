# services/__init__.py

from .habit_service import HabitService, get_habit_service, initialize_habit_service
from .preferences import PreferencesService

__all__ = [
    'HabitService',
    'get_habit_service',
    'initialize_habit_service',
    'PreferencesService'
]
