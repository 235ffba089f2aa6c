#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - habit statistics and persistence engine
Daily habit completions, streaks and completion rates stored in a local JSON store
"""

from .core.models import (
    Habit,
    HabitStats,
    HabitsOverview,
    Theme,
    ValidationError
)

from .core.database import (
    KeyValueStore,
    JsonFileStore,
    MemoryStore,
    StorageError,
    StorageWriteError
)

from .core.stats import (
    current_streak,
    longest_streak,
    completion_rate,
    total_completions,
    compute_stats,
    compute_all_stats,
    summarize_stats
)

from .services.habit_service import (
    HabitService,
    get_habit_service,
    initialize_habit_service
)

from .services.preferences import PreferencesService

__version__ = "1.0.0"

__all__ = [
    # Models
    'Habit',
    'HabitStats',
    'HabitsOverview',
    'Theme',
    'ValidationError',

    # Storage
    'KeyValueStore',
    'JsonFileStore',
    'MemoryStore',
    'StorageError',
    'StorageWriteError',

    # Statistics
    'current_streak',
    'longest_streak',
    'completion_rate',
    'total_completions',
    'compute_stats',
    'compute_all_stats',
    'summarize_stats',

    # Services
    'HabitService',
    'get_habit_service',
    'initialize_habit_service',
    'PreferencesService'
]
