#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Core Data Models
Habit records, derived statistics and shape validation
"""

import uuid
from typing import Dict, List, Any
from dataclasses import dataclass, field
from enum import Enum
import logging

from habit_tracker.utils.datetime_utils import is_valid_day, today

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class Theme(Enum):
    """UI themes"""
    LIGHT = "light"
    DARK = "dark"

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Data validation error"""
    pass

HABIT_FIELDS = ("id", "name", "emoji", "color", "createdAt", "completions")

def validate_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value).__name__}")
    return value

def validate_day_id(value: Any, field_name: str = "day") -> str:
    if not is_valid_day(value):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD day id, got {value!r}")
    return value

def validate_completions(value: Any) -> Dict[str, bool]:
    """Check a completions mapping: day id keys, bool values"""
    if not isinstance(value, dict):
        raise ValidationError("completions must be an object")

    completions = {}
    for day_id, done in value.items():
        validate_day_id(day_id, field_name="completions key")
        # bool only: 0/1 are not accepted as flags
        if not isinstance(done, bool):
            raise ValidationError(f"completions[{day_id}] must be a boolean")
        completions[day_id] = done
    return completions

# ===== CORE MODELS =====

@dataclass
class Habit:
    """A tracked daily habit"""
    id: str
    name: str
    emoji: str
    color: str
    created_at: str
    completions: Dict[str, bool] = field(default_factory=dict)

    def is_completed_on(self, day_id: str) -> bool:
        return self.completions.get(day_id, False)

    def completed_days(self) -> List[str]:
        """Completed day ids in chronological order"""
        return sorted(day_id for day_id, done in self.completions.items() if done)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'emoji': self.emoji,
            'color': self.color,
            'createdAt': self.created_at,
            'completions': dict(self.completions)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        """Build a habit from its stored shape, validating every field"""
        if not isinstance(data, dict):
            raise ValidationError("habit must be an object")

        missing = [name for name in HABIT_FIELDS if name not in data]
        if missing:
            raise ValidationError(f"habit is missing fields: {', '.join(missing)}")

        return cls(
            id=validate_string(data['id'], 'id'),
            name=validate_string(data['name'], 'name'),
            emoji=validate_string(data['emoji'], 'emoji'),
            color=validate_string(data['color'], 'color'),
            created_at=validate_day_id(data['createdAt'], 'createdAt'),
            completions=validate_completions(data['completions'])
        )

    @classmethod
    def create(cls, name: str, emoji: str, color: str) -> "Habit":
        """Create a new habit starting today"""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            emoji=emoji,
            color=color,
            created_at=today()
        )

@dataclass(frozen=True)
class HabitStats:
    """Statistics derived from a habit's completions"""
    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: float = 0.0
    total_completions: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'currentStreak': self.current_streak,
            'longestStreak': self.longest_streak,
            'completionRate': round(self.completion_rate, 2),
            'totalCompletions': self.total_completions
        }

@dataclass(frozen=True)
class HabitsOverview:
    """Totals across the whole habit collection"""
    total_habits: int = 0
    average_completion_rate: float = 0.0
    total_current_streaks: int = 0
    best_streak: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalHabits': self.total_habits,
            'averageCompletion': round(self.average_completion_rate, 2),
            'totalStreaks': self.total_current_streaks,
            'bestStreak': self.best_streak
        }
