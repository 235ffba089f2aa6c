# services/habit_service.py

import logging
from typing import Dict, List, Optional, Tuple

from habit_tracker.config import config
from habit_tracker.core.database import KeyValueStore, JsonFileStore, StorageWriteError
from habit_tracker.core.models import Habit, HabitStats, HabitsOverview, ValidationError
from habit_tracker.core.stats import compute_stats, compute_all_stats, summarize_stats
from habit_tracker.utils.datetime_utils import DayLike, day_range, to_day_id

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "emoji", "color")

class HabitService:
    """
    Habit repository backed by a key-value store

    - Lazy load of the collection on first access
    - Create, delete and toggle-completion operations
    - Full rewrite of the collection after every mutation
    - Fresh statistics on every request
    """

    def __init__(self, store: KeyValueStore, storage_key: str = None):
        self.store = store
        self.storage_key = storage_key or config.storage.habits_key
        self._habits: Optional[List[Habit]] = None
        logger.info(f"✅ HabitService initialized (key '{self.storage_key}')")

    # ===== LOADING AND SAVING =====

    def _load(self) -> List[Habit]:
        """Read and validate the stored collection"""
        data = self.store.get(self.storage_key, [])

        if not isinstance(data, list):
            logger.error(f"❌ Stored habits are not a list, starting empty")
            return []

        habits = []
        seen_ids = set()
        try:
            for item in data:
                habit = Habit.from_dict(item)
                if habit.id in seen_ids:
                    raise ValidationError(f"duplicate habit id {habit.id}")
                seen_ids.add(habit.id)
                habits.append(habit)
        except ValidationError as e:
            logger.error(f"❌ Stored habits are malformed, starting empty: {e}")
            return []

        logger.info(f"📂 Loaded {len(habits)} habits")
        return habits

    def _collection(self) -> List[Habit]:
        if self._habits is None:
            self._habits = self._load()
        return self._habits

    def _commit(self, habits: List[Habit]) -> None:
        """Swap in the new collection, then rewrite it in full"""
        self._habits = habits
        try:
            self.store.set(self.storage_key, [habit.to_dict() for habit in habits])
        except StorageWriteError as e:
            logger.error(f"❌ Habits changed in memory but were not saved: {e}")
            raise

    def reload(self) -> None:
        """Drop the in-memory collection; the next access reads the store"""
        self._habits = None

    # ===== READ =====

    @property
    def habits(self) -> Tuple[Habit, ...]:
        """Habits in insertion order"""
        return tuple(self._collection())

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self._collection():
            if habit.id == habit_id:
                return habit
        return None

    # ===== MUTATIONS =====

    def add_habit(self, name: str, emoji: str, color: str) -> Habit:
        """Create a habit and append it to the collection"""
        habits = self._collection()
        habit = Habit.create(name, emoji, color)
        while any(existing.id == habit.id for existing in habits):
            habit = Habit.create(name, emoji, color)

        self._commit(habits + [habit])
        logger.info(f"✅ Created habit {habit.id}: {name}")
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        """Remove a habit; unknown ids are ignored"""
        habits = self._collection()
        remaining = [habit for habit in habits if habit.id != habit_id]
        removed = len(remaining) != len(habits)

        self._commit(remaining)
        if removed:
            logger.info(f"🗑️ Deleted habit {habit_id}")
        else:
            logger.debug(f"Delete ignored, no habit {habit_id}")
        return removed

    def toggle_completion(self, habit_id: str, day: DayLike) -> Optional[bool]:
        """Flip a day's completion flag, returning the new value"""
        try:
            day_id = to_day_id(day)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        habits = self._collection()
        target = self.get_habit(habit_id)
        if target is None:
            logger.debug(f"Toggle ignored, no habit {habit_id}")
            return None

        completions = dict(target.completions)
        completions[day_id] = not completions.get(day_id, False)
        toggled = Habit(
            id=target.id,
            name=target.name,
            emoji=target.emoji,
            color=target.color,
            created_at=target.created_at,
            completions=completions
        )

        self._commit([toggled if habit.id == habit_id else habit for habit in habits])
        logger.debug(f"Habit {habit_id} on {day_id}: {completions[day_id]}")
        return completions[day_id]

    def update_habit(self, habit_id: str, **updates) -> bool:
        """Update display fields (name, emoji, color) of a habit"""
        target = self.get_habit(habit_id)
        if target is None:
            return False

        changes = {}
        for field_name, value in updates.items():
            if field_name not in EDITABLE_FIELDS:
                logger.warning(f"⚠️ Field '{field_name}' of habit {habit_id} is not editable, ignored")
                continue
            if not isinstance(value, str):
                raise ValidationError(f"{field_name} must be a string")
            changes[field_name] = value

        if not changes:
            return False

        updated = Habit(
            id=target.id,
            name=changes.get("name", target.name),
            emoji=changes.get("emoji", target.emoji),
            color=changes.get("color", target.color),
            created_at=target.created_at,
            completions=dict(target.completions)
        )
        self._commit([updated if habit.id == habit_id else habit for habit in self._collection()])
        logger.info(f"✅ Habit {habit_id} updated: {', '.join(changes)}")
        return True

    # ===== STATISTICS =====

    def stats_for(self, habit_id: str, today: Optional[DayLike] = None) -> Optional[HabitStats]:
        habit = self.get_habit(habit_id)
        if habit is None:
            return None
        return compute_stats(habit, today)

    def all_stats(self, today: Optional[DayLike] = None) -> Dict[str, HabitStats]:
        return compute_all_stats(self._collection(), today)

    def overview(self, today: Optional[DayLike] = None) -> HabitsOverview:
        """Totals across all habits for the progress panel"""
        return summarize_stats(self.all_stats(today))

    def completion_grid(self, habit_id: str, days: int = None) -> Optional[List[Tuple[str, bool]]]:
        """(day id, completed) pairs for the rolling window ending today"""
        habit = self.get_habit(habit_id)
        if habit is None:
            return None
        window = config.calendar.window_days if days is None else days
        return [(day_id, habit.is_completed_on(day_id)) for day_id in day_range(window)]

# ===== GLOBAL INSTANCE =====

_global_habit_service = None

def get_habit_service() -> HabitService:
    """Process-wide HabitService backed by the configured store file"""
    global _global_habit_service
    if _global_habit_service is None:
        _global_habit_service = HabitService(JsonFileStore(config.storage.path))
    return _global_habit_service

def initialize_habit_service(store: KeyValueStore = None) -> HabitService:
    """Replace the process-wide HabitService"""
    global _global_habit_service
    _global_habit_service = HabitService(store or JsonFileStore(config.storage.path))
    return _global_habit_service
