# core/stats.py

from typing import Dict, Iterable, Optional

from habit_tracker.core.models import Habit, HabitStats, HabitsOverview
from habit_tracker.utils.datetime_utils import DayLike, add_days, to_day_id, today as current_day

def _resolve_today(today: Optional[DayLike]) -> str:
    return current_day() if today is None else to_day_id(today)

def current_streak(habit: Habit, today: Optional[DayLike] = None) -> int:
    """
    Consecutive completed days ending today or yesterday.

    Today counts when completed but never breaks the streak when it is not;
    from yesterday backward the first incomplete day ends the walk.
    """
    day_id = _resolve_today(today)
    streak = 0

    if habit.completions.get(day_id):
        streak += 1

    day_id = add_days(day_id, -1)
    while habit.completions.get(day_id):
        streak += 1
        day_id = add_days(day_id, -1)

    return streak

def longest_streak(habit: Habit) -> int:
    """
    Longest run of consecutive completed entries in day order.

    Days without an entry are skipped, so two completions separated by an
    untouched day still count as one run.
    """
    longest = 0
    running = 0

    for day_id in sorted(habit.completions):
        if habit.completions[day_id]:
            running += 1
            longest = max(longest, running)
        else:
            running = 0

    return longest

def total_completions(habit: Habit) -> int:
    return sum(1 for done in habit.completions.values() if done)

def completion_rate(habit: Habit) -> float:
    """Percentage of recorded days marked complete"""
    total_days = len(habit.completions)
    if total_days == 0:
        return 0.0
    return total_completions(habit) / total_days * 100

def compute_stats(habit: Habit, today: Optional[DayLike] = None) -> HabitStats:
    return HabitStats(
        current_streak=current_streak(habit, today),
        longest_streak=longest_streak(habit),
        completion_rate=completion_rate(habit),
        total_completions=total_completions(habit)
    )

def compute_all_stats(habits: Iterable[Habit], today: Optional[DayLike] = None) -> Dict[str, HabitStats]:
    """Stats for every habit keyed by habit id"""
    day_id = _resolve_today(today)
    return {habit.id: compute_stats(habit, day_id) for habit in habits}

def summarize_stats(stats: Dict[str, HabitStats]) -> HabitsOverview:
    """Habit count, mean completion rate, summed current streaks and best longest streak"""
    if not stats:
        return HabitsOverview()

    values = list(stats.values())
    return HabitsOverview(
        total_habits=len(values),
        average_completion_rate=sum(s.completion_rate for s in values) / len(values),
        total_current_streaks=sum(s.current_streak for s in values),
        best_streak=max(s.longest_streak for s in values)
    )
