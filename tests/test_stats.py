from datetime import date

import pytest

from habit_tracker.core.models import Habit, HabitStats
from habit_tracker.core.stats import (
    completion_rate,
    compute_all_stats,
    compute_stats,
    current_streak,
    longest_streak,
    total_completions,
)


def make_habit(completions=None, habit_id="h1"):
    return Habit(
        id=habit_id,
        name="Read",
        emoji="📚",
        color="#3b82f6",
        created_at="2024-01-01",
        completions=dict(completions or {}),
    )


def test_new_habit_has_zero_stats():
    stats = compute_stats(make_habit(), today="2024-01-03")
    assert stats == HabitStats(0, 0, 0.0, 0)


def test_mixed_entries_rate_and_longest():
    habit = make_habit({"2024-01-01": True, "2024-01-02": True, "2024-01-03": False})
    stats = compute_stats(habit, today="2024-01-03")

    assert stats.longest_streak == 2
    assert stats.total_completions == 2
    assert stats.completion_rate == pytest.approx(66.67, abs=0.01)
    assert stats.current_streak == 2
    assert stats.to_dict()["completionRate"] == 66.67


def test_pending_today_does_not_break_streak():
    habit = make_habit({"2024-01-05": True})
    assert current_streak(habit, today="2024-01-06") == 1


def test_today_completed_counts():
    habit = make_habit({"2024-01-04": True, "2024-01-05": True, "2024-01-06": True})
    assert current_streak(habit, today="2024-01-06") == 3


def test_explicit_false_today_does_not_break_streak():
    habit = make_habit({"2024-01-04": True, "2024-01-05": True, "2024-01-06": False})
    assert current_streak(habit, today="2024-01-06") == 2


def test_gap_before_today_ends_streak():
    habit = make_habit({"2024-01-01": True, "2024-01-02": True, "2024-01-04": True})
    assert current_streak(habit, today="2024-01-05") == 1


def test_yesterday_missing_means_no_streak():
    habit = make_habit({"2024-01-01": True, "2024-01-02": True})
    assert current_streak(habit, today="2024-01-04") == 0


def test_only_today_completed():
    habit = make_habit({"2024-01-06": True})
    assert current_streak(habit, today="2024-01-06") == 1


def test_current_streak_walks_across_month_boundary():
    habit = make_habit({"2024-02-28": True, "2024-02-29": True, "2024-03-01": True})
    assert current_streak(habit, today=date(2024, 3, 1)) == 3


def test_current_streak_uses_clock_by_default(freeze_today):
    freeze_today("2024-01-06")
    habit = make_habit({"2024-01-05": True, "2024-01-04": True})
    assert current_streak(habit) == 2


def test_longest_streak_ignores_calendar_gaps():
    # 2024-01-02 was never recorded, so both completions form one run
    habit = make_habit({"2024-01-01": True, "2024-01-03": True})
    assert longest_streak(habit) == 2


def test_longest_streak_resets_on_explicit_false():
    habit = make_habit({
        "2024-01-01": True,
        "2024-01-02": True,
        "2024-01-03": True,
        "2024-01-04": False,
        "2024-01-05": True,
    })
    assert longest_streak(habit) == 3


def test_longest_streak_sorts_keys():
    habit = make_habit({"2024-01-03": True, "2024-01-01": False, "2024-01-02": True})
    assert longest_streak(habit) == 2


def test_untouched_days_do_not_count_toward_rate():
    habit = make_habit({"2024-01-01": True, "2024-01-10": False})
    assert completion_rate(habit) == 50.0
    assert total_completions(habit) == 1


@pytest.mark.parametrize("completions", [
    {},
    {"2024-01-01": False},
    {"2024-01-01": True},
    {"2024-01-01": True, "2024-01-02": False, "2024-01-03": False},
])
def test_completion_rate_bounds(completions):
    rate = completion_rate(make_habit(completions))
    assert 0 <= rate <= 100


def test_all_stats_keyed_by_id():
    habits = [
        make_habit({"2024-01-01": True}, habit_id="a"),
        make_habit({}, habit_id="b"),
    ]
    stats = compute_all_stats(habits, today="2024-01-02")

    assert set(stats) == {"a", "b"}
    assert stats["a"].current_streak == 1
    assert stats["b"] == HabitStats()
