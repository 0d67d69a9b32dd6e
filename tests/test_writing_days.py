"""Tests for the writing-day predicate and counter."""

from datetime import date, timedelta

from wordpace.models import Goal
from wordpace.writing_days import count_writing_days, is_writing_day, iter_days, weekday_index

WEEKDAYS_ONLY = [True, True, True, True, True, False, False]


def _goal(**overrides: object) -> Goal:
    defaults: dict[str, object] = {
        "target": 3000,
        "deadline": "2025-12-31",
        "writingDays": [True] * 7,
    }
    defaults.update(overrides)
    return Goal.model_validate(defaults)


class TestWeekdayIndex:
    def test_sunday_maps_to_last_slot(self):
        assert weekday_index(0) == 6

    def test_monday_maps_to_first_slot(self):
        assert weekday_index(1) == 0

    def test_saturday(self):
        assert weekday_index(6) == 5


class TestIsWritingDay:
    def test_weekday_pattern(self):
        goal = _goal(writingDays=WEEKDAYS_ONLY)
        assert is_writing_day(date(2025, 12, 29), goal) is True  # Monday
        assert is_writing_day(date(2025, 12, 27), goal) is False  # Saturday
        assert is_writing_day(date(2025, 12, 28), goal) is False  # Sunday

    def test_sunday_only(self):
        goal = _goal(writingDays=[False] * 6 + [True])
        assert is_writing_day(date(2025, 12, 28), goal) is True
        assert is_writing_day(date(2025, 12, 29), goal) is False

    def test_day_off_wins_over_pattern(self):
        goal = _goal(daysOff=["2025-12-30"])
        # Tuesday, and every weekday is a writing day
        assert is_writing_day(date(2025, 12, 30), goal) is False
        assert is_writing_day(date(2025, 12, 31), goal) is True

    def test_day_off_on_rest_day_stays_false(self):
        goal = _goal(writingDays=WEEKDAYS_ONLY, daysOff=["2025-12-27"])
        assert is_writing_day(date(2025, 12, 27), goal) is False

    def test_missing_pattern_has_no_writing_days(self):
        goal = Goal.model_validate({"target": 3000, "deadline": "2025-12-31"})
        assert goal.writing_days is None
        assert is_writing_day(date(2025, 12, 29), goal) is False


class TestIterDays:
    def test_inclusive(self):
        days = list(iter_days(date(2025, 12, 30), date(2026, 1, 2)))
        assert days == [
            date(2025, 12, 30),
            date(2025, 12, 31),
            date(2026, 1, 1),
            date(2026, 1, 2),
        ]

    def test_empty_when_reversed(self):
        assert list(iter_days(date(2025, 12, 31), date(2025, 12, 1))) == []

    def test_ends_on_last_representable_day(self):
        days = list(iter_days(date.max - timedelta(days=2), date.max))
        assert len(days) == 3
        assert days[-1] == date.max

    def test_single_day_at_last_representable_day(self):
        assert list(iter_days(date.max, date.max)) == [date.max]


class TestCountWritingDays:
    def test_all_days(self):
        assert count_writing_days(date(2025, 12, 29), date(2025, 12, 31), _goal()) == 3

    def test_full_month(self):
        assert count_writing_days(date(2025, 12, 1), date(2025, 12, 31), _goal()) == 31

    def test_weekdays_in_december(self):
        goal = _goal(writingDays=WEEKDAYS_ONLY)
        assert count_writing_days(date(2025, 12, 1), date(2025, 12, 31), goal) == 23

    def test_single_day_range(self):
        assert count_writing_days(date(2025, 12, 31), date(2025, 12, 31), _goal()) == 1

    def test_start_after_end_is_zero(self):
        assert count_writing_days(date(2025, 12, 31), date(2025, 12, 29), _goal()) == 0

    def test_no_writing_days_is_zero(self):
        goal = _goal(writingDays=[False] * 7)
        assert count_writing_days(date(2025, 1, 1), date(2025, 12, 31), goal) == 0

    def test_excludes_days_off(self):
        goal = _goal(daysOff=["2025-12-30"])
        assert count_writing_days(date(2025, 12, 29), date(2025, 12, 31), goal) == 2

    def test_days_off_outside_range_ignored(self):
        goal = _goal(daysOff=["2026-02-01"])
        assert count_writing_days(date(2025, 12, 29), date(2025, 12, 31), goal) == 3

    def test_daylight_saving_transitions(self):
        # US clocks spring forward on 2025-03-09 and fall back on 2025-11-02
        goal = _goal()
        assert count_writing_days(date(2025, 3, 8), date(2025, 3, 10), goal) == 3
        assert count_writing_days(date(2025, 11, 1), date(2025, 11, 3), goal) == 3

    def test_leap_day(self):
        goal = _goal()
        assert count_writing_days(date(2028, 2, 27), date(2028, 3, 1), goal) == 4

    def test_range_ending_on_last_representable_day(self):
        goal = _goal(deadline="9999-12-31")
        assert count_writing_days(date(9999, 12, 20), date.max, goal) == 12

    def test_missing_pattern_counts_zero(self):
        goal = Goal.model_validate({"target": 3000, "deadline": "2025-12-31"})
        assert count_writing_days(date(2025, 12, 1), date(2025, 12, 31), goal) == 0
