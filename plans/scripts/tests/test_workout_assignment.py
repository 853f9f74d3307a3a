#!/usr/bin/env python3
"""Tests for workout_assignment.py.

Run with: pytest plans/scripts/tests/test_workout_assignment.py -v
"""

import sys
from pathlib import Path

import pytest

# Add script path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from models import WorkoutType
from periodization import plan_week
from plan_errors import ConstraintViolationError
from workout_assignment import assign, day_distance, hard_day_conflicts

EASY = WorkoutType.EASY_RUN
RECOVERY = WorkoutType.RECOVERY_RUN
TEMPO = WorkoutType.TEMPO_RUN
INTERVALS = WorkoutType.INTERVAL_SET
LONG = WorkoutType.LONG_RUN
RACE = WorkoutType.RACE_DAY


class TestAssign:

    def test_long_run_on_latest_day(self):
        result = assign([LONG, EASY, RECOVERY, EASY], [1, 3, 6, 7])
        assert result[7] is LONG

    def test_easy_fill_in_emitted_order(self):
        result = assign([LONG, EASY, RECOVERY, EASY], [1, 3, 6, 7])
        assert result == {1: EASY, 3: RECOVERY, 6: EASY, 7: LONG}

    def test_quality_session_avoids_long_run_neighbours(self):
        result = assign([LONG, TEMPO, EASY, EASY], [1, 3, 6, 7])
        assert result[3] is TEMPO
        assert hard_day_conflicts(result) == []

    def test_three_consecutive_days(self):
        result = assign([LONG, INTERVALS, EASY], [5, 6, 7])
        assert result == {5: INTERVALS, 6: EASY, 7: LONG}

    def test_race_day_takes_latest_day(self):
        result = assign([RACE, EASY, EASY], [2, 4, 6])
        assert result[6] is RACE

    def test_unavoidable_adjacency_is_reported(self):
        """Monday follows the Sunday long run; no other slot exists."""
        result = assign([LONG, TEMPO, EASY], [1, 6, 7])
        assert result[7] is LONG
        assert result[1] is TEMPO
        assert hard_day_conflicts(result) == [(1, 7)]

    def test_input_order_of_days_does_not_matter(self):
        assert assign([LONG, TEMPO, EASY], [7, 3, 5]) == assign([LONG, TEMPO, EASY], [3, 5, 7])

    def test_keys_are_ordered_by_day(self):
        result = assign([LONG, TEMPO, EASY, EASY], [7, 1, 4, 2])
        assert list(result) == [1, 2, 4, 7]

    def test_length_mismatch(self):
        with pytest.raises(ConstraintViolationError):
            assign([LONG, EASY], [1, 3, 5])

    def test_duplicate_days_rejected(self):
        with pytest.raises(ConstraintViolationError):
            assign([LONG, EASY, EASY], [1, 1, 5])

    @pytest.mark.parametrize('days', [[1, 3, 5], [2, 4, 6], [1, 3, 5, 7], [2, 3, 5, 6], [1, 2, 4, 6]])
    def test_full_plan_weeks_spread_hard_days(self, days):
        """Every planned week keeps hard sessions apart when the days allow it."""
        for week in range(1, 15):
            result = assign(plan_week(week, 14, len(days)), days)
            assert sorted(result) == sorted(days)
            assert hard_day_conflicts(result) == []


class TestDayDistance:

    def test_wraps_across_week(self):
        assert day_distance(7, 1) == 1
        assert day_distance(1, 7) == 1
        assert day_distance(1, 4) == 3
        assert day_distance(2, 6) == 3
        assert day_distance(3, 3) == 0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
