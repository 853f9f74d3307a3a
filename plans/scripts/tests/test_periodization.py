#!/usr/bin/env python3
"""Tests for periodization.py.

Run with: pytest plans/scripts/tests/test_periodization.py -v
"""

import sys
from pathlib import Path

import pytest

# Add script path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from models import EASY_WORKOUT_TYPES, WorkoutType
from periodization import (
    hard_session_for_week,
    phase_boundaries,
    phase_for_week,
    plan_all_weeks,
    plan_week,
)
from plan_errors import ConfigValidationError, ConstraintViolationError


class TestPhaseBoundaries:

    def test_fourteen_week_layout(self):
        phases = phase_boundaries(14).to_dict()
        assert phases['base'] == [1, 2, 3, 4, 5]
        assert phases['build'] == [6, 7, 8, 9, 10, 11]
        assert phases['peak'] == [12]
        assert phases['taper'] == [13]
        assert phases['race'] == [14]

    def test_final_week_is_race_week(self):
        for total in range(4, 53):
            assert phase_for_week(total, total) == 'race'

    def test_taper_survives_from_six_weeks(self):
        for total in range(6, 53):
            assert phase_boundaries(total).weeks_in_phase('taper'), f"T={total} lost its taper"

    def test_phases_are_contiguous_and_ordered(self):
        order = ['base', 'build', 'peak', 'taper', 'race']
        for total in (4, 5, 9, 14, 18, 26, 52):
            phases = [phase_for_week(w, total) for w in range(1, total + 1)]
            ranks = [order.index(p) for p in phases]
            assert ranks == sorted(ranks)

    def test_week_out_of_range(self):
        with pytest.raises(ConfigValidationError):
            phase_for_week(0, 14)
        with pytest.raises(ConfigValidationError):
            phase_for_week(15, 14)

    def test_plan_too_short(self):
        with pytest.raises(ConfigValidationError):
            phase_boundaries(3)


class TestPlanWeek:

    @pytest.mark.parametrize('days', [3, 4])
    def test_length_matches_days(self, days):
        for total in (4, 9, 14, 20):
            for week, types in plan_all_weeks(total, days).items():
                assert len(types) == days, f"T={total} week {week}"

    def test_every_non_race_week_has_a_long_run(self):
        weeks = plan_all_weeks(14, 4)
        for week in range(1, 14):
            assert weeks[week][0] is WorkoutType.LONG_RUN

    def test_race_week(self):
        assert plan_week(14, 14, 4) == (
            WorkoutType.RACE_DAY,
            WorkoutType.EASY_RUN,
            WorkoutType.EASY_RUN,
            WorkoutType.EASY_RUN,
        )

    def test_base_week_has_no_quality_session(self):
        assert plan_week(1, 14, 4) == (
            WorkoutType.LONG_RUN,
            WorkoutType.EASY_RUN,
            WorkoutType.RECOVERY_RUN,
            WorkoutType.EASY_RUN,
        )

    def test_build_alternates_tempo_and_intervals(self):
        assert plan_week(7, 14, 3)[1] is WorkoutType.TEMPO_RUN
        assert plan_week(8, 14, 3)[1] is WorkoutType.INTERVAL_SET
        assert hard_session_for_week(1) is WorkoutType.TEMPO_RUN
        assert hard_session_for_week(2) is WorkoutType.INTERVAL_SET

    def test_peak_week_fills_with_recovery(self):
        types = plan_week(12, 14, 4)
        assert types[0] is WorkoutType.LONG_RUN
        assert all(t is WorkoutType.RECOVERY_RUN for t in types[2:])

    def test_remaining_slots_are_easy(self):
        for types in plan_all_weeks(14, 4).values():
            assert all(t in EASY_WORKOUT_TYPES for t in types[2:])

    @pytest.mark.parametrize('days', [2, 5])
    def test_rejects_bad_day_count(self, days):
        with pytest.raises(ConstraintViolationError):
            plan_week(1, 14, days)

    def test_short_race_week_allowed(self):
        assert plan_week(14, 14, 1) == (WorkoutType.RACE_DAY,)
        assert plan_week(14, 14, 2) == (WorkoutType.RACE_DAY, WorkoutType.EASY_RUN)
        with pytest.raises(ConstraintViolationError):
            plan_week(14, 14, 5)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
