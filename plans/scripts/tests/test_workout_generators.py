#!/usr/bin/env python3
"""Tests for workout_generators.py.

Covers distance progressions, the tempo/interval structure, duration
arithmetic and dispatch over every WorkoutType.

Run with: pytest plans/scripts/tests/test_workout_generators.py -v
"""

import sys
from pathlib import Path

import pytest

# Add script path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from models import WorkoutType
from pace_calculator import calculate_training_paces
from workout_generators import (
    GENERATORS,
    easy_distance,
    generate_workout,
    interval_repetitions,
    long_run_distance,
    long_run_progression,
    peak_week,
    recovery_distance,
    taper_factor,
    tempo_distance,
)


@pytest.fixture
def paces():
    return calculate_training_paces('3:30:00')


# =============================================================================
# PROGRESSIONS
# =============================================================================

class TestLongRun:

    def test_peak_week(self):
        assert peak_week(14) == 11
        assert peak_week(4) == 1

    def test_first_week(self):
        assert long_run_distance(1, 14) == pytest.approx(8.0)

    def test_monotonic_until_peak_then_tapers(self):
        for total in (4, 6, 9, 14, 20, 30):
            distances = [km for _, km in long_run_progression(total)]
            peak = peak_week(total)
            rising = distances[:peak]
            falling = distances[peak - 1:]
            assert rising == sorted(rising), f"T={total} not rising: {rising}"
            assert falling == sorted(falling, reverse=True), f"T={total} not tapering: {falling}"

    def test_race_week_is_sixty_percent_of_peak(self):
        assert long_run_distance(14, 14) == pytest.approx(0.6 * long_run_distance(11, 14))

    def test_capped_at_32km(self):
        assert max(km for _, km in long_run_progression(40)) == pytest.approx(32.0)


class TestTempoAndIntervals:

    def test_tempo_distance_grows_and_caps(self):
        assert tempo_distance(1, 14) == pytest.approx(4.5)
        assert tempo_distance(11, 14) == pytest.approx(9.5)
        assert tempo_distance(15, 30) == pytest.approx(10.0)

    def test_tempo_tapers_after_peak(self):
        assert tempo_distance(13, 14) < tempo_distance(11, 14)

    def test_interval_reps_scale_from_4_to_8(self):
        reps = [interval_repetitions(w, 14) for w in range(1, 15)]
        assert reps[0] == 4
        assert reps[10] == 8
        assert reps[-1] == 4
        assert all(4 <= r <= 8 for r in reps)
        assert reps[:11] == sorted(reps[:11])

    def test_short_plan_interval_reps(self):
        assert [interval_repetitions(w, 4) for w in range(1, 5)] == [4, 4, 4, 4]

    def test_taper_factor(self):
        assert taper_factor(11, 14) == 1.0
        assert taper_factor(14, 14) == pytest.approx(0.6)


class TestEasyDistances:

    def test_easy_within_band(self):
        for total in (4, 9, 14, 26):
            for week in range(1, total + 1):
                assert 5.0 <= easy_distance(week, total) <= 8.0
                assert 5.0 <= recovery_distance(week, total) <= 8.0

    def test_recovery_never_longer_than_easy(self):
        for week in range(1, 15):
            assert recovery_distance(week, 14) <= easy_distance(week, 14)

    def test_base_phase_ramps(self):
        assert easy_distance(1, 14) == 5.0
        assert easy_distance(5, 14) == 7.0


# =============================================================================
# GENERATED WORKOUTS
# =============================================================================

class TestGeneratedWorkouts:

    def test_every_type_has_a_generator(self):
        assert set(GENERATORS) == set(WorkoutType)

    def test_tempo_week_one_is_7_5km(self, paces):
        """4.5 km tempo + 1.5 km warm-up + 1.5 km cool-down."""
        tempo = generate_workout(WorkoutType.TEMPO_RUN, 1, 14, paces)
        assert tempo.distance_km == pytest.approx(7.5)
        assert tempo.target_pace == pytest.approx(round(paces.tempo, 1))
        assert 'Tempo (4.5 km' in tempo.structure

    def test_duration_is_distance_times_pace(self, paces):
        for workout_type in WorkoutType:
            w = generate_workout(workout_type, 6, 14, paces)
            expected = round(w.distance_km * w.target_pace / 60)
            assert abs(w.duration_minutes - expected) <= 1, workout_type

    def test_interval_set_structure(self, paces):
        intervals = generate_workout(WorkoutType.INTERVAL_SET, 11, 14, paces)
        assert len(intervals.intervals) == 8
        assert all(rep.distance_km == 0.8 and rep.rest_seconds == 90 for rep in intervals.intervals)
        assert intervals.distance_km == pytest.approx(2.0 + 8 * 0.8 + 1.5)
        assert '8 x 800m' in intervals.description

    def test_race_day_is_full_marathon(self, paces):
        race = generate_workout(WorkoutType.RACE_DAY, 14, 14, paces)
        assert race.distance_km == 42.195
        assert race.duration_minutes == 210

    def test_text_fields_present(self, paces):
        for workout_type in WorkoutType:
            w = generate_workout(workout_type, 3, 14, paces)
            assert w.name
            assert w.description
            assert w.instructions
            assert w.structure

    def test_generators_are_pure(self, paces):
        first = generate_workout(WorkoutType.LONG_RUN, 7, 14, paces)
        second = generate_workout(WorkoutType.LONG_RUN, 7, 14, paces)
        assert first == second


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
