#!/usr/bin/env python3
"""Tests for rest_days.py.

Run with: pytest plans/scripts/tests/test_rest_days.py -v
"""

import sys
from pathlib import Path

import pytest

# Add script path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rest_days import (
    consecutive_runs,
    resolve_conflicts,
    suggest_alternatives,
    suggest_optimal_rest_days,
    validate,
)


# =============================================================================
# CONFLICT DETECTION
# =============================================================================

class TestValidate:

    def test_enforced_conflict_is_invalid(self):
        """Sunday is both a training day and an enforced rest day."""
        analysis = validate([1, 3, 6, 7], [7], True)

        assert analysis.is_valid is False
        assert analysis.conflicts == (7,)
        assert analysis.suggestions
        for suggestion in analysis.suggestions:
            assert len(suggestion) == 4
            assert 7 not in suggestion

    def test_first_suggestion_moves_only_the_conflict(self):
        analysis = validate([1, 3, 6, 7], [7], True)
        assert analysis.suggestions[0] == (1, 3, 5, 6)

    def test_soft_conflict_is_reported_but_valid(self):
        analysis = validate([1, 3, 6, 7], [7], False)

        assert analysis.is_valid is True
        assert analysis.conflicts == (7,)
        assert analysis.suggestions == ()

    def test_no_conflicts(self):
        analysis = validate([2, 4, 6], [1, 7], True)
        assert analysis.is_valid is True
        assert analysis.conflicts == ()
        assert analysis.quality_score == 100

    def test_too_few_free_days_gives_no_suggestions(self):
        analysis = validate([1, 6, 7], [1, 2, 3, 4, 5], True)
        assert analysis.is_valid is False
        assert analysis.suggestions == ()

    def test_quality_score_penalties(self):
        assert validate([1, 3, 6, 7], [7], True).quality_score == 75
        assert validate([1, 3, 6, 7], [7], False).quality_score == 85

    def test_long_training_streak_flagged(self):
        analysis = validate([5, 6, 7, 1], [3], False)
        assert any('4 consecutive workout days' in m for m in analysis.messages)
        assert analysis.quality_score == 90

    def test_weekend_rest_recommendation(self):
        analysis = validate([2, 4, 6], [1], False)
        assert any('weekend' in m for m in analysis.messages)

    def test_to_dict(self):
        d = validate([1, 3, 6, 7], [7], True).to_dict()
        assert d['is_valid'] is False
        assert d['conflicts'] == [7]
        assert d['suggestions'][0] == [1, 3, 5, 6]


# =============================================================================
# SUGGESTIONS
# =============================================================================

class TestSuggestions:

    def test_alternatives_are_distinct_and_sized(self):
        alternatives = suggest_alternatives([1, 3, 6, 7], [7])
        assert len(alternatives) == len(set(alternatives))
        assert all(len(a) == 4 and len(set(a)) == 4 for a in alternatives)
        assert all(all(1 <= d <= 6 for d in a) for a in alternatives)

    def test_spread_pick_includes_latest_free_day(self):
        alternatives = suggest_alternatives([5, 6, 7], [6, 7])
        assert any(5 in a for a in alternatives)
        assert all(len(a) == 3 for a in alternatives)

    def test_optimal_rest_days_breaks_up_training(self):
        """Tuesday sits between Monday and Wednesday sessions."""
        assert suggest_optimal_rest_days([1, 3, 5, 7]) == [2, 6]

    def test_optimal_rest_days_when_few_available(self):
        assert suggest_optimal_rest_days([1, 2, 3, 4, 5]) == [6, 7]


class TestResolveConflicts:

    def test_moves_workout_to_adjacent_day(self):
        resolution = resolve_conflicts([1, 3, 6, 7], [7], True)
        assert resolution.workout_days == (1, 3, 5, 6)
        assert resolution.rest_days == (7,)
        assert resolution.changes == ('Moved workout from Sunday to Friday',)

    def test_drops_rest_day_when_no_free_day(self):
        resolution = resolve_conflicts([1, 2, 3, 4], [1, 5, 6, 7], True)
        assert resolution.workout_days == (1, 2, 3, 4)
        assert 1 not in resolution.rest_days
        assert 'Removed Monday' in resolution.changes[0]

    def test_no_changes_without_enforcement(self):
        resolution = resolve_conflicts([1, 3, 6, 7], [7], False)
        assert resolution.workout_days == (1, 3, 6, 7)
        assert resolution.changes == ()

    def test_repeated_day_with_every_day_resting(self):
        resolution = resolve_conflicts([1, 1], [1, 2, 3, 4, 5, 6, 7], True)
        assert resolution.workout_days == (1,)
        assert resolution.rest_days == (2, 3, 4, 5, 6, 7)
        assert resolution.changes == ('Removed Monday from preferred rest days',)


class TestConsecutiveRuns:

    @pytest.mark.parametrize('days,expected', [
        ([1, 2, 3], [[1, 2, 3]]),
        ([1, 3, 5], [[1], [3], [5]]),
        ([6, 7, 1], [[6, 7, 1]]),
        ([1, 3, 6, 7], [[6, 7, 1], [3]]),
    ])
    def test_runs(self, days, expected):
        assert consecutive_runs(days) == expected


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
