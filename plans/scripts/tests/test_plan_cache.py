#!/usr/bin/env python3
"""Tests for plan_cache.py.

Run with: pytest plans/scripts/tests/test_plan_cache.py -v
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add script path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from models import TrainingPlanConfig, TrainingPreferences
from plan_cache import PlanCache, config_fingerprint
from training_scheduler import generate_training_plan


def make_config(days=(1, 3, 6), goal='3:30:00'):
    return TrainingPlanConfig(
        race_date=date(2024, 6, 1),
        goal_finish_time=goal,
        workout_days_of_week=days,
    )


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class CountingGenerator:
    def __init__(self):
        self.calls = 0

    def __call__(self, config):
        self.calls += 1
        return generate_training_plan(config)


class TestFingerprint:

    def test_stable_across_day_order(self):
        assert config_fingerprint(make_config((1, 3, 6))) == config_fingerprint(make_config((6, 1, 3)))

    def test_differs_by_goal(self):
        assert config_fingerprint(make_config(goal='3:30:00')) != config_fingerprint(make_config(goal='3:31:00'))

    def test_differs_by_preferences(self):
        base = make_config()
        enforced = TrainingPlanConfig(
            race_date=base.race_date,
            goal_finish_time=base.goal_finish_time,
            workout_days_of_week=base.workout_days_of_week,
            preferences=TrainingPreferences(preferred_rest_days=(7,), enforce_rest_days=True),
        )
        assert config_fingerprint(base) != config_fingerprint(enforced)

    def test_is_sha256_hex(self):
        fingerprint = config_fingerprint(make_config())
        assert len(fingerprint) == 64
        int(fingerprint, 16)


class TestPlanCache:

    def test_hit_skips_generation(self):
        cache = PlanCache(ttl_seconds=60, max_entries=4, clock=FakeClock())
        generator = CountingGenerator()

        first = cache.get_or_generate(make_config(), generator)
        second = cache.get_or_generate(make_config((6, 3, 1)), generator)

        assert generator.calls == 1
        assert first is second
        assert cache.stats()['hits'] == 1

    def test_entries_expire(self):
        clock = FakeClock()
        cache = PlanCache(ttl_seconds=60, max_entries=4, clock=clock)
        generator = CountingGenerator()

        cache.get_or_generate(make_config(), generator)
        clock.now = 59.0
        cache.get_or_generate(make_config(), generator)
        assert generator.calls == 1

        clock.now = 60.0
        cache.get_or_generate(make_config(), generator)
        assert generator.calls == 2

    def test_oldest_entry_evicted(self):
        cache = PlanCache(ttl_seconds=60, max_entries=2, clock=FakeClock())
        configs = [make_config(goal=g) for g in ('3:00:00', '3:30:00', '4:00:00')]
        for config in configs:
            cache.put(config, generate_training_plan(config))

        assert len(cache) == 2
        assert cache.get(configs[0]) is None
        assert cache.get(configs[2]) is not None

    def test_clear(self):
        cache = PlanCache(ttl_seconds=60, max_entries=2, clock=FakeClock())
        cache.get_or_generate(make_config(), generate_training_plan)
        cache.clear()
        assert len(cache) == 0
        assert cache.stats()['misses'] == 0

    @pytest.mark.parametrize('ttl,size', [(0, 10), (10, 0), (-5, 10)])
    def test_rejects_bad_limits(self, ttl, size):
        with pytest.raises(ValueError):
            PlanCache(ttl_seconds=ttl, max_entries=size)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
