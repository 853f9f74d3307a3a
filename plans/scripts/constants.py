#!/usr/bin/env python3
"""
Single source of truth for constants used across the plan engine.

All shared constants should be defined here to avoid duplication.
Every distance is in kilometres and every pace in seconds per kilometre.
"""

from typing import Dict, List


# === DAY MAPPINGS ===
# ISO numbering: Monday=1 ... Sunday=7

DAY_NUMBERS: List[int] = [1, 2, 3, 4, 5, 6, 7]

DAY_NUMBER_TO_ABBREV: Dict[int, str] = {
    1: 'Mon',
    2: 'Tue',
    3: 'Wed',
    4: 'Thu',
    5: 'Fri',
    6: 'Sat',
    7: 'Sun',
}

DAY_NUMBER_TO_NAME: Dict[int, str] = {
    1: 'Monday',
    2: 'Tuesday',
    3: 'Wednesday',
    4: 'Thursday',
    5: 'Friday',
    6: 'Saturday',
    7: 'Sunday',
}

WEEKEND_DAYS: List[int] = [6, 7]


def day_name(day: int) -> str:
    """Human-readable day name for an ISO day number."""
    return DAY_NUMBER_TO_NAME.get(day, 'Unknown')


# === WORKOUT DAYS ===

MIN_WORKOUT_DAYS: int = 3
MAX_WORKOUT_DAYS: int = 4

# Fewer rest days than this per week gets flagged
MIN_REST_DAYS_PER_WEEK: int = 2
MAX_CONSECUTIVE_WORKOUT_DAYS: int = 3


# === PLAN LENGTH ===

DEFAULT_PLAN_WEEKS: int = 14
PLAN_WEEKS_MIN: int = 4
PLAN_WEEKS_MAX: int = 52

# Timeline thresholds (weeks)
TIMELINE_FULL_WEEKS: int = 14
TIMELINE_COMPRESS_WEEKS: int = 10
TIMELINE_PRIORITIZE_WEEKS: int = 6


# === TRAINING PHASES ===

TRAINING_PHASES: List[str] = [
    'base',
    'build',
    'peak',
    'taper',
    'race',
]

BASE_PHASE_FRACTION: float = 0.35
BUILD_PHASE_FRACTION: float = 0.40
PEAK_PHASE_FRACTION: float = 0.15

# Plans at least this long always keep one taper week before race week
MIN_WEEKS_FOR_TAPER: int = 6

# Weeks between the long-run peak and race week
PEAK_WEEK_OFFSET: int = 3


# === RACE ===

MARATHON_DISTANCE_KM: float = 42.195
GOAL_TIME_PATTERN: str = r'^(\d{1,2}):([0-5]\d):([0-5]\d)$'


# === PACE MULTIPLIERS (relative to marathon pace) ===

EASY_PACE_FACTOR: float = 1.15
RECOVERY_PACE_FACTOR: float = 1.25
TEMPO_PACE_FACTOR: float = 0.93
INTERVAL_PACE_FACTOR: float = 0.85

# 5K -> marathon estimate: marathon pace is the 5K pace plus this many s/km
FIVE_K_DISTANCE_KM: float = 5.0
FIVE_K_TO_MARATHON_OFFSET_SEC: int = 80


# === UNIT CONVERSION ===

KM_PER_MILE: float = 1.609344


# === WORKOUT DISTANCES (km) ===

LONG_RUN_BASE_KM: float = 8.0
LONG_RUN_WEEKLY_INCREMENT_KM: float = 1.2
PEAK_LONG_RUN_KM: float = 32.0
TAPER_FLOOR_FRACTION: float = 0.60

TEMPO_BASE_KM: float = 4.0
TEMPO_WEEKLY_INCREMENT_KM: float = 0.5
TEMPO_MAX_KM: float = 10.0
TEMPO_WARM_UP_KM: float = 1.5
TEMPO_COOL_DOWN_KM: float = 1.5

INTERVAL_REP_KM: float = 0.8
INTERVAL_MIN_REPS: int = 4
INTERVAL_MAX_REPS: int = 8
INTERVAL_REST_SECONDS: int = 90
INTERVAL_WARM_UP_KM: float = 2.0
INTERVAL_COOL_DOWN_KM: float = 1.5

EASY_MIN_KM: float = 5.0
EASY_MAX_KM: float = 8.0
EASY_BASE_WEEKLY_INCREMENT_KM: float = 0.5
RECOVERY_OFFSET_KM: float = 2.0

# Easy distance per phase; base ramps from EASY_MIN_KM instead
EASY_DISTANCE_BY_PHASE: Dict[str, float] = {
    'build': 8.0,
    'peak': 6.0,
    'taper': 6.5,
    'race': 5.0,
}


# === CACHE DEFAULTS ===

CACHE_TTL_SECONDS: int = 3600
CACHE_MAX_ENTRIES: int = 256
