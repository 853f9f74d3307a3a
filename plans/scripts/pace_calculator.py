#!/usr/bin/env python3
"""
Pace derivation from a goal marathon finish time.

All paces are seconds per kilometre. Training paces are fixed multiples of
goal marathon pace:

    interval  0.85 x MP
    tempo     0.93 x MP
    marathon  1.00 x MP
    easy      1.15 x MP
    recovery  1.25 x MP

Smaller numbers are faster, so interval < tempo < marathon < easy < recovery
holds for every valid goal time. The long-run pace blends easy and marathon.

The formatting helpers below are the unit-conversion contract for callers
that display paces; the engine itself never converts.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict

from constants import (
    EASY_PACE_FACTOR,
    FIVE_K_DISTANCE_KM,
    FIVE_K_TO_MARATHON_OFFSET_SEC,
    GOAL_TIME_PATTERN,
    INTERVAL_PACE_FACTOR,
    KM_PER_MILE,
    MARATHON_DISTANCE_KM,
    RECOVERY_PACE_FACTOR,
    TEMPO_PACE_FACTOR,
)
from models import DistanceUnit, PaceFormat, TrainingPreferences
from plan_errors import ComputationError, ConfigValidationError


_GOAL_TIME_RE = re.compile(GOAL_TIME_PATTERN)


@dataclass(frozen=True)
class PaceTable:
    """Target paces in seconds per kilometre."""
    marathon: float
    easy: float
    recovery: float
    tempo: float
    interval: float
    long_run: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'marathon': round(self.marathon, 1),
            'easy': round(self.easy, 1),
            'recovery': round(self.recovery, 1),
            'tempo': round(self.tempo, 1),
            'interval': round(self.interval, 1),
            'long_run': round(self.long_run, 1),
        }


def parse_goal_time(goal_time: str) -> int:
    """
    Parse "H:MM:SS" (one or two hour digits) into total seconds.

    Raises:
        ConfigValidationError: If the string is malformed or not positive
    """
    if not isinstance(goal_time, str):
        raise ConfigValidationError(f"Goal finish time must be a string, got {type(goal_time).__name__}")

    match = _GOAL_TIME_RE.match(goal_time.strip())
    if not match:
        raise ConfigValidationError(f"Invalid goal finish time '{goal_time}'. Expected H:MM:SS")

    hours, minutes, seconds = (int(part) for part in match.groups())
    total_seconds = hours * 3600 + minutes * 60 + seconds
    if total_seconds <= 0:
        raise ConfigValidationError(f"Goal finish time '{goal_time}' must be greater than zero")

    return total_seconds


def calculate_training_paces(goal_time: str) -> PaceTable:
    """Build the frozen pace table for a goal marathon finish time."""
    marathon = parse_goal_time(goal_time) / MARATHON_DISTANCE_KM
    easy = marathon * EASY_PACE_FACTOR

    table = PaceTable(
        marathon=marathon,
        easy=easy,
        recovery=marathon * RECOVERY_PACE_FACTOR,
        tempo=marathon * TEMPO_PACE_FACTOR,
        interval=marathon * INTERVAL_PACE_FACTOR,
        long_run=(easy + marathon) / 2,
    )

    if not (table.interval < table.tempo < table.marathon < table.easy < table.recovery):
        raise ComputationError(f"Pace ordering violated for goal time {goal_time}: {table.to_dict()}")

    return table


# === Conversion contract ===

def km_to_miles(km: float) -> float:
    return km / KM_PER_MILE


def miles_to_km(miles: float) -> float:
    return miles * KM_PER_MILE


def pace_per_km_to_per_mile(sec_per_km: float) -> float:
    return sec_per_km * KM_PER_MILE


def format_pace(seconds: float) -> str:
    """Format a pace in seconds as "M:SS"."""
    total = int(round(seconds))
    return f"{total // 60}:{total % 60:02d}"


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as "H:MM:SS"."""
    total = int(round(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def format_pace_for_user(sec_per_km: float, preferences: TrainingPreferences) -> str:
    """Render a canonical pace the way the user asked to see it."""
    if preferences.pace_format is PaceFormat.MIN_PER_MILE:
        return f"{format_pace(pace_per_km_to_per_mile(sec_per_km))}/mi"
    return f"{format_pace(sec_per_km)}/km"


def format_distance_for_user(km: float, preferences: TrainingPreferences) -> str:
    if preferences.distance_unit is DistanceUnit.MILES:
        return f"{km_to_miles(km):.1f} mi"
    return f"{km:.1f} km"


def estimate_marathon_from_5k(five_k_time: str) -> str:
    """
    Rough marathon estimate from a 5K result ("MM:SS" or "H:MM:SS").

    Marathon pace is taken as the 5K pace plus 80 seconds per kilometre.
    """
    parts = five_k_time.strip().split(':')
    if len(parts) == 2:
        parts = ['0'] + parts
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ConfigValidationError(f"Invalid 5K time '{five_k_time}'. Expected MM:SS or H:MM:SS")

    hours, minutes, seconds = (int(p) for p in parts)
    if minutes > 59 or seconds > 59:
        raise ConfigValidationError(f"Invalid 5K time '{five_k_time}'")
    total = hours * 3600 + minutes * 60 + seconds
    if total <= 0:
        raise ConfigValidationError(f"5K time '{five_k_time}' must be greater than zero")

    marathon_pace = total / FIVE_K_DISTANCE_KM + FIVE_K_TO_MARATHON_OFFSET_SEC
    marathon_seconds = marathon_pace * MARATHON_DISTANCE_KM
    if not math.isfinite(marathon_seconds):
        raise ComputationError(f"Marathon estimate for 5K time '{five_k_time}' is not finite")

    return format_duration(marathon_seconds)
