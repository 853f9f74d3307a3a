#!/usr/bin/env python3
"""
Workout generators: distance, duration, pace and text for each workout type.

Every generator takes (week, total_weeks, paces) and returns WorkoutMetrics.
Duration is always distance x target pace, rounded to the nearest minute.

Progressions are functions of total_weeks so any plan length works:

- Long run climbs 1.2 km/week from 8 km (capped at 32 km) until
  peak_week = total_weeks - 3, then falls linearly to 60% of the distance
  reached at peak by race week.
- Tempo and interval sessions rise until peak_week and follow the same
  taper factor afterwards.
- Easy and recovery runs stay inside the 5-8 km band, set by phase.
"""

import math
from typing import Callable, Dict, List, Tuple

from constants import (
    EASY_BASE_WEEKLY_INCREMENT_KM,
    EASY_DISTANCE_BY_PHASE,
    EASY_MAX_KM,
    EASY_MIN_KM,
    INTERVAL_COOL_DOWN_KM,
    INTERVAL_MAX_REPS,
    INTERVAL_MIN_REPS,
    INTERVAL_REP_KM,
    INTERVAL_REST_SECONDS,
    INTERVAL_WARM_UP_KM,
    LONG_RUN_BASE_KM,
    LONG_RUN_WEEKLY_INCREMENT_KM,
    MARATHON_DISTANCE_KM,
    PEAK_LONG_RUN_KM,
    PEAK_WEEK_OFFSET,
    RECOVERY_OFFSET_KM,
    TAPER_FLOOR_FRACTION,
    TEMPO_BASE_KM,
    TEMPO_COOL_DOWN_KM,
    TEMPO_MAX_KM,
    TEMPO_WARM_UP_KM,
    TEMPO_WEEKLY_INCREMENT_KM,
)
from models import IntervalRep, WorkoutMetrics, WorkoutType
from pace_calculator import PaceTable, format_pace
from periodization import phase_for_week
from plan_errors import ComputationError


Generator = Callable[[int, int, PaceTable], WorkoutMetrics]


# === Progression curves ===

def peak_week(total_weeks: int) -> int:
    return max(1, total_weeks - PEAK_WEEK_OFFSET)


def taper_factor(week: int, total_weeks: int) -> float:
    """1.0 up to peak week, then linear down to TAPER_FLOOR_FRACTION at race week."""
    peak = peak_week(total_weeks)
    if week <= peak or total_weeks == peak:
        return 1.0
    progress = (week - peak) / (total_weeks - peak)
    return 1.0 - (1.0 - TAPER_FLOOR_FRACTION) * progress


def long_run_distance(week: int, total_weeks: int) -> float:
    def rising(w: int) -> float:
        return min(LONG_RUN_BASE_KM + LONG_RUN_WEEKLY_INCREMENT_KM * (w - 1), PEAK_LONG_RUN_KM)

    peak = peak_week(total_weeks)
    if week <= peak:
        return rising(week)
    return rising(peak) * taper_factor(week, total_weeks)


def tempo_distance(week: int, total_weeks: int) -> float:
    effective = min(week, peak_week(total_weeks))
    distance = min(TEMPO_BASE_KM + TEMPO_WEEKLY_INCREMENT_KM * effective, TEMPO_MAX_KM)
    return distance * taper_factor(week, total_weeks)


def interval_repetitions(week: int, total_weeks: int) -> int:
    peak = peak_week(total_weeks)
    if peak == 1:
        return INTERVAL_MIN_REPS

    span = INTERVAL_MAX_REPS - INTERVAL_MIN_REPS
    if week <= peak:
        return INTERVAL_MIN_REPS + (span * (week - 1)) // (peak - 1)

    return INTERVAL_MAX_REPS - (span * (week - peak)) // (total_weeks - peak)


def easy_distance(week: int, total_weeks: int) -> float:
    phase = phase_for_week(week, total_weeks)
    if phase == 'base':
        return min(EASY_MIN_KM + EASY_BASE_WEEKLY_INCREMENT_KM * (week - 1), EASY_MAX_KM)
    return EASY_DISTANCE_BY_PHASE[phase]


def recovery_distance(week: int, total_weeks: int) -> float:
    return max(EASY_MIN_KM, easy_distance(week, total_weeks) - RECOVERY_OFFSET_KM)


# === Helpers ===

def duration_minutes(distance_km: float, pace: float) -> int:
    return int(round(distance_km * pace / 60))


def _km(value: float) -> float:
    return round(value, 2)


def _pace(value: float) -> str:
    return f"{format_pace(value)}/km"


def _checked(workout_type: WorkoutType, week: int, metrics: WorkoutMetrics) -> WorkoutMetrics:
    """Reject impossible output; valid configurations never reach the raise."""
    values = [metrics.distance_km, metrics.duration_minutes, metrics.target_pace]
    values.extend(rep.distance_km for rep in metrics.intervals)
    if any(not math.isfinite(v) for v in values) or metrics.distance_km < 0 or metrics.duration_minutes < 0:
        raise ComputationError(
            f"{workout_type.value} week {week} produced distance={metrics.distance_km} "
            f"duration={metrics.duration_minutes} pace={metrics.target_pace}"
        )
    return metrics


# === Generators ===

def generate_long_run(week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    distance = _km(long_run_distance(week, total_weeks))
    trend = 'building' if week <= peak_week(total_weeks) else 'tapering'

    return WorkoutMetrics(
        name=f"Week {week} Long Run",
        description=f"{distance:.1f} km long run at {_pace(paces.long_run)} ({trend})",
        distance_km=distance,
        duration_minutes=duration_minutes(distance, paces.long_run),
        target_pace=round(paces.long_run, 1),
        instructions=(
            f"Run {distance:.1f} km at a steady {_pace(paces.long_run)}",
            f"Start near easy pace ({_pace(paces.easy)}) and settle toward marathon pace ({_pace(paces.marathon)})",
            'Practise race-day fuelling and hydration',
            'Keep the effort conversational for most of the run',
        ),
        structure=f"Long run ({distance:.1f} km at {_pace(paces.long_run)})",
    )


def generate_tempo_run(week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    tempo = _km(tempo_distance(week, total_weeks))
    total = _km(TEMPO_WARM_UP_KM + tempo + TEMPO_COOL_DOWN_KM)

    return WorkoutMetrics(
        name=f"Week {week} Tempo Run",
        description=(
            f"{tempo:.1f} km comfortably hard tempo at {_pace(paces.tempo)} "
            f"with {TEMPO_WARM_UP_KM:.1f} km warm-up and {TEMPO_COOL_DOWN_KM:.1f} km cool-down"
        ),
        distance_km=total,
        duration_minutes=duration_minutes(total, paces.tempo),
        target_pace=round(paces.tempo, 1),
        instructions=(
            f"Warm up with {TEMPO_WARM_UP_KM:.1f} km easy jog",
            f"Run {tempo:.1f} km at tempo pace: {_pace(paces.tempo)}",
            f"Cool down with {TEMPO_COOL_DOWN_KM:.1f} km easy jog",
            'Tempo pace should feel "comfortably hard"',
            f"This is faster than your goal marathon pace ({_pace(paces.marathon)})",
        ),
        structure=(
            f"Warm-up ({TEMPO_WARM_UP_KM:.1f} km at {_pace(paces.easy)}) -> "
            f"Tempo ({tempo:.1f} km at {_pace(paces.tempo)}) -> "
            f"Cool-down ({TEMPO_COOL_DOWN_KM:.1f} km at {_pace(paces.easy)})"
        ),
    )


def generate_interval_set(week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    reps = interval_repetitions(week, total_weeks)
    rep_pace = round(paces.interval, 1)
    intervals = tuple(
        IntervalRep(distance_km=INTERVAL_REP_KM, pace=rep_pace, rest_seconds=INTERVAL_REST_SECONDS)
        for _ in range(reps)
    )
    total = _km(INTERVAL_WARM_UP_KM + reps * INTERVAL_REP_KM + INTERVAL_COOL_DOWN_KM)
    rep_time = format_pace(paces.interval * INTERVAL_REP_KM)

    return WorkoutMetrics(
        name=f"Week {week} 800m Intervals",
        description=f"{reps} x 800m at {_pace(paces.interval)} with {INTERVAL_REST_SECONDS}s jog recovery",
        distance_km=total,
        duration_minutes=duration_minutes(total, paces.interval),
        target_pace=rep_pace,
        intervals=intervals,
        instructions=(
            f"Warm up with {INTERVAL_WARM_UP_KM:.1f} km easy jog",
            f"Run {reps} x 800m at {_pace(paces.interval)} (about {rep_time} per rep)",
            f"Recover with {INTERVAL_REST_SECONDS}s easy jog or walk between reps",
            f"Cool down with {INTERVAL_COOL_DOWN_KM:.1f} km easy jog",
            'Complete every rep rather than chasing the exact pace',
        ),
        structure=(
            f"Warm-up ({INTERVAL_WARM_UP_KM:.1f} km) -> {reps} x 800m @ {_pace(paces.interval)} "
            f"/ {INTERVAL_REST_SECONDS}s rest -> Cool-down ({INTERVAL_COOL_DOWN_KM:.1f} km)"
        ),
    )


def generate_easy_run(week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    distance = _km(easy_distance(week, total_weeks))

    return WorkoutMetrics(
        name=f"Week {week} Easy Run",
        description=f"{distance:.1f} km easy run at {_pace(paces.easy)}",
        distance_km=distance,
        duration_minutes=duration_minutes(distance, paces.easy),
        target_pace=round(paces.easy, 1),
        instructions=(
            f"Run {distance:.1f} km at an easy, conversational pace ({_pace(paces.easy)})",
            'You should be able to hold a conversation throughout',
        ),
        structure=f"Easy run ({distance:.1f} km)",
    )


def generate_recovery_run(week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    distance = _km(recovery_distance(week, total_weeks))

    return WorkoutMetrics(
        name=f"Week {week} Recovery Run",
        description=f"{distance:.1f} km recovery jog at {_pace(paces.recovery)}",
        distance_km=distance,
        duration_minutes=duration_minutes(distance, paces.recovery),
        target_pace=round(paces.recovery, 1),
        instructions=(
            f"Jog {distance:.1f} km very easily ({_pace(paces.recovery)} or slower)",
            'Keep it short and relaxed; this run exists to loosen the legs',
        ),
        structure=f"Recovery run ({distance:.1f} km)",
    )


def generate_race_day(week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    distance = MARATHON_DISTANCE_KM

    return WorkoutMetrics(
        name='Marathon Race Day',
        description=f"Marathon ({distance} km) at goal pace {_pace(paces.marathon)}",
        distance_km=distance,
        duration_minutes=duration_minutes(distance, paces.marathon),
        target_pace=round(paces.marathon, 1),
        instructions=(
            f"Run the marathon at goal pace: {_pace(paces.marathon)}",
            'Start conservatively for the first 5 km',
            'Fuel early and stick to the plan you practised on long runs',
        ),
        structure=f"Marathon race ({distance} km at {_pace(paces.marathon)})",
    )


GENERATORS: Dict[WorkoutType, Generator] = {
    WorkoutType.EASY_RUN: generate_easy_run,
    WorkoutType.RECOVERY_RUN: generate_recovery_run,
    WorkoutType.TEMPO_RUN: generate_tempo_run,
    WorkoutType.INTERVAL_SET: generate_interval_set,
    WorkoutType.LONG_RUN: generate_long_run,
    WorkoutType.RACE_DAY: generate_race_day,
}

_missing = set(WorkoutType) - set(GENERATORS)
if _missing:
    raise ImportError(f"No generator registered for: {sorted(t.value for t in _missing)}")


def generate_workout(workout_type: WorkoutType, week: int, total_weeks: int, paces: PaceTable) -> WorkoutMetrics:
    """Dispatch to the generator for workout_type and validate its output."""
    generator = GENERATORS[workout_type]
    return _checked(workout_type, week, generator(week, total_weeks, paces))


def long_run_progression(total_weeks: int) -> List[Tuple[int, float]]:
    """(week, km) for every week; handy for previews and tests."""
    return [(week, _km(long_run_distance(week, total_weeks))) for week in range(1, total_weeks + 1)]
