#!/usr/bin/env python3
"""
Periodization: which workout types happen in each week of a plan.

Phase layout for a plan of T weeks:

    base   weeks 1 .. ceil(0.35 T)
    build  next ceil(0.40 T) weeks
    peak   next ceil(0.15 T) weeks
    taper  remaining weeks before race week
    race   week T

Boundaries are clamped so that week T is always the race week and, for plans
of MIN_WEEKS_FOR_TAPER weeks or more, at least one taper week survives the
rounding. The planner is a pure function of (week, total_weeks, days).
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from constants import (
    BASE_PHASE_FRACTION,
    BUILD_PHASE_FRACTION,
    MAX_WORKOUT_DAYS,
    MIN_WEEKS_FOR_TAPER,
    MIN_WORKOUT_DAYS,
    PEAK_PHASE_FRACTION,
    PLAN_WEEKS_MIN,
)
from models import WorkoutType
from plan_errors import ConfigValidationError, ConstraintViolationError


@dataclass(frozen=True)
class PhaseBoundaries:
    """Last week of each phase. An empty phase ends where the previous one did."""
    total_weeks: int
    base_end: int
    build_end: int
    peak_end: int
    taper_end: int

    def phase_for_week(self, week: int) -> str:
        if week < 1 or week > self.total_weeks:
            raise ConfigValidationError(f"Week {week} outside plan of {self.total_weeks} weeks")
        if week == self.total_weeks:
            return 'race'
        if week <= self.base_end:
            return 'base'
        if week <= self.build_end:
            return 'build'
        if week <= self.peak_end:
            return 'peak'
        return 'taper'

    def weeks_in_phase(self, phase: str) -> List[int]:
        return [w for w in range(1, self.total_weeks + 1) if self.phase_for_week(w) == phase]

    def to_dict(self) -> Dict[str, List[int]]:
        return {phase: self.weeks_in_phase(phase) for phase in ('base', 'build', 'peak', 'taper', 'race')}


def phase_boundaries(total_weeks: int) -> PhaseBoundaries:
    """Compute phase boundaries once for a plan length."""
    if total_weeks < PLAN_WEEKS_MIN:
        raise ConfigValidationError(
            f"Plan must be at least {PLAN_WEEKS_MIN} weeks, got {total_weeks}"
        )

    reserve = 1 if total_weeks >= MIN_WEEKS_FOR_TAPER else 0
    limit = total_weeks - 1 - reserve

    base_end = min(math.ceil(total_weeks * BASE_PHASE_FRACTION), limit)
    build_end = min(base_end + math.ceil(total_weeks * BUILD_PHASE_FRACTION), limit)
    peak_end = min(build_end + math.ceil(total_weeks * PEAK_PHASE_FRACTION), limit)

    return PhaseBoundaries(
        total_weeks=total_weeks,
        base_end=base_end,
        build_end=build_end,
        peak_end=peak_end,
        taper_end=total_weeks - 1,
    )


def phase_for_week(week: int, total_weeks: int) -> str:
    return phase_boundaries(total_weeks).phase_for_week(week)


def hard_session_for_week(week: int) -> WorkoutType:
    """Quality session alternates by week parity: tempo on odd, intervals on even."""
    return WorkoutType.TEMPO_RUN if week % 2 == 1 else WorkoutType.INTERVAL_SET


def _fill(core: List[WorkoutType], fillers: Tuple[WorkoutType, ...], workout_days: int) -> Tuple[WorkoutType, ...]:
    types = list(core)
    i = 0
    while len(types) < workout_days:
        types.append(fillers[i % len(fillers)])
        i += 1
    return tuple(types)


def plan_week(week: int, total_weeks: int, workout_days: int) -> Tuple[WorkoutType, ...]:
    """
    Ordered workout types for one week, hardest session first.

    The tuple length always equals workout_days. Race week may run short
    (down to the race alone) when the race falls early in the week.
    """
    phase = phase_for_week(week, total_weeks)
    lowest = 1 if phase == 'race' else MIN_WORKOUT_DAYS
    if not lowest <= workout_days <= MAX_WORKOUT_DAYS:
        raise ConstraintViolationError(
            f"Cannot plan {workout_days} workout days; expected {lowest}-{MAX_WORKOUT_DAYS}"
        )


    if phase == 'base':
        types = _fill(
            [WorkoutType.LONG_RUN],
            (WorkoutType.EASY_RUN, WorkoutType.RECOVERY_RUN),
            workout_days,
        )
    elif phase == 'build':
        types = _fill(
            [WorkoutType.LONG_RUN, hard_session_for_week(week)],
            (WorkoutType.EASY_RUN,),
            workout_days,
        )
    elif phase == 'peak':
        types = _fill(
            [WorkoutType.LONG_RUN, hard_session_for_week(week)],
            (WorkoutType.RECOVERY_RUN,),
            workout_days,
        )
    elif phase == 'taper':
        types = _fill(
            [WorkoutType.LONG_RUN, hard_session_for_week(week)],
            (WorkoutType.EASY_RUN,),
            workout_days,
        )
    else:
        types = _fill([WorkoutType.RACE_DAY], (WorkoutType.EASY_RUN,), workout_days)

    return types


def plan_all_weeks(total_weeks: int, workout_days: int) -> Dict[int, Tuple[WorkoutType, ...]]:
    return {week: plan_week(week, total_weeks, workout_days) for week in range(1, total_weeks + 1)}
