#!/usr/bin/env python3
"""
Place a week's workout types onto the athlete's training days.

Rules, applied in order:
1. The hardest session (RaceDay, else LongRun, else the first quality
   session) goes on the latest training day of the week.
2. Every other hard session goes on the free day furthest from the hard
   days already placed, so back-to-back hard days only happen when the
   selected days leave no alternative. Sunday and Monday are adjacent.
3. Easy and recovery runs fill the remaining days in ascending order.
"""

from typing import Dict, List, Sequence, Tuple

from models import HARD_WORKOUT_TYPES, WorkoutType
from plan_errors import ConstraintViolationError


def day_distance(a: int, b: int) -> int:
    """Days between two weekdays on the weekly cycle (Sunday next to Monday)."""
    gap = abs(a - b) % 7
    return min(gap, 7 - gap)


def _hardest_index(types: Sequence[WorkoutType]) -> int:
    for preferred in (WorkoutType.RACE_DAY, WorkoutType.LONG_RUN):
        if preferred in types:
            return types.index(preferred)
    for i, workout_type in enumerate(types):
        if workout_type in HARD_WORKOUT_TYPES:
            return i
    return -1


def assign(week_workout_types: Sequence[WorkoutType], workout_days: Sequence[int]) -> Dict[int, WorkoutType]:
    """
    Map each training day to a workout type.

    Raises:
        ConstraintViolationError: If the type list and day list differ in length
    """
    days = sorted(set(workout_days))
    types = list(week_workout_types)

    if len(types) != len(days) or len(days) != len(workout_days):
        raise ConstraintViolationError(
            f"Cannot place {len(types)} workouts on {len(workout_days)} training days"
        )

    assignment: Dict[int, WorkoutType] = {}
    hard_days: List[int] = []

    hardest = _hardest_index(types)
    if hardest >= 0:
        day = days[-1]
        assignment[day] = types[hardest]
        hard_days.append(day)

    for i, workout_type in enumerate(types):
        if i == hardest or workout_type not in HARD_WORKOUT_TYPES:
            continue
        free = [d for d in days if d not in assignment]
        # furthest from placed hard days wins, earliest day on ties
        day = max(free, key=lambda d: (min(day_distance(d, h) for h in hard_days), -d))
        assignment[day] = workout_type
        hard_days.append(day)

    easy_types = iter(t for t in types if t not in HARD_WORKOUT_TYPES)
    for day in days:
        if day not in assignment:
            assignment[day] = next(easy_types)

    return {day: assignment[day] for day in days}


def hard_day_conflicts(assignment: Dict[int, WorkoutType]) -> List[Tuple[int, int]]:
    """Pairs of hard sessions that ended up on adjacent days."""
    hard = sorted(day for day, t in assignment.items() if t in HARD_WORKOUT_TYPES)
    pairs = []
    for i, first in enumerate(hard):
        for second in hard[i + 1:]:
            if day_distance(first, second) == 1:
                pairs.append((first, second))
    return pairs
