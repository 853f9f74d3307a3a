#!/usr/bin/env python3
"""
Rest-day validation and conflict resolution.

A conflict is a training day that is also one of the athlete's preferred
rest days. With enforcement on, conflicts make the schedule invalid and the
analysis carries alternative day sets of the same size built from non-rest
days. With enforcement off, conflicts are reported and the schedule stands.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from constants import (
    DAY_NUMBERS,
    MAX_CONSECUTIVE_WORKOUT_DAYS,
    MIN_REST_DAYS_PER_WEEK,
    MIN_WORKOUT_DAYS,
    WEEKEND_DAYS,
    day_name,
)
from models import RestDayAnalysis


CONFLICT_PENALTY_ENFORCED = 25
CONFLICT_PENALTY_SOFT = 15
INSUFFICIENT_REST_PENALTY = 30
CONSECUTIVE_PENALTY = 10


@dataclass(frozen=True)
class RestDayResolution:
    workout_days: Tuple[int, ...]
    rest_days: Tuple[int, ...]
    changes: Tuple[str, ...]


def _previous_day(day: int) -> int:
    return 7 if day == 1 else day - 1


def _next_day(day: int) -> int:
    return 1 if day == 7 else day + 1


def consecutive_runs(days: Iterable[int]) -> List[List[int]]:
    """
    Group training days into runs of consecutive days.

    Sunday -> Monday counts as consecutive, so [6, 7, 1] is one run.
    """
    ordered = sorted(set(days))
    if not ordered:
        return []
    if len(ordered) == 7:
        return [ordered]

    runs = [[ordered[0]]]
    for day in ordered[1:]:
        if day == runs[-1][-1] + 1:
            runs[-1].append(day)
        else:
            runs.append([day])

    if len(runs) > 1 and runs[0][0] == 1 and runs[-1][-1] == 7:
        runs[0] = runs.pop() + runs[0]

    return runs


def _nearest_free_day(day: int, free: Sequence[int], taken: Iterable[int]):
    taken = set(taken)
    for distance in range(1, 7):
        for candidate in (day - distance, day + distance):
            if 1 <= candidate <= 7 and candidate in free and candidate not in taken:
                return candidate
    return None


def _replace_conflicts(workout_days: Sequence[int], conflicts: Sequence[int], free: Sequence[int]):
    chosen = [d for d in workout_days if d not in conflicts]
    for conflict in sorted(conflicts):
        replacement = _nearest_free_day(conflict, free, chosen)
        if replacement is None:
            return None
        chosen.append(replacement)
    return tuple(sorted(chosen))


def _spread_pick(free: Sequence[int], count: int) -> Tuple[int, ...]:
    """Evenly spaced pick over the free days, always including the latest one."""
    if count == 1:
        return (free[-1],)
    last = len(free) - 1
    # half-up rounding of i * last / (count - 1)
    indices = [(2 * i * last + (count - 1)) // (2 * (count - 1)) for i in range(count)]
    return tuple(free[i] for i in indices)


def suggest_alternatives(workout_days: Sequence[int], preferred_rest_days: Sequence[int]) -> Tuple[Tuple[int, ...], ...]:
    """
    Equal-length workout day sets that avoid every preferred rest day.

    Empty when fewer than max(MIN_WORKOUT_DAYS, len(workout_days)) days
    remain once rest days are removed.
    """
    rest = set(preferred_rest_days)
    free = [d for d in DAY_NUMBERS if d not in rest]
    count = len(workout_days)
    if len(free) < max(MIN_WORKOUT_DAYS, count):
        return ()

    conflicts = [d for d in workout_days if d in rest]
    suggestions: List[Tuple[int, ...]] = []

    replaced = _replace_conflicts(workout_days, conflicts, free)
    if replaced is not None:
        suggestions.append(replaced)

    spread = _spread_pick(free, count)
    if spread not in suggestions:
        suggestions.append(spread)

    return tuple(suggestions)


def validate(workout_days: Sequence[int], preferred_rest_days: Sequence[int], enforce_rest_days: bool) -> RestDayAnalysis:
    """Check training days against rest-day preferences."""
    rest = set(preferred_rest_days)
    conflicts = tuple(sorted(d for d in set(workout_days) if d in rest))
    messages: List[str] = []
    score = 100

    for day in conflicts:
        messages.append(f"Workout scheduled on preferred rest day ({day_name(day)})")
        score -= CONFLICT_PENALTY_ENFORCED if enforce_rest_days else CONFLICT_PENALTY_SOFT

    rest_count = 7 - len(set(workout_days))
    if rest_count < MIN_REST_DAYS_PER_WEEK:
        plural = '' if rest_count == 1 else 's'
        messages.append(
            f"Only {rest_count} rest day{plural} per week - minimum {MIN_REST_DAYS_PER_WEEK} recommended"
        )
        score -= INSUFFICIENT_REST_PENALTY

    for run in consecutive_runs(workout_days):
        if len(run) > MAX_CONSECUTIVE_WORKOUT_DAYS:
            messages.append(f"{len(run)} consecutive workout days starting {day_name(run[0])}")
            score -= CONSECUTIVE_PENALTY

    if not rest:
        messages.append('Consider setting preferred rest days for better recovery planning')
    elif rest_count >= 3 and len(rest) < 2:
        messages.append('You have flexibility to add more preferred rest days')

    if not any(d in rest for d in WEEKEND_DAYS) and any(d in WEEKEND_DAYS for d in workout_days):
        messages.append('Consider keeping at least one weekend day for rest and recovery')

    enforced_conflict = enforce_rest_days and bool(conflicts)
    suggestions = suggest_alternatives(workout_days, preferred_rest_days) if enforced_conflict else ()

    return RestDayAnalysis(
        is_valid=not enforced_conflict,
        conflicts=conflicts,
        suggestions=suggestions,
        messages=tuple(messages),
        quality_score=max(0, score),
    )


def _rest_day_score(day: int, workout_days: Sequence[int]) -> int:
    score = 0
    if _previous_day(day) in workout_days and _next_day(day) in workout_days:
        score += 20
    if day in WEEKEND_DAYS:
        score += 5
    if day == 1 and 7 in workout_days:
        score += 10
    return score


def suggest_optimal_rest_days(workout_days: Sequence[int], target: int = MIN_REST_DAYS_PER_WEEK) -> List[int]:
    """Pick the free days that best break up training, highest score first."""
    available = [d for d in DAY_NUMBERS if d not in workout_days]
    if len(available) <= target:
        return available

    ranked = sorted(available, key=lambda d: (-_rest_day_score(d, workout_days), d))
    return sorted(ranked[:target])


def resolve_conflicts(workout_days: Sequence[int], preferred_rest_days: Sequence[int], enforce_rest_days: bool) -> RestDayResolution:
    """
    Move each conflicting workout to the nearest free day.

    A conflict with no free day nearby is resolved by dropping that day from
    the preferred rest days instead. Nothing changes without enforcement.
    """
    days = sorted(set(workout_days))
    rest = sorted(set(preferred_rest_days))
    changes: List[str] = []

    if enforce_rest_days:
        free = [d for d in DAY_NUMBERS if d not in rest]
        for conflict in [d for d in days if d in rest]:
            replacement = _nearest_free_day(conflict, free, days)
            if replacement is not None:
                days.remove(conflict)
                days.append(replacement)
                changes.append(f"Moved workout from {day_name(conflict)} to {day_name(replacement)}")
            else:
                rest.remove(conflict)
                changes.append(f"Removed {day_name(conflict)} from preferred rest days")

    return RestDayResolution(
        workout_days=tuple(sorted(days)),
        rest_days=tuple(sorted(rest)),
        changes=tuple(changes),
    )
