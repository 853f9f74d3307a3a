#!/usr/bin/env python3
"""
Calculate plan dates working backwards from race date.

Plan Dating Standards:
- Race week = final week of plan
- Week 1 = first training week (furthest from race)
- Each week runs Monday-Sunday, so day_of_week is the ISO weekday
- Week 1 Monday is (total_weeks - 1) weeks before the race week Monday
- The race itself is always the last workout of the plan
"""

from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from constants import PLAN_WEEKS_MAX, PLAN_WEEKS_MIN
from models import ScheduledTrainingPlan, WorkoutType
from plan_errors import ConfigValidationError, ConstraintViolationError


def start_date_from_race(race_date: date, total_weeks: int) -> date:
    """Nominal plan start: exactly total_weeks weeks before the race."""
    return race_date - timedelta(days=7 * total_weeks)


def total_weeks_between(start_date: date, race_date: date) -> int:
    """
    Whole weeks from start_date to race_date.

    Raises:
        ConfigValidationError: If the span is outside PLAN_WEEKS_MIN..PLAN_WEEKS_MAX
    """
    if start_date >= race_date:
        raise ConfigValidationError(
            f"Start date {start_date.isoformat()} must be before race date {race_date.isoformat()}"
        )

    weeks = (race_date - start_date).days // 7
    if weeks < PLAN_WEEKS_MIN:
        raise ConfigValidationError(
            f"Only {weeks} weeks between {start_date.isoformat()} and {race_date.isoformat()}; "
            f"plan must be at least {PLAN_WEEKS_MIN} weeks"
        )
    if weeks > PLAN_WEEKS_MAX:
        raise ConfigValidationError(f"Plan cannot exceed {PLAN_WEEKS_MAX} weeks, got {weeks}")
    return weeks


def training_week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.isoweekday() - 1)


def week_one_start(race_date: date, total_weeks: int) -> date:
    return training_week_start(race_date) - timedelta(weeks=total_weeks - 1)


def scheduled_date(first_monday: date, week: int, day_of_week: int) -> date:
    return first_monday + timedelta(days=(week - 1) * 7 + (day_of_week - 1))


def race_week_days(workout_days: Sequence[int], race_date: date,
                   preferred_rest_days: Sequence[int] = (),
                   enforce_rest_days: bool = False) -> Tuple[int, ...]:
    """
    Training days for the race week.

    The race weekday is the final day. The rest are the latest days before it:
    selected training days first, then free non-rest days, then (only when
    rest days are not enforced) preferred rest days. An early-week race keeps
    only the days that fit before it, so the result may be shorter than
    workout_days (a Monday race is the race alone).
    """
    race_day = race_date.isoweekday()
    needed = len(workout_days) - 1
    earlier = list(range(race_day - 1, 0, -1))

    selected = [d for d in earlier if d in workout_days]
    free = [d for d in earlier if d not in workout_days and d not in preferred_rest_days]
    pool = selected + free
    if not enforce_rest_days:
        pool += [d for d in earlier if d not in workout_days and d in preferred_rest_days]

    return tuple(sorted(pool[:needed])) + (race_day,)


def validate_plan_dates(plan: ScheduledTrainingPlan, race_date: date) -> List[str]:
    """
    Validate plan dates for sanity.

    Returns list of errors (empty if valid).
    """
    errors = []
    workouts = plan.workouts

    if not workouts:
        return ["CRITICAL: Plan contains no workouts"]

    # 1. Final workout must be the race, on the race date
    final = workouts[-1]
    if final.type is not WorkoutType.RACE_DAY:
        errors.append(f"CRITICAL: Final workout is {final.type.value}, expected RaceDay")
    if final.scheduled_date != race_date:
        errors.append(
            f"CRITICAL: Race day scheduled {final.scheduled_date.isoformat()}, race is {race_date.isoformat()}"
        )

    # 2. Exactly one race
    race_count = sum(1 for w in workouts if w.is_race_day)
    if race_count != 1:
        errors.append(f"CRITICAL: Expected one RaceDay, found {race_count}")

    # 3. Ids unique
    ids = [w.id for w in workouts]
    if len(set(ids)) != len(ids):
        errors.append("CRITICAL: Duplicate workout ids")

    # 4. Dates strictly ascending and matching the weekday
    for prev, curr in zip(workouts, workouts[1:]):
        if curr.scheduled_date <= prev.scheduled_date:
            errors.append(f"CRITICAL: Workout {curr.id} is not after {prev.id}")
    for workout in workouts:
        if workout.scheduled_date.isoweekday() != workout.day_of_week:
            errors.append(f"CRITICAL: Workout {workout.id} dated on the wrong weekday")

    # 5. Every week present
    weeks = sorted({w.week for w in workouts})
    if weeks != list(range(1, plan.total_weeks + 1)):
        errors.append(f"CRITICAL: Weeks {weeks} do not cover 1..{plan.total_weeks}")

    # 6. Race inside race week
    race_monday = scheduled_date(plan.week_one_start, plan.total_weeks, 1)
    if not race_monday <= race_date <= race_monday + timedelta(days=6):
        errors.append(f"CRITICAL: Race date {race_date.isoformat()} not in race week")

    return errors


def check_plan_dates(plan: ScheduledTrainingPlan, race_date: date):
    """Raise if any date invariant fails."""
    errors = validate_plan_dates(plan, race_date)
    if errors:
        raise ConstraintViolationError(f"Plan failed {len(errors)} date checks", errors)


def format_week_calendar(plan: ScheduledTrainingPlan, race_date: Optional[date] = None) -> str:
    """Format week dates for display."""
    race_date = race_date or plan.end_date
    lines = []
    lines.append("Week  | Phase  | Start (Mon) | End (Sun)   | Runs | km     | Notes")
    lines.append("------|--------|-------------|-------------|------|--------|------")

    totals = plan.weekly_distance_km()
    for week in range(1, plan.total_weeks + 1):
        workouts = plan.workouts_for_week(week)
        monday = scheduled_date(plan.week_one_start, week, 1)
        sunday = monday + timedelta(days=6)
        phase = workouts[0].phase if workouts else ''
        notes = f"RACE WEEK - Race on {race_date.isoformat()}" if week == plan.total_weeks else ""

        lines.append(
            f"W{week:02d}   | {phase:<6} | {monday.isoformat()}  | {sunday.isoformat()}  | "
            f"{len(workouts):<4} | {totals.get(week, 0.0):<6.1f} | {notes}"
        )

    return "\n".join(lines)
