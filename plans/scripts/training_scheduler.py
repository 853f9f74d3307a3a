#!/usr/bin/env python3
"""
Training scheduler: turns a TrainingPlanConfig into a dated plan.

Generation is a pure function of the configuration. The same config always
produces the same plan, nothing is cached here, and the config is never
modified.

Steps:
1. Validate the configuration
2. Work out plan length and week-one Monday
3. Derive paces from the goal time
4. Check training days against rest-day preferences
5. For every week: periodize, assign to days, generate, date
6. Verify the date invariants and attach the summary
"""

from datetime import date
from typing import List, Optional, Tuple

from constants import DEFAULT_PLAN_WEEKS, day_name
from config_validator import ensure_valid
from logger import get_logger
from models import (
    PlanSummary,
    ScheduledTrainingPlan,
    ScheduledWorkout,
    TrainingPlanConfig,
)
from pace_calculator import PaceTable, calculate_training_paces
from periodization import phase_boundaries, plan_week
from plan_dates import (
    check_plan_dates,
    race_week_days,
    scheduled_date,
    start_date_from_race,
    total_weeks_between,
    week_one_start,
)
from plan_errors import ConfigValidationError, ConstraintViolationError
from rest_days import validate as validate_rest_days
from timeline import assess_timeline
from workout_assignment import assign, hard_day_conflicts
from workout_generators import generate_workout


class TrainingScheduler:
    """Builds one ScheduledTrainingPlan from one configuration."""

    def __init__(self, config: TrainingPlanConfig):
        self.config = config
        self.log = get_logger()

    def plan_span(self) -> Tuple[date, int]:
        """(start_date, total_weeks) for the configuration."""
        if self.config.start_date is not None:
            return self.config.start_date, total_weeks_between(self.config.start_date, self.config.race_date)
        return start_date_from_race(self.config.race_date, DEFAULT_PLAN_WEEKS), DEFAULT_PLAN_WEEKS

    def training_days(self) -> Tuple[Tuple[int, ...], List[str]]:
        """
        Weekly training days after applying rest-day preferences.

        Raises:
            ConstraintViolationError: If enforced rest days leave no valid schedule
        """
        prefs = self.config.preferences
        days = tuple(sorted(self.config.workout_days_of_week))
        analysis = validate_rest_days(days, prefs.preferred_rest_days, prefs.enforce_rest_days)
        notes: List[str] = []

        if not analysis.is_valid:
            if not analysis.suggestions:
                raise ConstraintViolationError(
                    f"Workout days {list(days)} conflict with enforced rest days "
                    f"{sorted(prefs.preferred_rest_days)} and no alternative exists",
                    list(analysis.messages),
                )
            resolved = analysis.suggestions[0]
            self.log.warning(
                "Moved workouts off enforced rest days",
                original=list(days),
                resolved=list(resolved),
            )
            notes.append(f"Training days moved from {list(days)} to {list(resolved)} to respect rest days")
            return resolved, notes

        for day in analysis.conflicts:
            self.log.warning("Workout scheduled on preferred rest day", day=day_name(day))

        return days, notes

    def race_week_schedule(self, days: Tuple[int, ...]) -> Tuple[Tuple[int, ...], List[str]]:
        """Race-week days, plus a note when an early-week race leaves fewer runs."""
        prefs = self.config.preferences
        race_days = race_week_days(days, self.config.race_date,
                                   prefs.preferred_rest_days, prefs.enforce_rest_days)
        if len(race_days) == len(days):
            return race_days, []

        race_weekday = day_name(self.config.race_date.isoweekday())
        self.log.warning("Race week shortened", race_day=race_weekday, runs=len(race_days))
        return race_days, [
            f"Race on {race_weekday} leaves room for {len(race_days) - 1} of "
            f"{len(days) - 1} race-week runs before it"
        ]

    def _week_workouts(self, week: int, total_weeks: int, days: Tuple[int, ...],
                       first_monday: date, paces: PaceTable) -> List[ScheduledWorkout]:
        assignment = assign(plan_week(week, total_weeks, len(days)), days)
        for first, second in hard_day_conflicts(assignment):
            self.log.debug("Hard sessions on adjacent days", week=week, days=f"{first},{second}")

        phase = phase_boundaries(total_weeks).phase_for_week(week)
        workouts = []
        for day, workout_type in assignment.items():
            metrics = generate_workout(workout_type, week, total_weeks, paces)
            workouts.append(ScheduledWorkout(
                week=week,
                day_of_week=day,
                type=workout_type,
                name=metrics.name,
                description=metrics.description,
                distance_km=metrics.distance_km,
                duration_minutes=metrics.duration_minutes,
                target_pace=metrics.target_pace,
                scheduled_date=scheduled_date(first_monday, week, day),
                phase=phase,
                intervals=metrics.intervals,
                instructions=metrics.instructions,
                structure=metrics.structure,
            ))
        return workouts

    def generate_scheduled_plan(self) -> ScheduledTrainingPlan:
        """
        Generate the full plan.

        Raises:
            ConfigValidationError: Malformed configuration
            ConstraintViolationError: Days cannot satisfy scheduling constraints
            ComputationError: A generator produced an invalid workout
        """
        validation = ensure_valid(self.config)
        with self.log.bind(race_date=self.config.race_date.isoformat()):
            return self._build_plan(validation.warnings)

    def _build_plan(self, validation_warnings: List[str]) -> ScheduledTrainingPlan:
        start, total_weeks = self.plan_span()

        timeline = assess_timeline(total_weeks, total_weeks * len(self.config.workout_days_of_week))
        if not timeline.is_viable:
            raise ConfigValidationError(timeline.recommended_action, list(timeline.warnings))

        paces = calculate_training_paces(self.config.goal_finish_time)
        days, rest_notes = self.training_days()
        first_monday = week_one_start(self.config.race_date, total_weeks)

        self.log.debug(
            "Plan span resolved",
            start=start.isoformat(),
            week_one=first_monday.isoformat(),
            weeks=total_weeks,
            strategy=timeline.strategy,
        )

        race_days, race_notes = self.race_week_schedule(days)

        workouts: List[ScheduledWorkout] = []
        for week in range(1, total_weeks + 1):
            week_days = race_days if week == total_weeks else days
            workouts.extend(self._week_workouts(week, total_weeks, week_days, first_monday, paces))

        plan = ScheduledTrainingPlan(
            workouts=tuple(workouts),
            start_date=start,
            end_date=self.config.race_date,
            total_weeks=total_weeks,
            week_one_start=first_monday,
            summary=PlanSummary.from_workouts(workouts),
            warnings=tuple(list(timeline.warnings) + rest_notes + race_notes + validation_warnings),
        )
        check_plan_dates(plan, self.config.race_date)

        self.log.info(
            "Generated training plan",
            weeks=total_weeks,
            workouts=plan.summary.total_workouts,
            distance_km=plan.summary.total_distance_km,
        )
        return plan


def generate_training_plan(config: TrainingPlanConfig) -> ScheduledTrainingPlan:
    """Generate a dated marathon training plan for config."""
    return TrainingScheduler(config).generate_scheduled_plan()


def workouts_for_week(plan: ScheduledTrainingPlan, week: int) -> List[ScheduledWorkout]:
    return plan.workouts_for_week(week)


def workouts_in_range(plan: ScheduledTrainingPlan, start: date, end: Optional[date] = None) -> List[ScheduledWorkout]:
    """Workouts dated start..end inclusive; end defaults to start."""
    return plan.workouts_in_range(start, end or start)
