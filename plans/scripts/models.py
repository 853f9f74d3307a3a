#!/usr/bin/env python3
"""
Data model for training plan generation.

Every record is a frozen dataclass holding tuples, so a generated plan
cannot be mutated after construction. Distances are kilometres, paces are
seconds per kilometre, durations are minutes.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple


class WorkoutType(Enum):
    """Closed set of workout kinds; dispatch tables must cover every member."""
    EASY_RUN = 'EasyRun'
    TEMPO_RUN = 'TempoRun'
    INTERVAL_SET = 'IntervalSet'
    LONG_RUN = 'LongRun'
    RECOVERY_RUN = 'RecoveryRun'
    RACE_DAY = 'RaceDay'


# Sessions that must not land on back-to-back days
HARD_WORKOUT_TYPES = frozenset({
    WorkoutType.TEMPO_RUN,
    WorkoutType.INTERVAL_SET,
    WorkoutType.LONG_RUN,
    WorkoutType.RACE_DAY,
})

EASY_WORKOUT_TYPES = frozenset({
    WorkoutType.EASY_RUN,
    WorkoutType.RECOVERY_RUN,
})


class DistanceUnit(Enum):
    MILES = 'MILES'
    KILOMETERS = 'KILOMETERS'


class PaceFormat(Enum):
    MIN_PER_KM = 'MIN_PER_KM'
    MIN_PER_MILE = 'MIN_PER_MILE'


@dataclass(frozen=True)
class TrainingPreferences:
    distance_unit: DistanceUnit = DistanceUnit.KILOMETERS
    pace_format: PaceFormat = PaceFormat.MIN_PER_KM
    preferred_rest_days: Tuple[int, ...] = ()
    enforce_rest_days: bool = False

    def to_dict(self) -> Dict:
        return {
            'distance_unit': self.distance_unit.value,
            'pace_format': self.pace_format.value,
            'preferred_rest_days': sorted(self.preferred_rest_days),
            'enforce_rest_days': self.enforce_rest_days,
        }


@dataclass(frozen=True)
class TrainingPlanConfig:
    """Caller-owned plan request. The engine never modifies it."""
    race_date: date
    goal_finish_time: str
    workout_days_of_week: Tuple[int, ...]
    preferences: TrainingPreferences = field(default_factory=TrainingPreferences)
    start_date: Optional[date] = None

    def to_dict(self) -> Dict:
        """Canonical JSON-able form (input order of days is not significant)."""
        return {
            'race_date': self.race_date.isoformat(),
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'goal_finish_time': self.goal_finish_time,
            'workout_days_of_week': sorted(self.workout_days_of_week),
            'preferences': self.preferences.to_dict(),
        }


@dataclass(frozen=True)
class IntervalRep:
    distance_km: float
    pace: float
    rest_seconds: int

    def to_dict(self) -> Dict:
        return {
            'distance_km': self.distance_km,
            'pace': self.pace,
            'rest_seconds': self.rest_seconds,
        }


@dataclass(frozen=True)
class WorkoutMetrics:
    """What a generator computes for one workout type in one week."""
    name: str
    description: str
    distance_km: float
    duration_minutes: int
    target_pace: float
    intervals: Tuple[IntervalRep, ...] = ()
    instructions: Tuple[str, ...] = ()
    structure: str = ''


@dataclass(frozen=True)
class ScheduledWorkout:
    week: int
    day_of_week: int
    type: WorkoutType
    name: str
    description: str
    distance_km: float
    duration_minutes: int
    target_pace: float
    scheduled_date: date
    phase: str
    intervals: Tuple[IntervalRep, ...] = ()
    instructions: Tuple[str, ...] = ()
    structure: str = ''

    @property
    def id(self) -> str:
        """Correlation key used by persistence layers to join completions."""
        return f"{self.week}-{self.day_of_week}"

    @property
    def is_race_day(self) -> bool:
        return self.type is WorkoutType.RACE_DAY

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'week': self.week,
            'day_of_week': self.day_of_week,
            'type': self.type.value,
            'name': self.name,
            'description': self.description,
            'distance_km': self.distance_km,
            'duration_minutes': self.duration_minutes,
            'target_pace': self.target_pace,
            'intervals': [rep.to_dict() for rep in self.intervals],
            'scheduled_date': self.scheduled_date.isoformat(),
            'phase': self.phase,
            'is_race_day': self.is_race_day,
            'instructions': list(self.instructions),
            'structure': self.structure,
        }


@dataclass(frozen=True)
class PlanSummary:
    total_workouts: int
    total_distance_km: float
    counts: Tuple[Tuple[str, int], ...]

    def count(self, workout_type: WorkoutType) -> int:
        return dict(self.counts).get(workout_type.value, 0)

    @classmethod
    def from_workouts(cls, workouts) -> 'PlanSummary':
        counts = {workout_type.value: 0 for workout_type in WorkoutType}
        total = 0.0
        for workout in workouts:
            counts[workout.type.value] += 1
            total += workout.distance_km
        return cls(
            total_workouts=len(workouts),
            total_distance_km=round(total, 2),
            counts=tuple(counts.items()),
        )

    def to_dict(self) -> Dict:
        return {
            'total_workouts': self.total_workouts,
            'total_distance_km': self.total_distance_km,
            'counts': dict(self.counts),
        }


@dataclass(frozen=True)
class ScheduledTrainingPlan:
    workouts: Tuple[ScheduledWorkout, ...]
    start_date: date
    end_date: date
    total_weeks: int
    week_one_start: date
    summary: PlanSummary
    warnings: Tuple[str, ...] = ()

    def workouts_for_week(self, week: int) -> List[ScheduledWorkout]:
        return [w for w in self.workouts if w.week == week]

    def workouts_in_range(self, start: date, end: date) -> List[ScheduledWorkout]:
        """Workouts dated within [start, end], inclusive."""
        return [w for w in self.workouts if start <= w.scheduled_date <= end]

    def weekly_distance_km(self) -> Dict[int, float]:
        totals: Dict[int, float] = {}
        for workout in self.workouts:
            totals[workout.week] = totals.get(workout.week, 0.0) + workout.distance_km
        return {week: round(km, 2) for week, km in totals.items()}

    def get_workout(self, workout_id: str) -> Optional[ScheduledWorkout]:
        for workout in self.workouts:
            if workout.id == workout_id:
                return workout
        return None

    def to_dict(self) -> Dict:
        return {
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'week_one_start': self.week_one_start.isoformat(),
            'total_weeks': self.total_weeks,
            'summary': self.summary.to_dict(),
            'warnings': list(self.warnings),
            'workouts': [w.to_dict() for w in self.workouts],
        }


@dataclass(frozen=True)
class RestDayAnalysis:
    """Result of checking training days against rest-day preferences."""
    is_valid: bool
    conflicts: Tuple[int, ...] = ()
    suggestions: Tuple[Tuple[int, ...], ...] = ()
    messages: Tuple[str, ...] = ()
    quality_score: int = 100

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'conflicts': list(self.conflicts),
            'suggestions': [list(s) for s in self.suggestions],
            'messages': list(self.messages),
            'quality_score': self.quality_score,
        }
