#!/usr/bin/env python3
"""
Plan configuration parsing and validation.

Validates the whole request BEFORE generation starts to fail fast and
provide actionable error messages. Every problem found is reported at once
through ConfigValidationError.errors.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from constants import (
    DAY_NUMBER_TO_ABBREV,
    DAY_NUMBER_TO_NAME,
    DAY_NUMBERS,
    MAX_WORKOUT_DAYS,
    MIN_WORKOUT_DAYS,
    PLAN_WEEKS_MAX,
    PLAN_WEEKS_MIN,
)
from models import DistanceUnit, PaceFormat, TrainingPlanConfig, TrainingPreferences
from pace_calculator import parse_goal_time
from plan_errors import ConfigValidationError


# Accepted spellings for each config key
KEY_ALIASES: Dict[str, List[str]] = {
    'race_date': ['race_date', 'raceDate'],
    'start_date': ['start_date', 'startDate'],
    'goal_finish_time': ['goal_finish_time', 'goalFinishTime', 'goal_time'],
    'workout_days_of_week': ['workout_days_of_week', 'workoutDaysOfWeek', 'workout_days'],
    'preferences': ['preferences', 'trainingPreferences', 'training_preferences'],
    'distance_unit': ['distance_unit', 'distanceUnit'],
    'pace_format': ['pace_format', 'paceFormat'],
    'preferred_rest_days': ['preferred_rest_days', 'preferredRestDays', 'rest_days'],
    'enforce_rest_days': ['enforce_rest_days', 'enforceRestDays'],
}

_DAY_LOOKUP: Dict[str, int] = {}
for _num in DAY_NUMBERS:
    _DAY_LOOKUP[DAY_NUMBER_TO_NAME[_num].lower()] = _num
    _DAY_LOOKUP[DAY_NUMBER_TO_ABBREV[_num].lower()] = _num


@dataclass
class ValidationResult:
    """Result of validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, msg: str):
        self.errors.append(msg)
        self.is_valid = False

    def add_warning(self, msg: str):
        self.warnings.append(msg)

    def merge(self, other: 'ValidationResult'):
        """Merge another result into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.is_valid:
            self.is_valid = False


def _lookup(raw: Dict, key: str, default: Any = None) -> Any:
    for alias in KEY_ALIASES[key]:
        if alias in raw:
            return raw[alias]
    return default


def _parse_date(value: Any, label: str, result: ValidationResult) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip()[:10], '%Y-%m-%d').date()
        except ValueError:
            pass
    result.add_error(f"Invalid {label}: '{value}' (use YYYY-MM-DD)")
    return None


def _parse_day(value: Any, label: str, result: ValidationResult) -> Optional[int]:
    if isinstance(value, bool):
        result.add_error(f"Invalid day in {label}: {value!r}")
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return int(text)
        if text in _DAY_LOOKUP:
            return _DAY_LOOKUP[text]
    result.add_error(f"Invalid day in {label}: {value!r} (use 1-7 or a day name)")
    return None


def _parse_days(value: Any, label: str, result: ValidationResult) -> List[int]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        result.add_error(f"{label} must be a list of days, got {type(value).__name__}")
        return []
    days = []
    for item in value:
        day = _parse_day(item, label, result)
        if day is not None:
            days.append(day)
    return days


def _parse_enum(enum_cls, value: Any, label: str, result: ValidationResult):
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        choices = ', '.join(m.value for m in enum_cls)
        result.add_error(f"Invalid {label}: '{value}' (expected one of {choices})")
        return None


def _parse_bool(value: Any, label: str, result: ValidationResult) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false', 'yes', 'no'):
        return value.strip().lower() in ('true', 'yes')
    result.add_error(f"{label} must be true or false, got {value!r}")
    return False


def parse_flag(value: Any, label: str) -> bool:
    """
    Read a true/false request field ("false" stays False).

    Raises:
        ConfigValidationError: If value is not a boolean or boolean word
    """
    result = ValidationResult(is_valid=True)
    flag = _parse_bool(value, label, result)
    if not result.is_valid:
        raise ConfigValidationError(result.errors[0], result.errors)
    return flag


def validate_config(config: TrainingPlanConfig) -> ValidationResult:
    """Validate a TrainingPlanConfig structure and values."""
    result = ValidationResult(is_valid=True)

    try:
        parse_goal_time(config.goal_finish_time)
    except ConfigValidationError as e:
        result.add_error(e.message)

    days = list(config.workout_days_of_week)
    if len(set(days)) != len(days):
        result.add_error(f"Duplicate workout days: {days}")
    out_of_range = [d for d in days if d not in DAY_NUMBERS]
    if out_of_range:
        result.add_error(f"Workout days out of range 1-7: {out_of_range}")
    if not MIN_WORKOUT_DAYS <= len(set(days)) <= MAX_WORKOUT_DAYS:
        result.add_error(
            f"Choose {MIN_WORKOUT_DAYS}-{MAX_WORKOUT_DAYS} workout days per week, got {len(set(days))}"
        )

    rest_days = list(config.preferences.preferred_rest_days)
    bad_rest = [d for d in rest_days if d not in DAY_NUMBERS]
    if bad_rest:
        result.add_error(f"Preferred rest days out of range 1-7: {bad_rest}")
    if len(set(rest_days)) != len(rest_days):
        result.add_error(f"Duplicate preferred rest days: {rest_days}")

    if not isinstance(config.race_date, date):
        result.add_error(f"race_date must be a date, got {type(config.race_date).__name__}")
    elif config.start_date is not None:
        if config.start_date >= config.race_date:
            result.add_error(
                f"Start date {config.start_date.isoformat()} must be before race date "
                f"{config.race_date.isoformat()}"
            )
        else:
            weeks = (config.race_date - config.start_date).days // 7
            if weeks < PLAN_WEEKS_MIN:
                result.add_error(f"Plan must be at least {PLAN_WEEKS_MIN} weeks, got {weeks}")
            elif weeks > PLAN_WEEKS_MAX:
                result.add_error(f"Plan cannot exceed {PLAN_WEEKS_MAX} weeks, got {weeks}")

    conflicts = sorted(set(days) & set(rest_days))
    if conflicts and not config.preferences.enforce_rest_days:
        result.add_warning(f"Workout days {conflicts} are also preferred rest days")

    return result


def ensure_valid(config: TrainingPlanConfig) -> ValidationResult:
    """
    Validate and raise on the first failing check set.

    Raises:
        ConfigValidationError: With every error message collected
    """
    result = validate_config(config)
    if not result.is_valid:
        raise ConfigValidationError(
            f"Invalid plan configuration ({len(result.errors)} errors)", result.errors
        )
    return result


def parse_config(raw: Dict, defaults: Optional[Dict] = None) -> TrainingPlanConfig:
    """
    Build a TrainingPlanConfig from a JSON/YAML mapping.

    Keys may be snake_case or camelCase. Preference keys are read from a
    nested "preferences" mapping or from the top level. defaults supplies
    distance_unit/pace_format when the request leaves them out.

    Raises:
        ConfigValidationError: If the mapping is malformed
    """
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"Plan configuration must be a mapping, got {type(raw).__name__}")

    defaults = defaults or {}
    result = ValidationResult(is_valid=True)

    race_date = _parse_date(_lookup(raw, 'race_date'), 'race_date', result)
    if race_date is None and _lookup(raw, 'race_date') is None:
        result.add_error("Missing required field: race_date")
    start_date = _parse_date(_lookup(raw, 'start_date'), 'start_date', result)

    goal = _lookup(raw, 'goal_finish_time')
    if goal is None:
        result.add_error("Missing required field: goal_finish_time")
    elif not isinstance(goal, str):
        result.add_error(f"goal_finish_time must be a string like '3:30:00', got {goal!r}")

    raw_days = _lookup(raw, 'workout_days_of_week')
    if raw_days is None:
        result.add_error("Missing required field: workout_days_of_week")
    days = _parse_days(raw_days, 'workout_days_of_week', result)

    prefs_raw = _lookup(raw, 'preferences') or {}
    if not isinstance(prefs_raw, dict):
        result.add_error(f"preferences must be a mapping, got {type(prefs_raw).__name__}")
        prefs_raw = {}

    def pref(key: str, fallback: Any = None) -> Any:
        value = _lookup(prefs_raw, key)
        return _lookup(raw, key, fallback) if value is None else value

    distance_unit = _parse_enum(
        DistanceUnit, pref('distance_unit', defaults.get('distance_unit', 'KILOMETERS')), 'distance_unit', result
    )
    pace_format = _parse_enum(
        PaceFormat, pref('pace_format', defaults.get('pace_format', 'MIN_PER_KM')), 'pace_format', result
    )
    rest_days = _parse_days(pref('preferred_rest_days', []), 'preferred_rest_days', result)
    enforce = _parse_bool(pref('enforce_rest_days', False), 'enforce_rest_days', result)

    if not result.is_valid:
        raise ConfigValidationError(
            f"Invalid plan configuration ({len(result.errors)} errors)", result.errors
        )

    config = TrainingPlanConfig(
        race_date=race_date,
        goal_finish_time=goal.strip(),
        workout_days_of_week=tuple(days),
        preferences=TrainingPreferences(
            distance_unit=distance_unit,
            pace_format=pace_format,
            preferred_rest_days=tuple(rest_days),
            enforce_rest_days=enforce,
        ),
        start_date=start_date,
    )
    ensure_valid(config)
    return config
