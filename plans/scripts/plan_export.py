#!/usr/bin/env python3
"""
Plan export: flat workout records and atomic YAML/JSON output.

Records use the "{week}-{day}" id as the correlation key for persistence
layers, ISO dates, kilometres and seconds per kilometre. When preferences
are given, each record also carries display strings in the athlete's
chosen units.

Files are written completely or not at all.
"""

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from models import ScheduledTrainingPlan, TrainingPreferences
from pace_calculator import format_distance_for_user, format_pace_for_user


RECORD_FIELDS = (
    'id',
    'week',
    'day_of_week',
    'type',
    'name',
    'description',
    'distance_km',
    'duration_minutes',
    'target_pace',
    'intervals',
    'scheduled_date',
    'phase',
    'is_race_day',
    'structure',
)


@contextmanager
def atomic_write(target_path: Path, mode: str = 'w'):
    """
    Write to a temp file in the target directory, then rename over target.

    On any exception the temp file is removed and target is left unchanged.
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        dir=target_path.parent,
        prefix=f'.{target_path.name}.',
        suffix='.tmp'
    )

    try:
        with os.fdopen(fd, mode) as f:
            yield f
        os.replace(temp_path, target_path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def plan_to_records(plan: ScheduledTrainingPlan,
                    preferences: Optional[TrainingPreferences] = None) -> List[Dict]:
    """One flat dict per workout, in plan order."""
    records = []
    for workout in plan.workouts:
        full = workout.to_dict()
        record = {key: full[key] for key in RECORD_FIELDS}
        if preferences is not None:
            record['distance_display'] = format_distance_for_user(workout.distance_km, preferences)
            record['pace_display'] = format_pace_for_user(workout.target_pace, preferences)
        records.append(record)
    return records


def plan_document(plan: ScheduledTrainingPlan,
                  preferences: Optional[TrainingPreferences] = None) -> Dict:
    """Plan metadata plus workout records, ready for serialization."""
    return {
        'plan': {
            'start_date': plan.start_date.isoformat(),
            'end_date': plan.end_date.isoformat(),
            'week_one_start': plan.week_one_start.isoformat(),
            'total_weeks': plan.total_weeks,
            'summary': plan.summary.to_dict(),
            'weekly_distance_km': plan.weekly_distance_km(),
            'warnings': list(plan.warnings),
        },
        'workouts': plan_to_records(plan, preferences),
    }


def dump_plan_yaml(plan: ScheduledTrainingPlan, path: Path,
                   preferences: Optional[TrainingPreferences] = None) -> Path:
    with atomic_write(path) as f:
        yaml.safe_dump(plan_document(plan, preferences), f, default_flow_style=False, sort_keys=False)
    return Path(path)


def dump_plan_json(plan: ScheduledTrainingPlan, path: Path,
                   preferences: Optional[TrainingPreferences] = None, indent: int = 2) -> Path:
    with atomic_write(path) as f:
        json.dump(plan_document(plan, preferences), f, indent=indent)
    return Path(path)


def render_plan(plan: ScheduledTrainingPlan, fmt: str = 'yaml',
                preferences: Optional[TrainingPreferences] = None) -> str:
    """Serialize to a string (used when writing to stdout)."""
    document = plan_document(plan, preferences)
    if fmt == 'json':
        return json.dumps(document, indent=2)
    return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
