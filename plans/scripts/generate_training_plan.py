#!/usr/bin/env python3
"""
Generate a marathon training plan from a YAML (or JSON) request file.

Usage:
    python3 generate_training_plan.py CONFIG.yaml [--output PATH] [--format yaml|json]
                                      [--week N] [--calendar]

Plan documents go to stdout unless --output is given; progress goes to stderr.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import yaml

# Add script path for local imports
sys.path.insert(0, str(Path(__file__).parent))

from config_loader import get_config
from config_validator import parse_config
from logger import detail, error, get_logger, header, step, success, warning
from plan_dates import format_week_calendar
from plan_errors import PlanGenerationError
from plan_export import dump_plan_json, dump_plan_yaml, plan_to_records, render_plan
from training_scheduler import generate_training_plan


def load_request(path: Path) -> dict:
    """Load a plan request from YAML or JSON."""
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, 'r') as f:
        if path.suffix.lower() == '.json':
            return json.load(f)
        return yaml.safe_load(f) or {}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate a marathon training plan')
    parser.add_argument('config', type=Path, help='Plan request file (YAML or JSON)')
    parser.add_argument('--output', '-o', type=Path, help='Write the plan to this file')
    parser.add_argument('--format', choices=['yaml', 'json'], default='yaml', help='Output format')
    parser.add_argument('--week', type=int, help='Only output workouts for this week')
    parser.add_argument('--calendar', action='store_true', help='Print the week calendar instead of the plan')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns a process exit code."""
    args = build_parser().parse_args(argv)

    settings = get_config()
    log = get_logger()
    log.configure(
        level=settings.get('logging.level', 'INFO'),
        json_mode=str(settings.get('logging.format', '')).lower() == 'json' or None,
    )

    header(f"GENERATING TRAINING PLAN: {args.config.name}")

    try:
        step(1, "Loading plan request...")
        raw = load_request(args.config)

        step(2, "Validating configuration...")
        config = parse_config(raw, settings.get('defaults', {}))
        detail(f"Race: {config.race_date.isoformat()}  Goal: {config.goal_finish_time}")
        detail(f"Training days: {sorted(config.workout_days_of_week)}")

        step(3, "Generating plan...")
        plan = generate_training_plan(config)
        detail(f"{plan.total_weeks} weeks, {plan.summary.total_workouts} workouts, "
               f"{plan.summary.total_distance_km} km")
        for note in plan.warnings:
            warning(note)

    except FileNotFoundError as e:
        error(str(e))
        return 1
    except yaml.YAMLError as e:
        error(f"Invalid YAML in {args.config}: {e}")
        return 1
    except PlanGenerationError as e:
        error(f"{type(e).__name__}: {e.message}")
        for item in e.errors:
            detail(f"- {item}")
        return 1

    step(4, "Writing output...")
    if args.calendar:
        print(format_week_calendar(plan, config.race_date))
    elif args.week is not None:
        if not 1 <= args.week <= plan.total_weeks:
            error(f"Week {args.week} outside plan of {plan.total_weeks} weeks")
            return 1
        records = [r for r in plan_to_records(plan, config.preferences) if r['week'] == args.week]
        if args.format == 'json':
            print(json.dumps(records, indent=2))
        else:
            print(yaml.safe_dump(records, default_flow_style=False, sort_keys=False))
    elif args.output:
        if args.format == 'json':
            dump_plan_json(plan, args.output, config.preferences)
        else:
            dump_plan_yaml(plan, args.output, config.preferences)
        detail(f"Saved: {args.output}")
    else:
        print(render_plan(plan, args.format, config.preferences))

    success("Plan generation complete")
    return 0


if __name__ == '__main__':
    sys.exit(main())
