#!/usr/bin/env python3
"""
Marathon Planner Web Service

Flask JSON API over the plan engine. Plans are cached per configuration
fingerprint; the cache belongs to this service, not to the engine.
"""

import os
import secrets
import sys
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path

from flask import Flask, jsonify, request

# Add scripts directory to path
SCRIPTS_DIR = Path(__file__).parent.parent / "plans" / "scripts"
sys.path.insert(0, str(SCRIPTS_DIR))

from config_loader import get_config
from config_validator import parse_config, parse_flag
from constants import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS, DAY_NUMBERS
from logger import get_logger
from pace_calculator import (
    calculate_training_paces,
    estimate_marathon_from_5k,
    format_pace,
    pace_per_km_to_per_mile,
)
from plan_cache import PlanCache, config_fingerprint
from plan_errors import (
    ComputationError,
    ConfigValidationError,
    ConstraintViolationError,
    PlanGenerationError,
)
from plan_export import plan_to_records
from rest_days import resolve_conflicts, suggest_optimal_rest_days, validate as validate_rest_days
from timeline import assess_timeline
from training_scheduler import TrainingScheduler, generate_training_plan

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 64 * 1024

settings = get_config()
log = get_logger()

plan_cache = PlanCache(
    ttl_seconds=settings.get_int('cache.ttl_seconds', CACHE_TTL_SECONDS),
    max_entries=settings.get_int('cache.max_entries', CACHE_MAX_ENTRIES),
)
CACHE_ENABLED = settings.get_bool('cache.enabled', True)

# =============================================================================
# SECURITY CONFIGURATION
# =============================================================================

@app.after_request
def set_security_headers(response):
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-XSS-Protection'] = '1; mode=block'
    response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
    if os.environ.get('FLASK_ENV') == 'production':
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


# =============================================================================
# AUTHENTICATION
# =============================================================================

def require_api_auth(f):
    """Require X-API-Key when MP_API_KEY is set; open in dev mode otherwise."""
    @wraps(f)
    def decorated(*args, **kwargs):
        expected = os.environ.get('MP_API_KEY')
        if not expected:
            return f(*args, **kwargs)

        api_key = request.headers.get('X-API-Key')
        if api_key and secrets.compare_digest(api_key, expected):
            return f(*args, **kwargs)

        return jsonify({"error": "Invalid or missing API key"}), 401

    return decorated


# =============================================================================
# HELPERS
# =============================================================================

def request_json() -> dict:
    """Parse the JSON body or raise ConfigValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ConfigValidationError("Request body must be a JSON object")
    return data


def config_from_request():
    return parse_config(request_json(), settings.get('defaults', {}))


def plan_for(config):
    if not CACHE_ENABLED:
        return generate_training_plan(config)
    return plan_cache.get_or_generate(config, generate_training_plan)


def _int_days(raw, label: str):
    if not isinstance(raw, list) or not all(isinstance(d, int) and not isinstance(d, bool) for d in raw):
        raise ConfigValidationError(f"{label} must be a list of day numbers 1-7")
    bad = [d for d in raw if d not in DAY_NUMBERS]
    if bad:
        raise ConfigValidationError(f"{label} out of range 1-7: {bad}")
    if len(set(raw)) != len(raw):
        raise ConfigValidationError(f"{label} contains duplicate days: {raw}")
    return raw


# =============================================================================
# ROUTES
# =============================================================================

@app.route('/health')
def health():
    return jsonify({
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
        "cache": plan_cache.stats(),
    })


@app.route('/api/plans', methods=['POST'])
@require_api_auth
def api_generate_plan():
    """Generate (or fetch from cache) a full plan."""
    config = config_from_request()
    plan = plan_for(config)
    timeline = assess_timeline(plan.total_weeks, plan.summary.total_workouts)

    body = plan.to_dict()
    body['id'] = config_fingerprint(config)
    body['paces'] = calculate_training_paces(config.goal_finish_time).to_dict()
    body['timeline'] = timeline.to_dict()
    body['weekly_distance_km'] = {str(k): v for k, v in plan.weekly_distance_km().items()}
    return jsonify(body)


@app.route('/api/plans/weeks/<int:week>', methods=['POST'])
@require_api_auth
def api_plan_week(week: int):
    """Workouts for one week of the plan described by the body."""
    config = config_from_request()
    plan = plan_for(config)
    if not 1 <= week <= plan.total_weeks:
        return jsonify({"error": f"Week {week} outside plan of {plan.total_weeks} weeks"}), 404

    records = [r for r in plan_to_records(plan, config.preferences) if r['week'] == week]
    return jsonify({"week": week, "workouts": records})


@app.route('/api/rest-days/validate', methods=['POST'])
@require_api_auth
def api_validate_rest_days():
    data = request_json()
    workout_days = _int_days(data.get('workout_days', data.get('workoutDaysOfWeek')), 'workout_days')
    rest_days = _int_days(data.get('preferred_rest_days', data.get('preferredRestDays', [])), 'preferred_rest_days')
    enforce = parse_flag(data.get('enforce_rest_days', data.get('enforceRestDays', False)), 'enforce_rest_days')

    analysis = validate_rest_days(workout_days, rest_days, enforce)
    resolution = resolve_conflicts(workout_days, rest_days, enforce)

    body = analysis.to_dict()
    body['optimal_rest_days'] = suggest_optimal_rest_days(workout_days)
    body['resolution'] = {
        'workout_days': list(resolution.workout_days),
        'rest_days': list(resolution.rest_days),
        'changes': list(resolution.changes),
    }
    return jsonify(body)


@app.route('/api/paces', methods=['POST'])
@require_api_auth
def api_paces():
    """Training paces for a goal time, or for a marathon estimated from a 5K."""
    data = request_json()
    goal = data.get('goal_finish_time') or data.get('goalFinishTime')
    five_k = data.get('five_k_time') or data.get('fiveKTime')

    if not goal and five_k:
        goal = estimate_marathon_from_5k(str(five_k))
    if not goal:
        raise ConfigValidationError("Provide goal_finish_time or five_k_time")

    paces = calculate_training_paces(goal)
    per_km = paces.to_dict()
    return jsonify({
        "goal_finish_time": goal,
        "sec_per_km": per_km,
        "per_km": {name: format_pace(value) for name, value in per_km.items()},
        "per_mile": {name: format_pace(pace_per_km_to_per_mile(value)) for name, value in per_km.items()},
    })


@app.route('/api/plans/span', methods=['POST'])
@require_api_auth
def api_plan_span():
    """Plan length and timeline assessment without generating workouts."""
    config = config_from_request()
    start, total_weeks = TrainingScheduler(config).plan_span()
    return jsonify({
        "start_date": start.isoformat(),
        "total_weeks": total_weeks,
        "timeline": assess_timeline(total_weeks, total_weeks * len(config.workout_days_of_week)).to_dict(),
    })


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.errorhandler(ConfigValidationError)
def config_error(e):
    return jsonify(e.to_dict()), 400


@app.errorhandler(ConstraintViolationError)
def constraint_error(e):
    return jsonify(e.to_dict()), 422


@app.errorhandler(ComputationError)
def computation_error(e):
    log.error("Plan computation failed", message=e.message)
    return jsonify(e.to_dict()), 500


@app.errorhandler(PlanGenerationError)
def plan_error(e):
    log.error("Plan generation failed", message=e.message)
    return jsonify(e.to_dict()), 500


@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "Not found"}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "Method not allowed"}), 405


@app.errorhandler(500)
def server_error(e):
    return jsonify({"error": "Internal server error"}), 500


# =============================================================================
# MAIN
# =============================================================================

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    # Default to false in production, true only if explicitly set
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    app.run(host='0.0.0.0', port=port, debug=debug)
