#!/usr/bin/env python3
"""
Configuration loader for the marathon plan engine.

Loads settings from config.yaml with environment variable overrides.
Only ambient settings live here (logging, cache, request defaults); the
numbers that shape a plan are fixed in constants.py so that a given
TrainingPlanConfig always produces the same plan.
"""

import os
import re
import threading
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from constants import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS


# Only these variables may appear in ${VAR:-default} placeholders
ALLOWED_ENV_VARS: Set[str] = {
    'MP_LOG_LEVEL',
    'MP_LOG_FORMAT',
    'MP_CACHE_TTL_SECONDS',
    'MP_CACHE_MAX_ENTRIES',
    'MP_DEFAULT_DISTANCE_UNIT',
}

ENV_PATTERN = re.compile(r'\$\{([^}:]+)(?::-([^}]*))?\}')

DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    'logging': {'level': 'INFO', 'format': 'human'},
    'cache': {
        'enabled': True,
        'ttl_seconds': CACHE_TTL_SECONDS,
        'max_entries': CACHE_MAX_ENTRIES,
    },
    'defaults': {'distance_unit': 'KILOMETERS', 'pace_format': 'MIN_PER_KM'},
}

TRUTHY = ('1', 'true', 'yes', 'on')


def substitute_env(value: Any) -> Any:
    """Expand ${VAR:-default} in every string of a loaded YAML tree.

    Variables outside ALLOWED_ENV_VARS always expand to their default, so a
    config file cannot read arbitrary process secrets.
    """
    if isinstance(value, dict):
        return {k: substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env(v) for v in value]
    if not isinstance(value, str):
        return value

    def expand(match):
        name, fallback = match.group(1), match.group(2) or ''
        return os.environ.get(name, fallback) if name in ALLOWED_ENV_VARS else fallback

    return ENV_PATTERN.sub(expand, value)


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Merge override into a copy of base, recursing into nested sections."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def candidate_paths() -> List[Path]:
    """Locations searched for config.yaml, highest priority first."""
    paths = []
    if os.environ.get('MP_CONFIG'):
        paths.append(Path(os.environ['MP_CONFIG']))
    repo_root = Path(__file__).resolve().parent.parent.parent
    paths += [
        repo_root / 'config.yaml',
        Path.cwd() / 'config.yaml',
        Path.home() / '.marathon-planner' / 'config.yaml',
    ]
    return paths


class Config:
    """Process-wide settings, read once and re-read on reload()."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._settings = instance._read()
                    cls._instance = instance
        return cls._instance

    @staticmethod
    def _read() -> Dict:
        source = next((p for p in candidate_paths() if p.exists()), None)
        if source is None:
            return deep_merge(DEFAULT_SETTINGS, {})
        with open(source, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        return deep_merge(DEFAULT_SETTINGS, substitute_env(loaded))

    def reload(self):
        """Re-read configuration (used by tests after changing env vars)."""
        self._settings = self._read()

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'cache.ttl_seconds'."""
        node = self._settings
        for part in key_path.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_int(self, key_path: str, default: int) -> int:
        # substituted env values arrive as strings
        try:
            return int(self.get(key_path, default))
        except (TypeError, ValueError):
            return default

    def get_bool(self, key_path: str, default: bool) -> bool:
        value = self.get(key_path, default)
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY
        return bool(value)


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
