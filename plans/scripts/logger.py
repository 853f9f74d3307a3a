#!/usr/bin/env python3
"""
Structured logging for the marathon plan engine.

Two output modes share one logger:
- Human-readable: prefixed lines with key=value fields, for the CLI
- JSON: one object per line, for the web service and CI

Set MP_LOG_FORMAT=json (or logging.format in config.yaml) for JSON output
and MP_LOG_LEVEL to change verbosity. Everything goes to stderr so the CLI
can pipe plan documents on stdout.
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Optional


LOGGER_NAME = 'marathon_planner'

LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def _fields(record: logging.LogRecord) -> Dict:
    return getattr(record, 'plan_fields', None) or {}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for machine-parseable logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        fields = _fields(record)
        if fields:
            log_obj['fields'] = fields
        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """Prefix by level, append fields as [key=value | ...]."""

    LEVEL_PREFIXES = {
        'DEBUG': '[DEBUG] ',
        'WARNING': '[WARN] ',
        'ERROR': '[ERROR] ',
        'CRITICAL': '[CRITICAL] ',
    }

    def format(self, record: logging.LogRecord) -> str:
        line = self.LEVEL_PREFIXES.get(record.levelname, '') + record.getMessage()
        fields = _fields(record)
        if fields:
            line += ' [' + ' | '.join(f"{k}={v}" for k, v in fields.items()) + ']'
        return line


class PlanLogger:
    """Process-wide logger with bound context fields."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._setup()
                    cls._instance = instance
        return cls._instance

    def _setup(self):
        self._logger = logging.getLogger(LOGGER_NAME)
        self._context = threading.local()
        self._handler = None
        self._json_mode = False

        if not self._logger.handlers:
            self._handler = logging.StreamHandler(sys.stderr)
            self._logger.addHandler(self._handler)

        self.configure(
            level=os.environ.get('MP_LOG_LEVEL', 'INFO'),
            json_mode=os.environ.get('MP_LOG_FORMAT', '').lower() == 'json',
        )

    @property
    def json_mode(self) -> bool:
        return self._json_mode

    def configure(self, level: Optional[str] = None, json_mode: Optional[bool] = None):
        """Change level and/or output mode; None leaves a setting as is."""
        if level is not None:
            self._logger.setLevel(LEVELS.get(str(level).upper(), logging.INFO))
        if json_mode is not None:
            self._json_mode = json_mode
            if self._handler is not None:
                self._handler.setFormatter(StructuredFormatter() if json_mode else HumanFormatter())

    @contextmanager
    def bind(self, **fields):
        """Attach fields to every record logged on this thread inside the block."""
        previous = getattr(self._context, 'fields', {})
        self._context.fields = dict(previous, **fields)
        try:
            yield self
        finally:
            self._context.fields = previous

    def _log(self, level: int, msg: str, fields: Dict):
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(self._logger.name, level, "(plan)", 0, msg, (), None)
        merged = dict(getattr(self._context, 'fields', {}), **fields)
        if merged:
            record.plan_fields = merged
        self._logger.handle(record)

    def debug(self, msg: str, **fields):
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields):
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, **fields):
        self._log(logging.WARNING, msg, fields)

    def error(self, msg: str, **fields):
        self._log(logging.ERROR, msg, fields)

    # === CLI progress output ===
    # In JSON mode these become plain INFO records tagged with their kind

    def success(self, msg: str, **fields):
        if self._json_mode:
            self._log(logging.INFO, msg, dict(fields, status='success'))
        else:
            self._log(logging.INFO, f"[OK] {msg}", fields)

    def step(self, step_num: int, msg: str):
        if self._json_mode:
            self._log(logging.INFO, msg, {'step': step_num})
        else:
            self._log(logging.INFO, f"\n{step_num}. {msg}", {})

    def header(self, title: str):
        if self._json_mode:
            self._log(logging.INFO, title, {'section': 'header'})
        else:
            line = "=" * 60
            self._log(logging.INFO, f"\n{line}\n{title}\n{line}", {})

    def detail(self, msg: str, indent: int = 1):
        if self._json_mode:
            self._log(logging.INFO, msg, {'indent': indent})
        else:
            self._log(logging.INFO, "   " * indent + msg, {})


def get_logger() -> PlanLogger:
    """Get the global logger instance."""
    return PlanLogger()


def debug(msg: str, **fields):
    get_logger().debug(msg, **fields)


def info(msg: str, **fields):
    get_logger().info(msg, **fields)


def warning(msg: str, **fields):
    get_logger().warning(msg, **fields)


def error(msg: str, **fields):
    get_logger().error(msg, **fields)


def success(msg: str, **fields):
    get_logger().success(msg, **fields)


def step(step_num: int, msg: str):
    get_logger().step(step_num, msg)


def header(title: str):
    get_logger().header(title)


def detail(msg: str, indent: int = 1):
    get_logger().detail(msg, indent)
