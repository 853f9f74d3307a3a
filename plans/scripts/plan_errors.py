#!/usr/bin/env python3
"""
Exception taxonomy for plan generation.

Nothing is retried internally: generation is pure, so an identical input
always reproduces the same error. Callers decide how to present them.
"""

from typing import List, Optional


class PlanGenerationError(Exception):
    """Base class for every error raised by the plan engine."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors) if errors else [message]

    def to_dict(self) -> dict:
        return {
            'error': type(self).__name__,
            'message': self.message,
            'details': self.errors,
        }


class ConfigValidationError(PlanGenerationError):
    """Raised at entry when the configuration is malformed."""
    pass


class ConstraintViolationError(PlanGenerationError):
    """Raised when training days cannot satisfy scheduling constraints."""
    pass


class ComputationError(PlanGenerationError):
    """Raised when a generator produced an invalid distance or duration."""
    pass
