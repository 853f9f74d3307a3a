#!/usr/bin/env python3
"""
Timeline viability: how well a plan length supports marathon preparation.

    < 4 weeks    defer       (not viable)
    4-5 weeks    minimal
    6-9 weeks    prioritize
    10-13 weeks  compress
    14+ weeks    full
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from constants import (
    PLAN_WEEKS_MIN,
    TIMELINE_COMPRESS_WEEKS,
    TIMELINE_FULL_WEEKS,
    TIMELINE_PRIORITIZE_WEEKS,
)

# Fewer total workouts than this gets an extra warning
MIN_KEY_WORKOUTS = 20


@dataclass(frozen=True)
class TimelineAssessment:
    total_weeks: int
    is_viable: bool
    strategy: str
    recommended_action: str
    warnings: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'total_weeks': self.total_weeks,
            'is_viable': self.is_viable,
            'strategy': self.strategy,
            'recommended_action': self.recommended_action,
            'warnings': list(self.warnings),
            'recommendations': list(self.recommendations),
        }


def assess_timeline(total_weeks: int, workout_count: Optional[int] = None) -> TimelineAssessment:
    """Classify a plan length and collect warnings for shortened preparation."""
    warnings: List[str] = []
    recommendations: List[str] = []

    if total_weeks < PLAN_WEEKS_MIN:
        return TimelineAssessment(
            total_weeks=total_weeks,
            is_viable=False,
            strategy='defer',
            recommended_action=(
                f"Consider deferring to a later race. {PLAN_WEEKS_MIN} weeks is the absolute "
                "minimum for any meaningful training adaptation."
            ),
            warnings=(f"Only {total_weeks} weeks available before the race",),
        )

    if total_weeks < TIMELINE_PRIORITIZE_WEEKS:
        strategy = 'minimal'
        action = 'Focus on maintaining current fitness and race strategy practice. Avoid increasing training load.'
        warnings += ['Extremely short timeline - injury risk is elevated',
                     'Limited time for fitness adaptations']
        recommendations += ['Consider a shorter race distance (half marathon or 10K)',
                            'Focus on race strategy and pacing practice']
    elif total_weeks < TIMELINE_COMPRESS_WEEKS:
        strategy = 'prioritize'
        action = 'Prioritize long runs and tempo work. Skip some interval sessions if needed.'
        warnings += ['Compressed timeline may limit fitness gains',
                     'Higher injury risk due to accelerated training']
        recommendations += ['Prioritize consistency over intensity',
                            'Consider adjusting goal time to be more conservative']
    elif total_weeks < TIMELINE_FULL_WEEKS:
        strategy = 'compress'
        action = f"Compress the standard {TIMELINE_FULL_WEEKS}-week plan by shortening the build-up."
        warnings.append('Shortened build-up phase')
        recommendations += ['Focus on quality over quantity',
                            'Ensure adequate recovery between hard sessions']
    else:
        strategy = 'full'
        action = 'Follow the full plan.'

    if workout_count is not None and workout_count < MIN_KEY_WORKOUTS:
        warnings.append('Limited number of key workouts for marathon preparation')

    if strategy != 'full':
        recommendations.append('Prioritize sleep and nutrition for faster recovery')

    return TimelineAssessment(
        total_weeks=total_weeks,
        is_viable=True,
        strategy=strategy,
        recommended_action=action,
        warnings=tuple(warnings),
        recommendations=tuple(recommendations),
    )
