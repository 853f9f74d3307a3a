#!/usr/bin/env python3
"""
Caller-owned plan cache.

Plans are keyed by a fingerprint of the canonical configuration, so two
requests that differ only in the order of their training days share an
entry. Entries expire after ttl_seconds; once max_entries is reached the
oldest entry is evicted. Concurrent misses for the same key may both
generate; the result is identical either way.
"""

import hashlib
import json
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from constants import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS
from logger import get_logger
from models import ScheduledTrainingPlan, TrainingPlanConfig


def config_fingerprint(config: TrainingPlanConfig) -> str:
    """sha256 of the canonical JSON form of config."""
    canonical = json.dumps(config.to_dict(), sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()


class PlanCache:
    """Thread-safe TTL cache of generated plans."""

    def __init__(self, ttl_seconds: int = CACHE_TTL_SECONDS, max_entries: int = CACHE_MAX_ENTRIES,
                 clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: 'OrderedDict[str, Tuple[float, ScheduledTrainingPlan]]' = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, config: TrainingPlanConfig) -> Optional[ScheduledTrainingPlan]:
        key = config_fingerprint(config)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            stored_at, plan = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return plan

    def put(self, config: TrainingPlanConfig, plan: ScheduledTrainingPlan):
        key = config_fingerprint(config)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock(), plan)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def get_or_generate(self, config: TrainingPlanConfig,
                        generate: Callable[[TrainingPlanConfig], ScheduledTrainingPlan]) -> ScheduledTrainingPlan:
        """Return the cached plan for config, generating it on a miss."""
        plan = self.get(config)
        if plan is not None:
            get_logger().debug("Plan cache hit", key=config_fingerprint(config)[:12])
            return plan

        # generated outside the lock; a concurrent miss may duplicate work
        plan = generate(config)
        self.put(config, plan)
        return plan

    def clear(self):
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> dict:
        with self._lock:
            return {
                'entries': len(self._entries),
                'hits': self.hits,
                'misses': self.misses,
                'ttl_seconds': self.ttl_seconds,
                'max_entries': self.max_entries,
            }
