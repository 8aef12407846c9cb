"""Memoizing layer in front of the simulation engine.

Results are keyed by a fingerprint of the region, the active interventions
and the effect strictness. Concurrent requests for the same fingerprint
share one computation: the first caller computes while the others wait on
a per-fingerprint lock and then read the stored result.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Sequence

from ghis.config import get_config
from ghis.simulation.models import Intervention, Region, SimulationResult
from ghis.utils import compute_payload_hash

logger = logging.getLogger(__name__)

ComputeFn = Callable[[Region, Sequence[Intervention], str], SimulationResult]


def fingerprint(region: Region, interventions: Sequence[Intervention], strictness: str) -> str:
    """Stable hash of everything that influences a simulation result.

    Inactive interventions do not affect the result and are excluded.
    """
    active = sorted(
        (i.model_dump(mode="json") for i in interventions if i.active),
        key=lambda d: d["id"],
    )
    return compute_payload_hash({
        "region": region.model_dump(mode="json"),
        "interventions": active,
        "strictness": strictness,
    })


class SimulationCache:
    """Thread-safe LRU cache with at-most-one computation per fingerprint."""

    def __init__(self, max_entries: int = 256) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._results: OrderedDict[str, SimulationResult] = OrderedDict()
        self._inflight: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def _lookup(self, key: str) -> SimulationResult | None:
        # Caller holds self._lock
        result = self._results.get(key)
        if result is not None:
            self._results.move_to_end(key)
            self.hits += 1
        return result

    def get_or_compute(
        self,
        region: Region,
        interventions: Sequence[Intervention],
        strictness: str,
        compute: ComputeFn,
    ) -> SimulationResult:
        key = fingerprint(region, interventions, strictness)

        with self._lock:
            cached = self._lookup(key)
            if cached is not None:
                return cached
            key_lock = self._inflight.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                cached = self._lookup(key)
                if cached is not None:
                    return cached
                self.misses += 1

            try:
                result = compute(region, interventions, strictness)
            except Exception:
                with self._lock:
                    self._inflight.pop(key, None)
                raise

            # Publish the result and retire the in-flight lock atomically
            with self._lock:
                self._results[key] = result
                self._results.move_to_end(key)
                self._inflight.pop(key, None)
                while len(self._results) > self._max_entries:
                    evicted, _ = self._results.popitem(last=False)
                    logger.debug("Evicted simulation %s", evicted[:12])
            return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
            self.hits = 0
            self.misses = 0


_default_cache: SimulationCache | None = None
_default_lock = threading.Lock()


def get_default_cache() -> SimulationCache | None:
    """Process-wide cache, or None when caching is disabled in config."""
    global _default_cache
    config = get_config()
    if not config.cache_enabled:
        return None
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                _default_cache = SimulationCache(config.cache_max_entries)
    return _default_cache
