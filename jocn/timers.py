"""
Named timing scopes for the forcing routines.

Each scope is visible to the JAX profiler (as a named scope in traced HLO
and as a trace annotation on the host timeline) and is also accumulated in a
small in-process registry. Timings are advisory: JAX dispatches work
asynchronously, so host wall time covers tracing and dispatch only.
"""

import contextlib
import logging
import time
from typing import Dict, NamedTuple

import jax

logger = logging.getLogger(__name__)


class TimerStats(NamedTuple):
    count: int = 0
    total_seconds: float = 0.0


_registry: Dict[str, TimerStats] = {}


@contextlib.contextmanager
def timer(name: str):
    """Time the enclosed block under ``name``."""
    start = time.perf_counter()
    try:
        with jax.named_scope(name), jax.profiler.TraceAnnotation(name):
            yield
    finally:
        elapsed = time.perf_counter() - start
        stats = _registry.get(name, TimerStats())
        _registry[name] = TimerStats(stats.count + 1, stats.total_seconds + elapsed)
        logger.debug("timer %s: %.6f s", name, elapsed)


def timer_summary() -> Dict[str, TimerStats]:
    """Snapshot of the accumulated timings, keyed by scope name."""
    return dict(_registry)


def reset_timers() -> None:
    _registry.clear()
