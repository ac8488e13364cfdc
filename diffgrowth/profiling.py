"""
Opt-in timing of the simulation phases.

Decorate a function with @profile or wrap a block in profile_block(name);
nothing is recorded until profiler.enable() is called.
"""

import logging
import time
from collections import defaultdict
from functools import wraps
from typing import Dict

logger = logging.getLogger(__name__)

MAX_SAMPLES = 1000


class Profiler:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self.stats: Dict[str, Dict] = defaultdict(lambda: {
            'calls': 0,
            'total_time': 0.0,
            'times': []
        })
        self.enabled = False

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def record(self, name: str, elapsed: float):
        if not self.enabled:
            return
        self.stats[name]['calls'] += 1
        self.stats[name]['total_time'] += elapsed
        if len(self.stats[name]['times']) < MAX_SAMPLES:
            self.stats[name]['times'].append(elapsed)

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Per-name call count, total seconds and mean milliseconds, slowest first."""
        rows = sorted(self.stats.items(), key=lambda x: x[1]['total_time'], reverse=True)
        return {
            name: {
                'calls': data['calls'],
                'total_time': data['total_time'],
                'avg_ms': (data['total_time'] / data['calls'] * 1000) if data['calls'] else 0.0,
            }
            for name, data in rows
        }

    def log_stats(self, level: int = logging.INFO):
        stats = self.summary()
        if not stats:
            return

        logger.log(level, f"{'Function':<35} {'Calls':>10} {'Total(s)':>10} {'Avg(ms)':>10}")
        for name, data in stats.items():
            logger.log(
                level,
                f"{name:<35} {data['calls']:>10} {data['total_time']:>10.3f} {data['avg_ms']:>10.3f}"
            )

    def reset(self):
        self.stats.clear()


profiler = Profiler()


def profile(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not profiler.enabled:
            return func(*args, **kwargs)
        start = time.perf_counter()
        result = func(*args, **kwargs)
        profiler.record(func.__qualname__, time.perf_counter() - start)
        return result
    return wrapper


class profile_block:
    def __init__(self, name: str):
        self.name = name
        self.start = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        profiler.record(self.name, time.perf_counter() - self.start)
