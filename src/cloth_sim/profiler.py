# MIT License (see LICENSE)
"""
Lightweight timing of simulation phases.

A Cloth with a profiler attached records the time spent in force
accumulation, integration and relaxation on every step.

Example:
    profiler = Profiler()
    cloth = Cloth(config, profiler=profiler)
    for _ in range(100):
        cloth.time_step()
    print(profiler.stats.summary()["relax"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Timing samples (seconds) per section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def total(self, name: str) -> float:
        """Total seconds spent in a section (0 if never entered)."""
        return float(sum(self.samples.get(name, ())))

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Collects wall-clock timings of named code sections."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
