"""Utilities for driving the simulation at a fixed tick rate."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


@dataclass
class TickAccumulator:
    """Turns elapsed real time into a whole number of ticks.

    Leftover time carries over to the next frame. When more than
    ``max_ticks`` are due the backlog is dropped instead of replayed.
    """

    period: float
    max_ticks: int
    value: float = 0.0

    def accrue(self, delta: float) -> None:
        if delta > 0.0:
            self.value += delta

    def clear(self) -> None:
        self.value = 0.0

    def consume(self) -> int:
        if self.period <= 0.0 or self.value < self.period:
            return 0
        due = int(self.value // self.period)
        if due > self.max_ticks:
            self.value = 0.0
            return self.max_ticks
        self.value -= due * self.period
        return due


__all__ = ["FrameTimer", "TickAccumulator"]
