# src/flight/clock.py
from __future__ import annotations
import math
from typing import Optional

from .config import FIXED_STEP_MS


class SimulationClock:
    """
    Turns a stream of wall-clock timestamps (ms) into whole fixed ticks.

    - first timestamp is only a baseline (no giant first-frame jump)
    - leftover time is carried, so simulated time never drifts more
      than one step behind wall time
    - backwards, non-finite or non-numeric timestamps produce no ticks
    """

    def __init__(self, step_ms: float = FIXED_STEP_MS):
        if not step_ms > 0:
            raise ValueError("step_ms must be > 0")
        self.step_ms = float(step_ms)
        self.last_ms: Optional[float] = None
        self.accumulator_ms = 0.0
        self.total_ticks = 0

    def advance(self, timestamp_ms: float) -> int:
        """Feed one host-frame timestamp, return how many fixed steps to run."""
        try:
            ts = float(timestamp_ms)
        except (TypeError, ValueError):
            return 0
        if not math.isfinite(ts):
            return 0
        if self.last_ms is None:
            self.last_ms = ts
            return 0

        delta = ts - self.last_ms
        if delta <= 0.0:
            # never step backwards; keep the newest baseline we have seen
            return 0
        self.last_ms = ts

        ticks, self.accumulator_ms = divmod(self.accumulator_ms + delta, self.step_ms)
        ticks = int(ticks)
        self.total_ticks += ticks
        return ticks

    @property
    def simulated_ms(self) -> float:
        return self.total_ticks * self.step_ms
