# src/tests/clock_unit.py
"""
Fixed-step clock checks.

Usage (from repo root):
  python -m src.tests.clock_unit
"""
from __future__ import annotations
import math
import random

from src.flight.clock import SimulationClock
from src.flight.config import FIXED_STEP_MS


def test_first_timestamp_is_baseline():
    clock = SimulationClock()
    assert clock.advance(123456.0) == 0, "First frame must not simulate anything"
    assert clock.accumulator_ms == 0.0


def test_remainder_carries_over():
    clock = SimulationClock(step_ms=10.0)
    clock.advance(0.0)
    assert clock.advance(25.0) == 2
    assert math.isclose(clock.accumulator_ms, 5.0)
    assert clock.advance(30.0) == 1, "5 ms leftover + 5 ms new = one step"
    assert clock.accumulator_ms == 0.0


def test_backwards_and_garbage_timestamps_yield_no_ticks():
    clock = SimulationClock(step_ms=10.0)
    clock.advance(100.0)
    assert clock.advance(90.0) == 0
    assert clock.last_ms == 100.0, "Baseline must not move backwards"
    assert clock.advance(float("nan")) == 0
    assert clock.advance(float("inf")) == 0
    assert clock.advance(None) == 0
    assert clock.advance("x") == 0
    assert clock.last_ms == 100.0
    assert clock.advance(111.0) == 1
    assert math.isclose(clock.accumulator_ms, 1.0)


def test_backgrounded_host_drains_many_ticks():
    clock = SimulationClock(step_ms=10.0)
    clock.advance(0.0)
    assert clock.advance(1000.0) == 100


def test_no_drift_property():
    rng = random.Random(7)
    clock = SimulationClock()
    t0 = ts = 5000.0
    clock.advance(ts)
    ticks = 0
    for _ in range(2000):
        ts += rng.uniform(0.0, 40.0)
        ticks += clock.advance(ts)
        assert 0.0 <= clock.accumulator_ms < FIXED_STEP_MS
        elapsed = ts - t0
        simulated = ticks * FIXED_STEP_MS
        assert simulated <= elapsed + 1e-6, "Simulated time ran ahead of wall time"
        assert elapsed - simulated < FIXED_STEP_MS + 1e-6, "Shortfall must stay under one step"
    assert clock.total_ticks == ticks
    assert math.isclose(clock.simulated_ms, ticks * FIXED_STEP_MS)


def test_rejects_non_positive_step():
    try:
        SimulationClock(step_ms=0.0)
    except ValueError:
        pass
    else:
        raise AssertionError("step_ms=0 should be rejected")


def main():
    test_first_timestamp_is_baseline()
    test_remainder_carries_over()
    test_backwards_and_garbage_timestamps_yield_no_ticks()
    test_backgrounded_host_drains_many_ticks()
    test_no_drift_property()
    test_rejects_non_positive_step()
    print("✓ clock unit sanity passed")


if __name__ == "__main__":
    main()
