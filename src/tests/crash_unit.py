# src/tests/crash_unit.py
"""
Crash timeline: impact -> explosion -> result.

Usage (from repo root):
  python -m src.tests.crash_unit
"""
from __future__ import annotations
import math

from src.flight.config import (
    FIXED_STEP_MS, EXPLOSION_DELAY_MS, RESULT_DELAY_MS, EXPLOSION_FRAMES
)
from src.flight.crash import CrashPhase, CrashSequence


def test_phases_follow_elapsed_time():
    c = CrashSequence()
    assert c.phase is CrashPhase.IMPACT
    c.advance(EXPLOSION_DELAY_MS - 1.0)
    assert c.phase is CrashPhase.IMPACT and not c.explosion_started()
    c.advance(1.0)
    assert c.phase is CrashPhase.EXPLODING and c.explosion_visible()
    assert not c.is_result_visible()
    c.advance(RESULT_DELAY_MS - 1.0)
    assert not c.is_result_visible()
    c.advance(1.0)
    assert c.phase is CrashPhase.RESULT and c.is_result_visible()


def test_explosion_runs_six_frames_then_stops():
    c = CrashSequence()
    seen = set()
    for _ in range(200):
        c.advance(FIXED_STEP_MS)
        assert 0 <= c.frame < EXPLOSION_FRAMES
        if c.explosion_active:
            seen.add(c.frame)
    assert not c.explosion_active
    assert c.frame == EXPLOSION_FRAMES - 1
    assert seen == set(range(EXPLOSION_FRAMES))


def test_explosion_frame_waits_for_delay():
    c = CrashSequence()
    c.advance(EXPLOSION_DELAY_MS * 0.9)
    assert c.frame == 0 and c.explosion_active


def test_shake_flash_and_hold_derive_from_elapsed():
    c = CrashSequence(hold_ms=130.0)
    assert c.shake_ms == 320.0 and c.flash_ms == 150.0
    assert math.isclose(c.flash_alpha, 150.0 / 400.0)
    assert c.is_holding()
    c.advance(130.0)
    assert not c.is_holding()
    assert c.flash_ms == 20.0
    c.advance(200.0)
    assert c.flash_ms == 0.0 and c.flash_alpha == 0.0
    assert c.shake_ms == 0.0


def test_effects_lead_shortens_shake_and_flash_only():
    c = CrashSequence(effects_lead_ms=FIXED_STEP_MS)
    assert math.isclose(c.shake_ms, 320.0 - FIXED_STEP_MS)
    assert math.isclose(c.flash_ms, 150.0 - FIXED_STEP_MS)
    assert c.elapsed_ms == 0.0 and c.phase is CrashPhase.IMPACT
    assert c.is_holding()


def test_non_positive_delta_is_ignored():
    c = CrashSequence()
    c.advance(0.0)
    c.advance(-50.0)
    assert c.elapsed_ms == 0.0


def main():
    test_phases_follow_elapsed_time()
    test_explosion_runs_six_frames_then_stops()
    test_explosion_frame_waits_for_delay()
    test_shake_flash_and_hold_derive_from_elapsed()
    test_effects_lead_shortens_shake_and_flash_only()
    test_non_positive_delta_is_ignored()
    print("✓ crash unit sanity passed")


if __name__ == "__main__":
    main()
