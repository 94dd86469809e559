# src/flight/crash.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

from .config import (
    SHAKE_MS, FLASH_MS, FLASH_ALPHA_DIVISOR,
    CRASH_HOLD_MS, EXPLOSION_DELAY_MS, RESULT_DELAY_MS,
    EXPLOSION_FPS, EXPLOSION_FRAMES,
)


class CrashPhase(Enum):
    IMPACT = auto()      # plane frozen at the hit point, shake/flash running
    EXPLODING = auto()   # explosion animation started, result still hidden
    RESULT = auto()      # result panel shown, retry accepted


@dataclass
class CrashSequence:
    """
    Post-death timeline driven by a single elapsed counter:

        0 ........ hold_ms ........ delay_ms ........ delay_ms + result_delay_ms
        impact freeze               explosion         result + retry

    Shake, flash and hold are derived from `elapsed_ms`; only the explosion
    frame keeps its own sub-timer. Shake and flash start `effects_lead_ms`
    ahead when the crash comes from a simulated tick.
    """
    hold_ms: float = CRASH_HOLD_MS
    delay_ms: float = EXPLOSION_DELAY_MS
    result_delay_ms: float = RESULT_DELAY_MS
    origin_x: float = 0.0
    origin_y: float = 0.0
    elapsed_ms: float = 0.0
    explosion_active: bool = True
    frame: int = 0
    _frame_ms: float = 0.0
    effects_lead_ms: float = 0.0

    @property
    def frame_period_ms(self) -> float:
        return 1000.0 / EXPLOSION_FPS

    def advance(self, dt_ms: float) -> None:
        if dt_ms <= 0:
            return
        self.elapsed_ms += dt_ms
        if self.explosion_active and self.elapsed_ms >= self.delay_ms:
            self._frame_ms += dt_ms
            if self._frame_ms >= self.frame_period_ms:
                self._frame_ms = 0.0
                if self.frame + 1 >= EXPLOSION_FRAMES:
                    self.explosion_active = False
                else:
                    self.frame += 1

    @property
    def phase(self) -> CrashPhase:
        if self.elapsed_ms < self.delay_ms:
            return CrashPhase.IMPACT
        if not self.is_result_visible():
            return CrashPhase.EXPLODING
        return CrashPhase.RESULT

    def is_result_visible(self) -> bool:
        return self.elapsed_ms >= self.delay_ms + self.result_delay_ms

    def is_holding(self) -> bool:
        return self.elapsed_ms < self.hold_ms

    def explosion_started(self) -> bool:
        return self.elapsed_ms >= self.delay_ms

    def explosion_visible(self) -> bool:
        return self.explosion_active and self.explosion_started()

    @property
    def shake_ms(self) -> float:
        return max(0.0, SHAKE_MS - self.elapsed_ms - self.effects_lead_ms)

    @property
    def flash_ms(self) -> float:
        return max(0.0, FLASH_MS - self.elapsed_ms - self.effects_lead_ms)

    @property
    def flash_alpha(self) -> float:
        return self.flash_ms / FLASH_ALPHA_DIVISOR
