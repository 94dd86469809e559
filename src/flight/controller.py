# src/flight/controller.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Dict, Optional, Tuple

from .config import (
    FIXED_STEP_MS, HEIGHT, PARALLAX_FACTOR, WIND_FREQ,
    CRASH_HOLD_MS, CRASH_HOLD_PIPE_MS,
    TRAIL_CLIMB_VY, TRAIL_CLIMB_EVERY_MS, TRAIL_CRUISE_EVERY_MS,
    RETRY_BTN_X, RETRY_BTN_Y, RETRY_BTN_W, RETRY_BTN_H,
)
from .crash import CrashPhase, CrashSequence
from .level import ObstaclePool, Obstacle, RandomSource, SeededRandom, scroll_speed
from .modes import DEFAULT_MODE, ModeProfile, toggled
from .player import Plane
from .scoring import BestScoreStore, MemoryBestScoreStore, ScoreTracker

logger = logging.getLogger(__name__)


class RunState(Enum):
    MENU = auto()
    PLAYING = auto()
    CRASHED = auto()


class DeathCause(Enum):
    PIPE = auto()
    BOUNDS = auto()


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to renderers and observers."""
    state: RunState
    mode: ModeProfile
    plane: Plane
    obstacles: Tuple[Obstacle, ...]
    score: int
    near_miss: int
    best: int
    speed: float
    parallax_x: float
    time_ms: float
    crash: Optional[CrashSequence]
    death_cause: Optional[DeathCause]

    @property
    def crash_phase(self) -> Optional[CrashPhase]:
        return self.crash.phase if self.crash is not None else None


def point_in_rect(x: float, y: float, rx: float, ry: float, rw: float, rh: float) -> bool:
    return rx <= x <= rx + rw and ry <= y <= ry + rh


class RunController:
    """
    Owns one play session: plane, obstacles, score, crash timeline and the
    MENU -> PLAYING -> CRASHED -> MENU state machine.

    Drive it with `step()` once per fixed tick (see SimulationClock) and call
    the command methods (`flap`, `toggle_mode`, `pointer_down`) between ticks.
    Commands that the current state does not allow return False and change
    nothing.
    """

    def __init__(self,
                 mode: ModeProfile = DEFAULT_MODE,
                 rng: Optional[RandomSource] = None,
                 store: Optional[BestScoreStore] = None,
                 crash_cue: Optional[Callable[[], None]] = None,
                 trail_hook: Optional[Callable[[int, Plane], None]] = None,
                 world_h: float = HEIGHT):
        self.mode = mode
        self.rng = rng if rng is not None else SeededRandom(None)
        self.crash_cue = crash_cue
        self.trail_hook = trail_hook
        self.world_h = world_h

        self.state = RunState.MENU
        self.plane = Plane()
        self.pool = ObstaclePool(self.rng, world_h=world_h)
        self.scores = ScoreTracker(store if store is not None else MemoryBestScoreStore())
        self.crash: Optional[CrashSequence] = None
        self.death_cause: Optional[DeathCause] = None

        self.time_ms = 0.0
        self.parallax_x = 0.0
        self.spawn_timer_ms = 0.0
        self.trail_timer_ms = 0.0
        self.ticks = 0

    # -------------------- Lifecycle --------------------

    def reset(self) -> None:
        """Clear everything a run mutates. Bests and the active mode survive."""
        self.scores.reset_run()
        self.pool.clear()
        self.plane.reset()
        self.crash = None
        self.death_cause = None
        self.parallax_x = 0.0
        self.spawn_timer_ms = 0.0
        self.trail_timer_ms = 0.0

    def start_run(self) -> None:
        self.reset()
        self._set_state(RunState.PLAYING)

    def _set_state(self, state: RunState) -> None:
        if state is not self.state:
            logger.debug("run state %s -> %s", self.state.name, state.name)
        self.state = state

    # -------------------- Commands --------------------

    def flap(self) -> bool:
        """Space/tap: launch from the menu, flap in flight, leave the result screen."""
        if self.state is RunState.MENU:
            self.start_run()
            self.plane.vy = self.mode.flap_impulse
            return True
        if self.state is RunState.CRASHED:
            if not self.result_visible():
                return False
            self.reset()
            self._set_state(RunState.MENU)
            return True
        self.plane.flap(self.mode.flap_impulse)
        return True

    def toggle_mode(self) -> bool:
        if self.state is RunState.PLAYING:
            return False
        self.mode = toggled(self.mode)
        logger.debug("mode -> %s", self.mode.name)
        return True

    def pointer_down(self, x: float, y: float) -> bool:
        """Click/tap at screen coords: the retry button restarts straight into flight."""
        if self.state is RunState.CRASHED and self.result_visible():
            if point_in_rect(x, y, RETRY_BTN_X, RETRY_BTN_Y, RETRY_BTN_W, RETRY_BTN_H):
                self.start_run()
                return True
        return self.flap()

    # -------------------- Queries --------------------

    def result_visible(self) -> bool:
        return self.crash is not None and self.crash.is_result_visible()

    def speed(self) -> float:
        return scroll_speed(self.scores.score, self.mode)

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def best_by_mode(self) -> Dict[str, int]:
        return dict(self.scores.best)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            mode=self.mode,
            plane=replace(self.plane),
            obstacles=tuple(replace(ob) for ob in self.pool.obstacles),
            score=self.scores.score,
            near_miss=self.scores.near_miss,
            best=self.scores.best_for(self.mode.name),
            speed=self.speed(),
            parallax_x=self.parallax_x,
            time_ms=self.time_ms,
            crash=replace(self.crash) if self.crash is not None else None,
            death_cause=self.death_cause,
        )

    # -------------------- Simulation --------------------

    def step(self, dt_ms: float = FIXED_STEP_MS) -> None:
        """Advance exactly one tick of `dt_ms` simulated milliseconds."""
        self.ticks += 1
        self.time_ms += dt_ms
        if self.state is not RunState.CRASHED:
            self.parallax_x -= self.speed() * PARALLAX_FACTOR

        if self.state is RunState.PLAYING:
            self._step_playing(dt_ms)
            if self.crash is not None:
                self.crash.effects_lead_ms = dt_ms
        elif self.state is RunState.CRASHED:
            assert self.crash is not None
            self.crash.advance(dt_ms)
        else:
            self.plane.idle(self.time_ms)

    def _step_playing(self, dt_ms: float) -> None:
        self.spawn_timer_ms += dt_ms
        if self.spawn_timer_ms >= self.mode.spawn_every_ms:
            self.spawn_timer_ms = 0.0
            self.pool.spawn(self.scores.score, self.mode)

        wind = 0.0
        if self.mode.wind_strength > 0:
            wind = math.sin(self.time_ms * WIND_FREQ) * self.mode.wind_strength * (dt_ms / 1000.0) * 60.0
        self.plane.update_physics(self.mode.gravity, wind)

        self._step_trail(dt_ms)

        res = self.pool.advance(self.speed(), self.plane)
        if res.passed:
            self.scores.add_pass(res.passed)
        if res.near_misses:
            self.scores.add_near_miss(res.near_misses)
        if res.hit is not None:
            self.die(DeathCause.PIPE)

        if self.plane.out_of_bounds(self.world_h):
            self.die(DeathCause.BOUNDS)

    def _step_trail(self, dt_ms: float) -> None:
        self.trail_timer_ms += dt_ms
        every = TRAIL_CLIMB_EVERY_MS if self.plane.vy < TRAIL_CLIMB_VY else TRAIL_CRUISE_EVERY_MS
        bursts = 0
        while self.trail_timer_ms >= every:
            self.trail_timer_ms -= every
            bursts += 1
        if bursts and self.trail_hook is not None:
            self.trail_hook(bursts, self.plane)

    def die(self, reason: DeathCause, frozen_y: Optional[float] = None) -> bool:
        """End the run. Second and later calls are no-ops (returns False)."""
        if not self.plane.alive:
            return False
        self.plane.alive = False
        if frozen_y is not None:
            self.plane.y = float(frozen_y)
        self.plane.vy = 0.0

        self.death_cause = reason
        self.crash = CrashSequence(
            hold_ms=CRASH_HOLD_PIPE_MS if reason is DeathCause.PIPE else CRASH_HOLD_MS,
            origin_x=self.plane.center_x,
            origin_y=self.plane.center_y,
        )
        self._set_state(RunState.CRASHED)
        self.scores.record_death(self.mode.name, self.scores.score)
        logger.debug("died (%s) at score %d", reason.name, self.scores.score)
        self._play_crash_cue()
        return True

    def _play_crash_cue(self) -> None:
        if self.crash_cue is None:
            return
        try:
            self.crash_cue()
        except Exception:
            logger.debug("crash cue failed", exc_info=True)
