# src/env/flight_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.flight.config import WIDTH, HEIGHT, FPS
from src.flight.controller import RunController, RunState
from src.flight.level import SeededRandom
from src.flight.modes import get_mode
from src.flight.render import draw_world
from src.flight.scoring import MemoryBestScoreStore
from src.env.observations import build_observation, observation_bounds

ALIVE_REWARD = 0.1
DEATH_REWARD = -1.0


class FlightEnv(gym.Env):
    """
    Floppy Plane Gymnasium environment (vector observations).
    - Simulation at 60 Hz fixed ticks (same RunController the game runs).
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Episode starts already in flight: reset() launches the run.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 mode: str = "PRO",
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.mode = get_mode(mode)

        self.sim_fps = FPS
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.ctrl: Optional[RunController] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # seed given -> reproducible obstacle sequence; None -> SeededRandom draws one
        rng = SeededRandom(int(seed) if seed is not None else None)
        self.ctrl = RunController(mode=self.mode, rng=rng, store=MemoryBestScoreStore())
        self.ctrl.flap()   # MENU -> PLAYING with the launch impulse
        self.timestep = 0
        self.current_seed = rng.seed

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.ctrl is not None, "Call reset() before step()"

        score_before = self.ctrl.score
        if int(action) == 1 and self.ctrl.state is RunState.PLAYING:
            self.ctrl.flap()

        for _ in range(self.frame_skip):
            self.ctrl.step()
            if self.ctrl.state is not RunState.PLAYING:
                break

        terminated = self.ctrl.state is not RunState.PLAYING
        gained = self.ctrl.score - score_before
        if terminated:
            reward = DEATH_REWARD
        else:
            reward = ALIVE_REWARD + gained * self.mode.score_factor

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), float(reward), terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.ctrl is not None
        return build_observation(self.ctrl.plane, self.ctrl.pool.obstacles, self.ctrl.speed())

    def _info(self) -> Dict[str, Any]:
        assert self.ctrl is not None
        cause = self.ctrl.death_cause
        return {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": self.ctrl.score,
            "near_miss": self.ctrl.scores.near_miss,
            "mode": self.mode.name,
            "death_cause": cause.name.lower() if cause is not None else None,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.ctrl is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Floppy Plane - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.font = pygame.font.SysFont("jetbrainsmono", 14)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        draw_world(self.screen, self.ctrl.snapshot(), self.font)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
