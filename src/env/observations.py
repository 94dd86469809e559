# src/env/observations.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple
import numpy as np

from src.flight.config import (
    WIDTH, HEIGHT, PLANE_H, MIN_VY, MAX_VY, OBSTACLE_SPAWN_OFFSET_X, SPEED_RAMP_MAX
)
from src.flight.level import Obstacle
from src.flight.modes import MODES

OBS_SIZE = 6
# fastest possible scroll across all modes
MAX_SPEED = max(m.base_scroll_speed for m in MODES.values()) + SPEED_RAMP_MAX
MAX_DX = float(WIDTH + OBSTACLE_SPAWN_OFFSET_X)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_vy(vy: float) -> float:
    """Scale vy into [-1,1] separately for climb and fall (the clamp is asymmetric)."""
    if vy < 0.0:
        return max(-1.0, vy / abs(MIN_VY))
    return min(1.0, vy / MAX_VY)


def _next_obstacle(plane, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
    ahead = [ob for ob in obstacles if ob.right >= plane.x]
    return min(ahead, key=lambda ob: ob.x) if ahead else None


def build_observation(plane, obstacles: Iterable[Obstacle], speed: float) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_top_norm, vy_norm, next_dx_norm, gap_top_norm, gap_bottom_norm, speed_norm ]
    - y_top_norm in [0,1] over [0, HEIGHT-PLANE_H]
    - vy_norm in [-1,1]
    - next_dx_norm: distance from plane tail to the next obstacle's left edge,
      sentinel 1.0 when nothing is ahead
    - gap_top/gap_bottom in [0,1] screen space, sentinel 0.0 / 1.0 (wide open)
    - speed_norm in [0,1]
    """
    y_norm = _clamp01(float(plane.y) / max(1.0, HEIGHT - PLANE_H))
    vy_norm = _norm_vy(float(plane.vy))

    ob = _next_obstacle(plane, obstacles)
    if ob is None:
        dx_norm, top_norm, bot_norm = 1.0, 0.0, 1.0
    else:
        dx_norm = _clamp01((ob.x - plane.x) / MAX_DX)
        top_norm = _clamp01(ob.top / float(HEIGHT))
        bot_norm = _clamp01(ob.gap_bottom / float(HEIGHT))

    speed_norm = _clamp01(float(speed) / MAX_SPEED)
    return np.asarray([y_norm, vy_norm, dx_norm, top_norm, bot_norm, speed_norm], dtype=np.float32)


def observation_bounds() -> Tuple[np.ndarray, np.ndarray]:
    low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
    high = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)
    return low, high
