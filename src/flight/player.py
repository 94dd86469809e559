# src/flight/player.py
from __future__ import annotations
import math
from dataclasses import dataclass

from .config import (
    PLANE_X, PLANE_START_Y, PLANE_W, PLANE_H, HEIGHT,
    MIN_VY, MAX_VY, AIR_DRAG,
    TILT_PER_VY, TILT_MIN, TILT_MAX, TILT_EASE,
    FLAP_BOOST_PER_VY, FLAP_BOOST_MIN, FLAP_BOOST_MAX,
    IDLE_BOB_AMPLITUDE, IDLE_BOB_FREQ, IDLE_TILT_AMPLITUDE, IDLE_TILT_FREQ, IDLE_TILT_EASE,
)
from .mathutil import clamp, lerp


@dataclass
class Plane:
    """
    The controlled body. x is fixed (the world scrolls), y is the TOP edge,
    vy is in px per fixed tick (positive = falling).
    """
    x: float = float(PLANE_X)
    y: float = PLANE_START_Y
    vy: float = 0.0
    angle: float = 0.0
    alive: bool = True
    width: int = PLANE_W
    height: int = PLANE_H

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width * 0.5

    @property
    def center_y(self) -> float:
        return self.y + self.height * 0.5

    def reset(self) -> None:
        self.x = float(PLANE_X)
        self.y = PLANE_START_Y
        self.vy = 0.0
        self.angle = 0.0
        self.alive = True

    def update_physics(self, gravity: float, wind: float = 0.0) -> None:
        """One fixed tick: gravity, drag, clamp, integrate, ease tilt toward velocity."""
        self.vy += gravity + wind
        self.vy *= AIR_DRAG
        self.vy = clamp(self.vy, MIN_VY, MAX_VY)
        self.y += self.vy
        target = clamp(self.vy * TILT_PER_VY, TILT_MIN, TILT_MAX)
        self.angle = lerp(self.angle, target, TILT_EASE)

    def flap(self, impulse: float) -> None:
        """
        vy = impulse - clamp(-vy * 0.13, -0.8, 1.9). The correction is bounded,
        so rapid taps converge instead of stacking.
        """
        boost = clamp(-self.vy * FLAP_BOOST_PER_VY, FLAP_BOOST_MIN, FLAP_BOOST_MAX)
        self.vy = impulse - boost

    def idle(self, t_ms: float) -> None:
        """Menu hover. Recomputed from time each tick so it never drifts."""
        self.y = PLANE_START_Y + math.sin(t_ms * IDLE_BOB_FREQ) * IDLE_BOB_AMPLITUDE
        self.angle = lerp(self.angle, math.sin(t_ms * IDLE_TILT_FREQ) * IDLE_TILT_AMPLITUDE, IDLE_TILT_EASE)

    def out_of_bounds(self, world_h: float = HEIGHT) -> bool:
        return self.y <= 0 or self.bottom >= world_h
