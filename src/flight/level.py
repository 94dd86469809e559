# src/flight/level.py
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from .config import (
    WIDTH, HEIGHT, OBSTACLE_W, OBSTACLE_SPAWN_OFFSET_X, OBSTACLE_RETIRE_X,
    GAP_RAMP_SCORE, GAP_NARROW_MIN, GAP_NARROW_MAX,
    SPEED_RAMP_SCORE, SPEED_RAMP_MAX, NEAR_MISS_PX,
    PLANE_PAD_X, OBSTACLE_PAD_X,
)
from .mathutil import clamp
from .modes import ModeProfile
from .player import Plane


class RandomSource(Protocol):
    def next(self, lo: float, hi: float) -> float:
        """Uniform float in [lo, hi)."""
        ...


class SeededRandom:
    """Production random source. seed=None draws a fresh seed (kept in .seed for repro)."""

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def next(self, lo: float, hi: float) -> float:
        return lo + self.rng.random() * (hi - lo)


@dataclass
class Obstacle:
    """A building pair: solid above `top`, solid below `top + gap`."""
    x: float
    top: float
    gap: float
    width: float = OBSTACLE_W
    scored: bool = False
    near_scored: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_bottom(self) -> float:
        return self.top + self.gap

    @property
    def gap_center(self) -> float:
        return self.top + self.gap * 0.5


def collides(plane: Plane, ob: Obstacle) -> bool:
    """
    Pure AABB test. The plane box is widened and the obstacle box narrowed
    horizontally to match the visible sprites; vertically the plane box is exact.
    """
    px = plane.x + PLANE_PAD_X
    pw = plane.width - PLANE_PAD_X * 2
    left = ob.x + OBSTACLE_PAD_X
    right = ob.x + ob.width - OBSTACLE_PAD_X

    if not (px + pw > left and px < right):
        return False
    return plane.y < ob.top or plane.bottom > ob.gap_bottom


def scroll_speed(score: int, profile: ModeProfile) -> float:
    ramp = clamp(score / SPEED_RAMP_SCORE, 0.0, 1.0) * SPEED_RAMP_MAX
    return profile.base_scroll_speed + ramp


def gap_range(score: int, profile: ModeProfile) -> Tuple[float, float]:
    """Gap bounds narrow as score climbs, fully narrowed at GAP_RAMP_SCORE."""
    s = clamp(score / GAP_RAMP_SCORE, 0.0, 1.0)
    return profile.gap_min - s * GAP_NARROW_MIN, profile.gap_max - s * GAP_NARROW_MAX


@dataclass
class AdvanceResult:
    passed: int = 0
    near_misses: int = 0
    hit: Optional[Obstacle] = None


@dataclass
class ObstaclePool:
    """
    Ordered obstacles (oldest first). Spawns at the right edge, scrolls left,
    scores each obstacle once, retires it past the left edge.
    """
    rng: RandomSource
    world_w: float = WIDTH
    world_h: float = HEIGHT
    obstacles: List[Obstacle] = field(default_factory=list)

    def clear(self) -> None:
        self.obstacles = []

    def spawn(self, score: int, profile: ModeProfile) -> Obstacle:
        lo, hi = gap_range(score, profile)
        gap = self.rng.next(lo, hi)
        top = self.rng.next(0.0, self.world_h - gap)
        ob = Obstacle(x=self.world_w + OBSTACLE_SPAWN_OFFSET_X, top=top, gap=gap)
        self.obstacles.append(ob)
        return ob

    def advance(self, speed: float, plane: Plane) -> AdvanceResult:
        """
        Move, score and collide, newest obstacle first. Stops at the first
        hit; obstacles not yet visited that tick keep their position.
        """
        res = AdvanceResult()
        for i in range(len(self.obstacles) - 1, -1, -1):
            ob = self.obstacles[i]
            ob.x -= speed

            if not ob.scored and ob.right < plane.x:
                ob.scored = True
                res.passed += 1
                # near miss is judged only on the tick the obstacle is passed
                if abs(plane.center_y - ob.gap_center) <= NEAR_MISS_PX:
                    ob.near_scored = True
                    res.near_misses += 1

            if collides(plane, ob):
                res.hit = ob
                break

            if ob.right < OBSTACLE_RETIRE_X:
                del self.obstacles[i]
        return res
