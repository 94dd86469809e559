# src/flight/modes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ModeProfile:
    """
    Tuning bundle picked on the menu. Values are per fixed tick
    (gravity, impulse, speeds) or milliseconds (spawn interval).
    """
    name: str
    gravity: float
    flap_impulse: float
    base_scroll_speed: float
    gap_min: float
    gap_max: float
    spawn_every_ms: float
    wind_strength: float = 0.0
    score_factor: float = 1.0


ARCADE = ModeProfile(
    name="ARCADE",
    gravity=0.36,
    flap_impulse=-7.4,
    base_scroll_speed=2.5,
    gap_min=175,
    gap_max=200,
    spawn_every_ms=1600,
    score_factor=1.0,
)

PRO = ModeProfile(
    name="PRO",
    gravity=0.41,
    flap_impulse=-7.8,
    base_scroll_speed=3.1,
    gap_min=155,
    gap_max=180,
    spawn_every_ms=1600,
    score_factor=1.4,
)

MODES: Dict[str, ModeProfile] = {m.name: m for m in (ARCADE, PRO)}
DEFAULT_MODE = PRO


def get_mode(name: str) -> ModeProfile:
    try:
        return MODES[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown mode {name!r} (expected one of {sorted(MODES)})") from None


def toggled(mode: ModeProfile) -> ModeProfile:
    """PRO <-> ARCADE."""
    return ARCADE if mode is PRO else PRO
