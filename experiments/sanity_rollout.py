# /experiments/sanity_rollout.py
"""
Fly a couple of throwaway pilots through FlightEnv and tabulate how far
each one gets, so regressions in physics or obstacle spawning show up as
a shift in the score / survival columns.

Pilots:
  random   - presses flap with a fixed probability (seeded per episode)
  chaser   - flaps whenever the plane sinks below the next gap centre

Examples (from repo root):
  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --pilot chaser --first-seed 500 --episodes 5 --mode ARCADE
  python -m experiments.sanity_rollout --pilot random --max-decisions 300 --csv /tmp/flights.csv
"""

from __future__ import annotations
import argparse
import csv
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Callable, Dict, Optional

import numpy as np

from src.env.flight_env import FlightEnv
from src.flight.config import FPS, HEIGHT, PLANE_H
from src.flight.modes import MODES

Pilot = Callable[[np.ndarray], int]


def random_pilot(episode_seed: int, flap_prob: float = 0.15) -> Pilot:
    rng = np.random.RandomState(10_000 + episode_seed)

    def decide(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flap_prob)
    return decide


def chaser_pilot(episode_seed: int, margin_px: float = 18.0) -> Pilot:
    """Flap when the plane's centre sits `margin_px` below the gap centre and is not climbing."""
    def decide(obs: np.ndarray) -> int:
        plane_centre = float(obs[0]) * (HEIGHT - PLANE_H) + PLANE_H * 0.5
        gap_centre = (float(obs[3]) + float(obs[4])) * 0.5 * HEIGHT
        return int(obs[1] >= 0.0 and plane_centre > gap_centre + margin_px)
    return decide


PILOTS: Dict[str, Callable[[int], Pilot]] = {
    "random": random_pilot,
    "chaser": chaser_pilot,
}


@dataclass
class FlightSummary:
    pilot: str
    mode: str
    seed: int
    frame_skip: int
    decisions: int
    seconds_flown: float
    total_reward: float
    score: int
    near_miss: int
    crashed: bool
    timed_out: bool
    death_cause: str


def fly(pilot_name: str, seed: int, mode: str, frame_skip: int, max_decisions: int) -> FlightSummary:
    pilot = PILOTS[pilot_name](seed)
    env = FlightEnv(frame_skip=frame_skip, mode=mode)
    total = 0.0
    decisions = 0
    crashed = timed_out = False
    info: Dict = {}
    try:
        obs, info = env.reset(seed=seed)
        while decisions < max_decisions and not (crashed or timed_out):
            obs, reward, crashed, timed_out, info = env.step(pilot(obs))
            total += float(reward)
            decisions += 1
    finally:
        env.close()

    cause: Optional[str] = info.get("death_cause")
    return FlightSummary(
        pilot=pilot_name, mode=mode, seed=seed, frame_skip=frame_skip,
        decisions=decisions,
        seconds_flown=round(decisions * frame_skip / FPS, 2),
        total_reward=round(total, 1),
        score=int(info.get("score", 0)),
        near_miss=int(info.get("near_miss", 0)),
        crashed=bool(crashed), timed_out=bool(timed_out),
        death_cause=cause or "",
    )


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Tabulate scripted flights through FlightEnv")
    ap.add_argument("--pilot", action="append", choices=sorted(PILOTS),
                    help="Pilot to fly; repeat for several (default: every pilot)")
    ap.add_argument("--mode", default="PRO", choices=sorted(MODES))
    ap.add_argument("--first-seed", type=int, default=101,
                    help="Seed of the first flight; later flights count up from it")
    ap.add_argument("--episodes", type=int, default=20,
                    help="Flights per pilot")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Physics ticks between two pilot decisions")
    ap.add_argument("--max-decisions", type=int, default=10_000,
                    help="Stop a flight after this many decisions even if still airborne")
    ap.add_argument("--csv", type=Path, default=Path("experiments/runs/flights.csv"),
                    help="Where to write one row per flight")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    pilots = args.pilot or sorted(PILOTS)
    seeds = range(args.first_seed, args.first_seed + args.episodes)
    args.csv.parent.mkdir(parents=True, exist_ok=True)

    print(f"{len(pilots)} pilot(s) x {len(seeds)} flights in {args.mode}, "
          f"{FPS / max(1, args.frame_skip):.0f} decisions/s -> {args.csv}")

    with args.csv.open("w", newline="") as f:
        out = csv.DictWriter(f, fieldnames=[fl.name for fl in fields(FlightSummary)])
        out.writeheader()
        for name in pilots:
            for seed in seeds:
                s = fly(name, seed, args.mode, args.frame_skip, args.max_decisions)
                out.writerow(asdict(s))
                end = s.death_cause or ("time limit" if s.timed_out else "decision cap")
                print(f"  {name:>6} #{seed}: score {s.score:3d} (+{s.near_miss} near) "
                      f"over {s.seconds_flown:6.2f}s, ended by {end}")

    print("done")


if __name__ == "__main__":
    main()
