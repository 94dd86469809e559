# src/tests/flight_env_tests.py
"""
Quick tests for FlightEnv (Gymnasium environment).

Usage (from repo root):
  python -m src.tests.flight_env_tests
  python -m src.tests.flight_env_tests --render
  python -m src.tests.flight_env_tests --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from src.env.flight_env import FlightEnv
from src.env.observations import build_observation
from src.flight.level import Obstacle
from src.flight.player import Plane


def api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlightEnv(frame_skip=frame_skip)
    try:
        check_env(env)
    finally:
        env.close()


def smoke_test(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlightEnv(frame_skip=frame_skip)
    env.action_space.seed(seed)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def determinism_test(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlightEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")


def noop_episode_ends_in_crash(seed: int = 7) -> None:
    """Never flapping must end on the floor with a -1 reward."""
    env = FlightEnv(frame_skip=4)
    try:
        env.reset(seed=seed)
        for _ in range(500):
            obs, r, term, trunc, info = env.step(0)
            if term or trunc:
                break
        assert term and not trunc
        assert r == -1.0
        assert info["death_cause"] == "bounds"
    finally:
        env.close()


def time_limit_truncates(seed: int = 3) -> None:
    env = FlightEnv(frame_skip=60, time_limit_seconds=1.0)
    try:
        env.reset(seed=seed)
        obs, r, term, trunc, info = env.step(0)
        assert not term and trunc, "One 60-tick decision is the whole 1 s budget"
        assert info["timestep"] == 1
    finally:
        env.close()


def observation_layout() -> None:
    plane = Plane(y=280.0, vy=0.0)
    empty = build_observation(plane, [], 3.1)
    assert empty.shape == (6,) and empty.dtype == np.float32
    assert tuple(empty[2:5]) == (1.0, 0.0, 1.0), "No obstacle ahead -> open sentinels"

    ob = Obstacle(x=200.0, top=120.0, gap=180.0)
    behind = Obstacle(x=-90.0, top=0.0, gap=10.0)
    obs = build_observation(plane, [behind, ob], 3.1)
    assert np.isclose(obs[3], 120.0 / 600.0) and np.isclose(obs[4], 300.0 / 600.0)
    assert 0.0 < obs[2] < 1.0


def render_rgb_array() -> None:
    env = FlightEnv(render_mode="rgb_array")
    try:
        env.reset(seed=1)
        env.step(1)
        frame = env.render()
        assert frame.shape == (600, 400, 3) and frame.dtype == np.uint8
    finally:
        env.close()


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = FlightEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            obs, r, term, trunc, info = env.step(0)
            if term or trunc:
                break
    finally:
        env.close()


# pytest entry points
def test_api_check():
    api_check()

def test_smoke():
    smoke_test()

def test_determinism():
    determinism_test()

def test_noop_episode_ends_in_crash():
    noop_episode_ends_in_crash()

def test_time_limit_truncates():
    time_limit_truncates()

def test_observation_layout():
    observation_layout()

def test_render_rgb_array():
    render_rgb_array()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim ticks per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            api_check(frame_skip=args.frame_skip)
            print("✓ API check ok")
        if not args.no_smoke:
            smoke_test(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Smoke test ok")
        if not args.no_determinism:
            determinism_test(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Determinism ok")
        noop_episode_ends_in_crash()
        time_limit_truncates()
        observation_layout()
        print("✓ Episode edges ok")
        if args.render:
            render_rgb_array()
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Render demo finished")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
