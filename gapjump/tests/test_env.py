"""
Tests for GapJumpEnv (Gymnasium environment): API contract, determinism,
termination and rendering.
"""
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from typing import List, Tuple

import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from gapjump.env.gj_env import GapJumpEnv


@pytest.fixture
def env():
    e = GapJumpEnv(frame_skip=4)
    yield e
    e.close()


def test_api_check():
    env = GapJumpEnv(frame_skip=4)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_reset_obs_in_space(env):
    obs, info = env.reset(seed=123)
    assert env.observation_space.contains(obs)
    assert info["seed"] == 123


def test_smoke_random_actions(env):
    obs, _ = env.reset(seed=123)
    for t in range(300):
        obs, r, term, trunc, info = env.step(env.action_space.sample())
        assert isinstance(r, float)
        assert env.observation_space.contains(obs), f"step {t}: observation out of bounds"
        if term or trunc:
            break


def test_determinism():
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = GapJumpEnv(frame_skip=4)
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(300)]
    t1 = rollout(7, action_seq)
    t2 = rollout(7, action_seq)
    assert len(t1) == len(t2)
    for (o1, r1, te1, tr1), (o2, r2, te2, tr2) in zip(t1, t2):
        assert np.array_equal(o1, o2)
        assert (r1, te1, tr1) == (r2, te2, tr2)


def test_idle_player_collides_and_terminates(env):
    # Resting on the ground always overlaps the bottom segment of the first wall.
    env.reset(seed=1)
    for _ in range(200):
        obs, r, term, trunc, info = env.step(0)
        if term:
            break
    assert term and not trunc
    assert r == -1.0
    assert info["hit"] is True


def test_collision_can_be_visual_only():
    env = GapJumpEnv(frame_skip=4, end_on_collision=False, time_limit_seconds=None)
    try:
        env.reset(seed=1)
        hits = 0
        for _ in range(150):
            _, r, term, trunc, info = env.step(0)
            assert not term and not trunc
            assert r == 1.0
            hits += int(info["hit"])
        assert hits > 0
    finally:
        env.close()


def test_time_limit_truncates():
    env = GapJumpEnv(frame_skip=4, end_on_collision=False, time_limit_seconds=1.0)
    try:
        env.reset(seed=1)
        steps = 0
        while True:
            _, _, term, trunc, info = env.step(0)
            steps += 1
            if term or trunc:
                break
        assert trunc and not term
        assert steps == 15
        assert info["tick"] == 60
    finally:
        env.close()


def test_step_before_reset_fails(env):
    with pytest.raises(AssertionError):
        env.step(0)


def test_invalid_action_fails(env):
    env.reset(seed=0)
    with pytest.raises(AssertionError):
        env.step(2)


def test_rgb_array_render():
    env = GapJumpEnv(render_mode="rgb_array", width=320, height=400)
    try:
        env.reset(seed=3)
        env.step(0)
        frame = env.render()
        assert isinstance(frame, np.ndarray)
        assert frame.shape == (400, 320, 3) and frame.dtype == np.uint8
    finally:
        env.close()
