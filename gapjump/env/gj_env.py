# gapjump/env/gj_env.py
from __future__ import annotations
import logging
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from gapjump.game.config import WIDTH, HEIGHT, FPS, Tuning, DEFAULT_TUNING
from gapjump.game.render import draw_snapshot
from gapjump.game.simulation import Simulation, Snapshot
from gapjump.env.observations import build_observation, OBS_SIZE

logger = logging.getLogger(__name__)


class GapJumpEnv(gym.Env):
    """
    gapjump Gymnasium environment (vector observations).
    - One simulation tick per frame; the agent acts every `frame_skip` ticks.
    - Actions: 0 = NOOP, 1 = JUMP (applied once at the start of a decision).
    - Observation: shape (5,), float32, see observations.build_observation.
    - The game itself only highlights collisions; `end_on_collision`
      turns a hit into episode termination for training.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 end_on_collision: bool = True,
                 width: int = WIDTH,
                 height: int = HEIGHT,
                 tuning: Tuning = DEFAULT_TUNING):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.end_on_collision = bool(end_on_collision)
        self.width = int(width)
        self.height = int(height)
        self.tuning = tuning

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.sim: Optional[Simulation] = None
        self.snap: Optional[Snapshot] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Explicit seed -> reproducible walls; otherwise draw one from np_random.
        sim_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        self.sim = Simulation(seed=sim_seed, tuning=self.tuning)
        self.snap = self.sim.snapshot(self.width, self.height)
        self.timestep = 0
        self.current_seed = sim_seed
        logger.debug("reset seed=%s", sim_seed)

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), {"seed": self.current_seed, "tick": 0}

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "call reset() before step()"

        if int(action) == 1:
            self.sim.jump()

        hit = False
        for _ in range(self.frame_skip):
            self.snap = self.sim.advance(self.width, self.height)
            if self.snap.any_hit:
                hit = True
                if self.end_on_collision:
                    break

        self.timestep += 1
        terminated = hit and self.end_on_collision
        truncated = (self.time_limit_decisions is not None
                     and self.timestep >= self.time_limit_decisions)
        reward = -1.0 if terminated else 1.0
        if terminated:
            logger.debug("collision at tick %d (seed=%s)", self.sim.tick, self.current_seed)

        info = {
            "tick": self.sim.tick,
            "seed": self.current_seed,
            "hit": hit,
            "wall_count": len(self.snap.walls),
        }

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.snap is not None
        return build_observation(self.snap, dim=self.tuning.dim)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.snap is None:
            return None

        if self.render_mode == "human":
            if self.screen is None:
                pygame.init()
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption("gapjump - Gym Env")
                self.clock = pygame.time.Clock()
            pygame.event.pump()
            draw_snapshot(self.screen, self.snap)
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # rgb_array: off-screen surface, no display needed
        if self.screen is None:
            self.screen = pygame.Surface((self.width, self.height))
        draw_snapshot(self.screen, self.snap)
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def close(self):
        if self.screen is not None and self.render_mode == "human":
            pygame.display.quit()
            pygame.quit()
        self.screen = None
        self.clock = None
