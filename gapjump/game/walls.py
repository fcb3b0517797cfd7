# gapjump/game/walls.py
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
from .collision import Rect
from .config import Tuning, DEFAULT_TUNING

logger = logging.getLogger(__name__)


@dataclass
class Wall:
    """
    A wall pair sharing one x. gap_ratio (0 <= r < 1) places the opening
    inside the gap-free vertical space; the segment heights themselves are
    derived from the current viewport height every tick.
    """
    gap_ratio: float
    x: float


def gap_bounds(gap_ratio: float, viewport_height: float, wall_gap: float) -> Tuple[int, float]:
    """Returns (top_height, bottom_y): where the opening starts and ends."""
    top_h = math.floor((viewport_height - wall_gap) * gap_ratio)
    return top_h, top_h + wall_gap


def wall_segments(wall: Wall, viewport_height: float,
                  tuning: Tuning = DEFAULT_TUNING) -> Tuple[Rect, Rect]:
    """Top and bottom segment rects. Heights are clamped to >= 0 for tiny viewports."""
    top_h, bot_y = gap_bounds(wall.gap_ratio, viewport_height, tuning.wall_gap)
    top = Rect(wall.x, 0, tuning.dim, max(0, top_h))
    bottom = Rect(wall.x, bot_y, tuning.dim, max(0, viewport_height - bot_y))
    return top, bottom


class WallStream:
    """
    Endless stream of walls entering from the right edge.

    The countdown starts at the spawn threshold so the very first tick
    spawns. After a spawn it restarts at 0 and counts up one per tick.
    """
    def __init__(self, rng: random.Random, tuning: Tuning = DEFAULT_TUNING,
                 walls: Optional[Iterable[Wall]] = None,
                 countdown: Optional[int] = None):
        self.rng = rng
        self.tuning = tuning
        self.walls: List[Wall] = [Wall(w.gap_ratio, w.x) for w in walls] if walls is not None else []
        if countdown is None:
            countdown = tuning.spawn_interval
        if not 0 <= countdown <= tuning.spawn_interval:
            raise ValueError(f"spawn countdown must be in [0, {tuning.spawn_interval}], got {countdown}")
        self.countdown = int(countdown)

    def spawn_if_due(self, viewport_width: float) -> Optional[Wall]:
        if self.countdown == self.tuning.spawn_interval:
            wall = Wall(gap_ratio=self.rng.random(), x=viewport_width)
            self.walls.append(wall)
            self.countdown = 0
            logger.debug("spawned wall x=%s gap_ratio=%.3f (%d live)",
                         wall.x, wall.gap_ratio, len(self.walls))
            return wall
        self.countdown += 1
        return None

    def cull(self) -> int:
        """Drop walls fully off-screen to the left, keeping the order of the rest."""
        limit = -self.tuning.dim
        if all(w.x > limit for w in self.walls):
            return 0
        before = len(self.walls)
        self.walls = [w for w in self.walls if w.x > limit]
        removed = before - len(self.walls)
        logger.debug("culled %d wall(s)", removed)
        return removed

    def scroll(self):
        for wall in self.walls:
            wall.x -= self.tuning.wall_velocity
