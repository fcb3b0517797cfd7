# gapjump/game/simulation.py
"""
Per-frame simulation: gravity, wall spawning/scrolling/culling and the
collision flags the renderer needs.

One call to ``Simulation.advance`` is one tick. There is no internal clock:
the caller's frame cadence is the timestep, and every viewport-derived value
(player x, segment heights) is recomputed from the sizes passed in.
"""
from __future__ import annotations
import logging
import random
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from .collision import Rect, rect_overlaps
from .config import Tuning, DEFAULT_TUNING
from .player import Player, player_rect
from .walls import Wall, WallStream, wall_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WallSegment:
    rect: Rect
    hit: bool


@dataclass(frozen=True)
class WallView:
    wall_x: float
    gap_ratio: float
    top: WallSegment
    bottom: WallSegment


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame; holds no live state."""
    tick: int
    viewport: Tuple[float, float]
    player: Rect
    player_vy: float
    walls: Tuple[WallView, ...]

    def segments(self) -> Tuple[WallSegment, ...]:
        return tuple(seg for wv in self.walls for seg in (wv.top, wv.bottom))

    @property
    def any_hit(self) -> bool:
        return any(seg.hit for seg in self.segments())


def _hits(me: Rect, segment: Rect) -> bool:
    # A collapsed segment is not drawn, so it cannot be touched either.
    return segment.h > 0 and rect_overlaps(me, segment)


class Simulation:
    def __init__(self,
                 seed: Optional[int] = None,
                 tuning: Tuning = DEFAULT_TUNING,
                 player: Optional[Player] = None,
                 walls: Optional[Iterable[Wall]] = None,
                 spawn_countdown: Optional[int] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.tuning = tuning
        self.rng = random.Random(seed)
        if player is None:
            player = Player(y=float(tuning.player_start_y))
        self.player = Player(player.y, player.vy)
        self._stream = WallStream(self.rng, tuning, walls=walls, countdown=spawn_countdown)
        self.tick = 0
        self._lock = threading.Lock()
        logger.debug("simulation created seed=%s tuning=%s", seed, tuning)

    @property
    def walls(self) -> Tuple[Wall, ...]:
        """Copies of the live walls, oldest first."""
        return tuple(Wall(w.gap_ratio, w.x) for w in self._stream.walls)

    @property
    def spawn_countdown(self) -> int:
        return self._stream.countdown

    def jump(self):
        with self._lock:
            self.player.jump(self.tuning.jump_velocity)

    def advance(self, viewport_width: float, viewport_height: float) -> Snapshot:
        t = self.tuning
        with self._lock:
            self._stream.spawn_if_due(viewport_width)
            self._stream.cull()

            self.player.update_physics(viewport_height - t.dim, t.gravity_accel)
            self._stream.scroll()
            self.tick += 1

            return self._snapshot(viewport_width, viewport_height)

    def snapshot(self, viewport_width: float, viewport_height: float) -> Snapshot:
        """Current state without ticking (e.g. right after a reset)."""
        with self._lock:
            return self._snapshot(viewport_width, viewport_height)

    def _snapshot(self, viewport_width: float, viewport_height: float) -> Snapshot:
        t = self.tuning
        me = player_rect(self.player, viewport_width, t.dim, t.player_x_frac)
        views = []
        for wall in self._stream.walls:
            top, bottom = wall_segments(wall, viewport_height, t)
            views.append(WallView(
                wall_x=wall.x,
                gap_ratio=wall.gap_ratio,
                top=WallSegment(top, _hits(me, top)),
                bottom=WallSegment(bottom, _hits(me, bottom)),
            ))
        return Snapshot(
            tick=self.tick,
            viewport=(viewport_width, viewport_height),
            player=me,
            player_vy=self.player.vy,
            walls=tuple(views),
        )
