# gapjump/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from gapjump.game.config import MAX_VY, DIM
from gapjump.game.simulation import Snapshot, WallView

OBS_SIZE = 5


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_wall(snap: Snapshot) -> Optional[WallView]:
    """First wall (oldest first) whose right edge is still ahead of the player's left edge."""
    left = snap.player.left
    for wv in snap.walls:
        if wv.top.rect.right > left:
            return wv
    return None


def build_observation(snap: Snapshot, dim: float = DIM, vy_max: float = MAX_VY) -> np.ndarray:
    """
    Returns float32 (5,):
      [y_norm, vy_norm, next_wall_dx, gap_top, gap_bottom]
    - y_norm      : player top in [0, H - dim] -> [0, 1]
    - vy_norm     : vy clipped to [-vy_max, vy_max] -> [-1, 1]
    - next_wall_dx: (wall left - player right) / W, 0 while overlapping, 1 when no wall ahead
    - gap_top     : opening start / H  (0 when no wall ahead)
    - gap_bottom  : opening end / H    (1 when no wall ahead)
    """
    w, h = snap.viewport
    w = max(1.0, float(w))
    h = max(1.0, float(h))

    y_norm = _clamp01(snap.player.y / max(1.0, h - dim))
    vy_max = float(max(1.0, vy_max))
    vy_norm = max(-vy_max, min(snap.player_vy, vy_max)) / vy_max

    wv = next_wall(snap)
    if wv is None:
        dx, gap_top, gap_bottom = 1.0, 0.0, 1.0
    else:
        dx = _clamp01((wv.wall_x - snap.player.right) / w)
        gap_top = _clamp01(wv.top.rect.h / h)
        gap_bottom = _clamp01(wv.bottom.rect.y / h)

    return np.array([y_norm, vy_norm, dx, gap_top, gap_bottom], dtype=np.float32)
