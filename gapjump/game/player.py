# gapjump/game/player.py
from __future__ import annotations
import math
from dataclasses import dataclass
from .collision import Rect


@dataclass
class Player:
    """
    Falling square. Only the vertical state is owned here:
    - y  : top edge, 0 is the top of the viewport
    - vy : pixels per tick, positive means falling
    x is derived from the viewport width on every tick and never stored.
    """
    y: float
    vy: float = 0.0

    def jump(self, jump_velocity: float):
        """Set the vertical velocity outright. Works airborne or grounded."""
        self.vy = jump_velocity

    def update_physics(self, max_y: float, gravity_accel: float):
        """Move by vy, stop at the ceiling (y=0) or ground (max_y), then add gravity."""
        self.y += self.vy
        if self.y <= 0:
            self.y = 0.0
            self.vy = 0.0
        elif self.y > max_y:
            self.y = max_y
            self.vy = 0.0
        # Gravity accumulates even on a frame that just clamped.
        self.vy += gravity_accel


def player_x(viewport_width: float, x_frac: float) -> int:
    return math.floor(x_frac * viewport_width)


def player_rect(player: Player, viewport_width: float, dim: float, x_frac: float) -> Rect:
    return Rect(player_x(viewport_width, x_frac), player.y, dim, dim)
