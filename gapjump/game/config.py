# gapjump/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 60

# --- Player / walls ---
DIM = 50                    # player width & height, and wall width
WALL_GAP = 6 * DIM          # vertical opening between top and bottom segments
PLAYER_X_FRAC = 0.2         # player x = floor(PLAYER_X_FRAC * viewport width)
PLAYER_START_Y = 10 * DIM

# --- Physics (per tick, not per second) ---
GRAVITY_ACCEL = 0.5
JUMP_VEL = -8.0
WALL_VEL = 2
WALL_TICKS = 200            # ticks between wall spawns

# --- Observation scaling ---
MAX_VY = 20.0               # |vy| mapped to 1.0 in observations

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (255, 255, 255)
COLOR_PLAYER = (0x55, 0xAA, 0x55)     # #5a5
COLOR_WALL = (0x55, 0x55, 0xAA)       # #55a
COLOR_WALL_HIT = (0xAA, 0x55, 0x55)   # #a55


@dataclass(frozen=True)
class Tuning:
    """Tunables fixed for the lifetime of one simulation."""
    dim: float = DIM
    wall_gap: float = WALL_GAP
    gravity_accel: float = GRAVITY_ACCEL
    jump_velocity: float = JUMP_VEL
    wall_velocity: float = WALL_VEL
    spawn_interval: int = WALL_TICKS
    player_x_frac: float = PLAYER_X_FRAC
    player_start_y: float = PLAYER_START_Y

    def __post_init__(self):
        if self.dim <= 0:
            raise ValueError(f"dim must be > 0, got {self.dim}")
        if self.wall_gap < 0:
            raise ValueError(f"wall_gap must be >= 0, got {self.wall_gap}")
        if self.wall_velocity <= 0:
            raise ValueError(f"wall_velocity must be > 0, got {self.wall_velocity}")
        if self.spawn_interval < 0:
            raise ValueError(f"spawn_interval must be >= 0, got {self.spawn_interval}")
        if not 0.0 <= self.player_x_frac <= 1.0:
            raise ValueError(f"player_x_frac must be in [0, 1], got {self.player_x_frac}")


DEFAULT_TUNING = Tuning()
