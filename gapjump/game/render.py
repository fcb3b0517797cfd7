# gapjump/game/render.py
from __future__ import annotations
import pygame
from .config import COLOR_BG, COLOR_PLAYER, COLOR_WALL, COLOR_WALL_HIT
from .simulation import Snapshot


def draw_snapshot(surf: pygame.Surface, snap: Snapshot):
    """Clear, draw every wall segment (red when touched), then the player."""
    surf.fill(COLOR_BG)
    for seg in snap.segments():
        if seg.rect.h <= 0:
            continue
        color = COLOR_WALL_HIT if seg.hit else COLOR_WALL
        pygame.draw.rect(surf, color, seg.rect.to_pygame())
    pygame.draw.rect(surf, COLOR_PLAYER, snap.player.to_pygame())
