# gapjump/game/collision.py
"""
Axis-aligned rectangle overlap.

Intervals are closed-open: two rectangles that only share an edge do not
overlap.
"""
from __future__ import annotations
from dataclasses import dataclass
import pygame


@dataclass(frozen=True)
class Rect:
    """Float rectangle (top-left origin, y grows downwards)."""
    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def to_pygame(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))


def overlaps_1d(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    """Segments [a_start, a_end) and [b_start, b_end) intersect (expects start <= end)."""
    return b_start < a_end if a_start < b_start else a_start < b_end


def overlaps_2d(ax: float, ay: float, aw: float, ah: float,
                bx: float, by: float, bw: float, bh: float) -> bool:
    return (overlaps_1d(ax, ax + aw, bx, bx + bw)
            and overlaps_1d(ay, ay + ah, by, by + bh))


def rect_overlaps(a: Rect, b: Rect) -> bool:
    return overlaps_2d(a.x, a.y, a.w, a.h, b.x, b.y, b.w, b.h)
