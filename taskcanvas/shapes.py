"""Primitive shapes rasterized onto a drawing surface.

Every shape is sampled into logical canvas points at a density that grows
with its size, then each point is projected through the surface. Points
outside the visible window are dropped by the surface.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

from .constants import ARROW_HEAD_LENGTH, ARROW_HEAD_RATIO, ARROW_SPREAD, COLOR_ARROW, COLOR_NODE

if TYPE_CHECKING:
    from .surface import Surface

Point = Tuple[float, float]


def sample_segment(x1: float, y1: float, x2: float, y2: float, steps: int) -> List[Point]:
    """Return ``steps + 1`` evenly spaced points from start to end inclusive."""
    if steps <= 0:
        return [(x1, y1)]
    dx = x2 - x1
    dy = y2 - y1
    return [(x1 + dx * i / steps, y1 + dy * i / steps) for i in range(steps + 1)]


class Shape:
    """Base class for shapes that paint themselves point by point."""

    color: str

    def points(self) -> List[Point]:
        raise NotImplementedError

    def paint(self, surface: "Surface") -> int:
        """Paint the shape and return how many points landed on the surface."""
        painted = 0
        for x, y in self.points():
            cell = surface.get_point(x, y)
            if cell is None:
                continue
            surface.paint(cell[0], cell[1], self.color)
            painted += 1
        return painted


@dataclass
class TaskBox(Shape):
    """Rectangle outline of a task node, anchored at its lower-left corner."""

    x: float
    y: float
    width: float
    height: float
    color: str = COLOR_NODE

    def points(self) -> List[Point]:
        left, right = self.x, self.x + self.width
        bottom, top = self.y, self.y + self.height
        steps_h = int(self.width * 2)
        steps_v = int(self.height * 2)
        result = sample_segment(left, top, right, top, steps_h)
        result += sample_segment(left, bottom, right, bottom, steps_h)
        result += sample_segment(left, bottom, left, top, steps_v)
        result += sample_segment(right, bottom, right, top, steps_v)
        return result


@dataclass
class ArrowLine(Shape):
    """Straight line with a two-stroke arrowhead at the end point."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: str = COLOR_ARROW

    def points(self) -> List[Point]:
        dx = self.x2 - self.x1
        dy = self.y2 - self.y1
        length = math.hypot(dx, dy)
        if length < 0.001:
            return []

        result = sample_segment(self.x1, self.y1, self.x2, self.y2, int(length * 3))

        head_length = min(ARROW_HEAD_LENGTH, length * ARROW_HEAD_RATIO)
        angle = math.atan2(dy, dx)
        head_steps = int(head_length * 3)
        for sign in (-1.0, 1.0):
            a = angle + math.pi + sign * ARROW_SPREAD
            hx = self.x2 + head_length * math.cos(a)
            hy = self.y2 + head_length * math.sin(a)
            result += sample_segment(self.x2, self.y2, hx, hy, head_steps)
        return result


@dataclass
class Diamond(Shape):
    """Small diamond marker centered on a point."""

    cx: float
    cy: float
    size: float
    color: str = COLOR_ARROW

    def vertices(self) -> List[Point]:
        s = self.size
        return [
            (self.cx, self.cy + s),
            (self.cx + s, self.cy),
            (self.cx, self.cy - s),
            (self.cx - s, self.cy),
        ]

    def points(self) -> List[Point]:
        corners = self.vertices()
        steps = int(self.size * 4)
        result: List[Point] = []
        for i, (x1, y1) in enumerate(corners):
            x2, y2 = corners[(i + 1) % len(corners)]
            result += sample_segment(x1, y1, x2, y2, steps)
        return result
