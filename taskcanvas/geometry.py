"""Box geometry for canvas nodes and connections."""

from __future__ import annotations

import math
from typing import Tuple

from .constants import ANCHOR_EPSILON, GRID_SPACING_X, GRID_SPACING_Y, NODE_HEIGHT, NODE_WIDTH
from .types import Task

Point = Tuple[float, float]


def node_center(task: Task) -> Point:
    return (task.x + NODE_WIDTH / 2, task.y + NODE_HEIGHT / 2)


def edge_anchor(
    x: float,
    y: float,
    target_x: float,
    target_y: float,
    width: float = NODE_WIDTH,
    height: float = NODE_HEIGHT,
) -> Point:
    """Return where the ray from a box's center toward a target leaves the box.

    Args:
        x: Left edge of the box.
        y: Bottom edge of the box.
        target_x: X coordinate the ray points at.
        target_y: Y coordinate the ray points at.
        width: Box width.
        height: Box height.

    Returns:
        The boundary point, or the center when the target sits on it.
    """
    half_w = width / 2
    half_h = height / 2
    cx = x + half_w
    cy = y + half_h
    dx = target_x - cx
    dy = target_y - cy

    if abs(dx) < ANCHOR_EPSILON and abs(dy) < ANCHOR_EPSILON:
        return (cx, cy)

    slope_to_corner = half_h / half_w
    slope = abs(dy / dx) if abs(dx) > ANCHOR_EPSILON else math.inf

    if slope < slope_to_corner:
        # Left or right edge
        sign_x = 1.0 if dx >= 0 else -1.0
        return (cx + sign_x * half_w, cy + dy * (half_w / abs(dx)))

    # Top or bottom edge
    sign_y = 1.0 if dy >= 0 else -1.0
    return (cx + dx * (half_h / abs(dy)), cy + sign_y * half_h)


def task_anchor(task: Task, target_x: float, target_y: float) -> Point:
    return edge_anchor(task.x, task.y, target_x, target_y)


def connection_anchors(from_task: Task, to_task: Task) -> Tuple[Point, Point]:
    """Anchor both ends of a connection so the arrow spans border to border."""
    from_cx, from_cy = node_center(from_task)
    to_cx, to_cy = node_center(to_task)
    start = task_anchor(from_task, to_cx, to_cy)
    end = task_anchor(to_task, from_cx, from_cy)
    return start, end


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def grid_position(column: int, row: int) -> Point:
    return (column * GRID_SPACING_X, row * GRID_SPACING_Y)
