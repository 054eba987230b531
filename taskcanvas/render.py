"""Frame rendering for the task canvas.

Connections are drawn first so they sit beneath the nodes, then the node
boxes, then the text on top.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence, Tuple

from .constants import (
    COLOR_ARROW,
    COLOR_BADGE,
    COLOR_CONNECT_SRC,
    COLOR_NODE,
    COLOR_RICH_BADGE,
    COLOR_SELECTED,
    MARKER_SIZE,
    NODE_HEIGHT,
    NODE_WIDTH,
    TITLE_INACTIVE,
    TITLE_LABEL,
    TITLE_SELECTING,
    VIEW_MARGIN,
)
from .geometry import connection_anchors, midpoint
from .model import CanvasModel
from .shapes import ArrowLine, Diamond, TaskBox
from .surface import BrailleSurface, RasterSurface, Surface
from .types import ConnectMode, EnteringLabel, SelectingTarget, Task

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float]


def viewport_bounds(model: CanvasModel, columns: int, rows: int) -> Tuple[Bounds, Bounds]:
    """Visible canvas window for a terminal area of ``columns`` x ``rows`` cells.

    Braille doubles the vertical resolution, so a row covers two units.
    """
    x_min = model.panX - VIEW_MARGIN
    y_min = model.panY - VIEW_MARGIN
    width = columns / model.zoom
    height = rows * 2.0 / model.zoom
    return (x_min, x_min + width), (y_min, y_min + height)


def mode_title(mode: ConnectMode) -> str:
    if isinstance(mode, SelectingTarget):
        return TITLE_SELECTING
    if isinstance(mode, EnteringLabel):
        return f"{TITLE_LABEL}{mode.label_buffer} "
    return TITLE_INACTIVE


def node_color(index: int, task: Task, model: CanvasModel) -> str:
    # The connect source wins over the plain selection
    if model.isConnectSource(task.id):
        return COLOR_CONNECT_SRC
    if index == model.selectedNode:
        return COLOR_SELECTED
    return COLOR_NODE


def draw_connections(surface: Surface, tasks: Sequence[Task], model: CanvasModel) -> int:
    """Draw every connection whose endpoints are both present; return the count."""
    by_id: Dict[str, Task] = {task.id: task for task in tasks}
    marked = model.deletableConnection(tasks)
    drawn = 0
    for conn in model.connections:
        from_task = by_id.get(conn.from_task_id)
        to_task = by_id.get(conn.to_task_id)
        if from_task is None or to_task is None:
            logger.debug("Skipping connection %s with a missing endpoint", conn.id)
            continue

        (x1, y1), (x2, y2) = connection_anchors(from_task, to_task)
        ArrowLine(x1, y1, x2, y2, COLOR_ARROW).paint(surface)
        mid_x, mid_y = midpoint((x1, y1), (x2, y2))
        if marked is not None and conn.id == marked.id:
            Diamond(mid_x, mid_y, MARKER_SIZE, COLOR_SELECTED).paint(surface)
        if conn.label:
            surface.print_text(mid_x, mid_y, conn.label, COLOR_ARROW, centered=True)
        drawn += 1
    return drawn


def draw_nodes(surface: Surface, tasks: Sequence[Task], model: CanvasModel) -> None:
    for idx, task in enumerate(tasks):
        TaskBox(task.x, task.y, NODE_WIDTH, NODE_HEIGHT, node_color(idx, task, model)).paint(surface)


def draw_labels(surface: Surface, tasks: Sequence[Task], model: CanvasModel) -> None:
    max_chars = max(0, int(NODE_WIDTH) - 2)
    for idx, task in enumerate(tasks):
        color = node_color(idx, task, model)
        surface.print_text(task.x + 1.0, task.y + NODE_HEIGHT - 2.0, task.title[:max_chars], color)
        surface.print_text(task.x + 1.0, task.y + 1.0, task.status.value, COLOR_BADGE)
        if task.has_rich_content:
            surface.print_text(task.x + NODE_WIDTH - 5.0, task.y + 1.0, "HTML", COLOR_RICH_BADGE)


def draw_canvas(surface: Surface, tasks: Sequence[Task], model: CanvasModel) -> Surface:
    draw_connections(surface, tasks, model)
    draw_nodes(surface, tasks, model)
    draw_labels(surface, tasks, model)
    return surface


def render_braille(tasks: Sequence[Task], model: CanvasModel, columns: int, rows: int) -> BrailleSurface:
    """Render one frame into a terminal area of ``columns`` x ``rows`` cells."""
    x_bounds, y_bounds = viewport_bounds(model, columns, rows)
    surface = BrailleSurface(columns, rows, x_bounds, y_bounds)
    draw_canvas(surface, tasks, model)
    return surface


def render_raster(
    tasks: Sequence[Task],
    model: CanvasModel,
    width: int,
    height: int,
    density: float = 1.0,
) -> RasterSurface:
    """Render one frame into an image covering ``width`` x ``height`` cells.

    The image shows the same window as ``render_braille`` with the same
    arguments, at ``density`` pixels per canvas unit on both axes. Titles
    are drawn with QPainter, so a QGuiApplication must exist first.
    """
    x_bounds, y_bounds = viewport_bounds(model, width, height)
    # A cell row spans two canvas units
    surface = RasterSurface(width, height * 2, x_bounds, y_bounds, density=density)
    draw_canvas(surface, tasks, model)
    return surface
