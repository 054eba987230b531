"""SVG export of the canvas."""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .constants import COLOR_ARROW, COLOR_BADGE, COLOR_NODE, NODE_HEIGHT, NODE_WIDTH, STATUS_COLORS
from .geometry import connection_anchors
from .types import Task, TaskConnection

logger = logging.getLogger(__name__)

SVG_SCALE = 12.0
SVG_PADDING = 60.0
SVG_HEADER = 40.0
SVG_BACKGROUND = "#1a1a2e"
SVG_NODE_FILL = "#16213e"
SVG_TEXT = "#e0e0e0"
TITLE_CHARS = 22


def _short_title(title: str) -> str:
    if len(title) > TITLE_CHARS:
        return title[:TITLE_CHARS - 1] + "~"
    return title


def canvas_to_svg(
    tasks: Sequence[Task],
    connections: Sequence[TaskConnection],
    title: str = "",
) -> str:
    """Return SVG markup for the tasks and the connections between them.

    Canvas y grows downward in the SVG, matching the board's top-to-bottom
    reading order. Connections with a missing endpoint are left out.
    """
    if tasks:
        min_x = min(task.x for task in tasks)
        min_y = min(task.y for task in tasks)
        max_x = max(task.x + NODE_WIDTH for task in tasks)
        max_y = max(task.y + NODE_HEIGHT for task in tasks)
    else:
        min_x, min_y, max_x, max_y = 0.0, 0.0, 200.0, 100.0

    width = (max_x - min_x) * SVG_SCALE + SVG_PADDING * 2
    height = (max_y - min_y) * SVG_SCALE + SVG_PADDING * 2 + SVG_HEADER
    ox = -min_x * SVG_SCALE + SVG_PADDING
    oy = -min_y * SVG_SCALE + SVG_PADDING + SVG_HEADER

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {width:g} {height:g}">',
        f'<rect width="100%" height="100%" fill="{SVG_BACKGROUND}"/>',
    ]
    if title:
        parts.append(
            f'<text x="{width / 2:g}" y="30" text-anchor="middle" font-family="monospace" '
            f'font-size="18" fill="{COLOR_ARROW}" font-weight="bold">{escape(title)}</text>'
        )
    parts.append(
        '<defs><marker id="arrowhead" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">'
        f'<polygon points="0 0, 10 3.5, 0 7" fill="{COLOR_ARROW}"/></marker></defs>'
    )

    by_id: Dict[str, Task] = {task.id: task for task in tasks}
    for conn in connections:
        from_task = by_id.get(conn.from_task_id)
        to_task = by_id.get(conn.to_task_id)
        if from_task is None or to_task is None:
            continue
        (ax, ay), (bx, by) = connection_anchors(from_task, to_task)
        x1, y1 = ax * SVG_SCALE + ox, ay * SVG_SCALE + oy
        x2, y2 = bx * SVG_SCALE + ox, by * SVG_SCALE + oy
        parts.append(
            f'<line x1="{x1:g}" y1="{y1:g}" x2="{x2:g}" y2="{y2:g}" stroke="{COLOR_ARROW}" '
            'stroke-width="2" marker-end="url(#arrowhead)"/>'
        )
        if conn.label:
            parts.append(
                f'<text x="{(x1 + x2) / 2:g}" y="{(y1 + y2) / 2 - 5:g}" text-anchor="middle" '
                f'font-family="monospace" font-size="10" fill="{COLOR_BADGE}">{escape(conn.label)}</text>'
            )

    for task in tasks:
        x = task.x * SVG_SCALE + ox
        y = task.y * SVG_SCALE + oy
        w = NODE_WIDTH * SVG_SCALE
        h = NODE_HEIGHT * SVG_SCALE
        badge = STATUS_COLORS.get(task.status, "#888888")
        parts.append(
            f'<rect x="{x:g}" y="{y:g}" width="{w:g}" height="{h:g}" rx="6" ry="6" '
            f'fill="{SVG_NODE_FILL}" stroke="{COLOR_NODE}" stroke-width="2"/>'
        )
        parts.append(f'<rect x="{x + 6:g}" y="{y + 6:g}" width="8" height="8" rx="4" fill="{badge}"/>')
        parts.append(
            f'<text x="{x + 20:g}" y="{y + 16:g}" font-family="monospace" font-size="13" '
            f'fill="{SVG_TEXT}" font-weight="bold">{escape(_short_title(task.title))}</text>'
        )
        parts.append(
            f'<text x="{x + 8:g}" y="{y + h - 10:g}" font-family="monospace" font-size="10" '
            f'fill="{COLOR_BADGE}">[{task.status.value}]</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def export_canvas_svg(
    path: Union[str, Path],
    tasks: Sequence[Task],
    connections: Sequence[TaskConnection],
    title: str = "",
) -> Optional[Path]:
    """Write the canvas as an SVG file.

    Returns:
        The written path, or None if the file could not be written.
    """
    target = Path(path)
    try:
        target.write_text(canvas_to_svg(tasks, connections, title), encoding="utf-8")
    except OSError as exc:
        logger.error("Could not write SVG to %s: %s", target, exc)
        return None
    logger.info("Canvas exported to %s", target)
    return target
