"""Layout algorithms for the canvas.

Grid placement of unplaced tasks by status column, plus the grid used when
importing a flowchart.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from PySide6.QtCore import Signal

from .constants import FLOW_COLUMN_HEIGHT
from .geometry import grid_position
from .types import FlowDirection, Task, TaskStatus


def is_unplaced(task: Task) -> bool:
    return task.x == 0.0 and task.y == 0.0


def auto_layout(tasks: Sequence[Task]) -> int:
    """Place every task still at the origin on its status column's grid.

    The row counter advances for every task in a column, placed or not, so
    already positioned tasks keep their slot and gaps may appear.

    Returns:
        Number of tasks that were moved.
    """
    placed = 0
    for column, status in enumerate(TaskStatus.columns()):
        row = 0
        for task in tasks:
            if task.status != status:
                continue
            if is_unplaced(task):
                task.x, task.y = grid_position(column, row)
                placed += 1
            row += 1
    return placed


def flow_positions(count: int, direction: FlowDirection) -> List[Tuple[float, float]]:
    """Grid positions for imported flowchart nodes.

    Left-right charts go in a single row; top-down charts fill columns of
    three from the top.
    """
    positions = []
    for i in range(count):
        if direction == FlowDirection.LEFT_RIGHT:
            positions.append(grid_position(i, 0))
        else:
            positions.append(grid_position(i // FLOW_COLUMN_HEIGHT, i % FLOW_COLUMN_HEIGHT))
    return positions


class LayoutMixin:
    """Mixin providing layout operations for CanvasModel."""

    # Signals (defined in CanvasModel)
    tasksMoved: Signal

    def autoLayout(self, tasks: Sequence[Task]) -> int:
        """Lay out unplaced tasks and notify listeners when anything moved."""
        placed = auto_layout(tasks)
        if placed:
            self.tasksMoved.emit()
        return placed
