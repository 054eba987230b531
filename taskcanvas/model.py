"""Core CanvasModel class for the task canvas.

This module provides the Qt model holding the viewport, the node selection
and the connection drawing state. The task list itself belongs to the
caller and is passed into each operation that needs it.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

from PySide6.QtCore import Property, QObject, Signal, Slot

from .connect import ConnectMixin
from .constants import DEFAULT_ZOOM, ZOOM_MAX, ZOOM_MIN, ZOOM_STEP
from .layout import LayoutMixin
from .types import ConnectMode, Task, TaskConnection


def clamp_zoom(value: float) -> float:
    return max(ZOOM_MIN, min(ZOOM_MAX, value))


def _float_or(value: Any, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


class CanvasModel(
    ConnectMixin,
    LayoutMixin,
    QObject,
):
    """Qt model for the canvas viewport, selection and connect mode."""

    viewportChanged = Signal()
    selectionChanged = Signal()
    connectModeChanged = Signal()
    connectionsChanged = Signal()
    tasksMoved = Signal()
    connectionCreated = Signal(object)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._pan_x: float = 0.0
        self._pan_y: float = 0.0
        self._zoom: float = DEFAULT_ZOOM
        self._selected_node: int = 0

        # Initialize mixins
        self._init_connect()

    # --- Properties ------------------------------------------------------------
    @Property(float, notify=viewportChanged)
    def panX(self) -> float:
        return self._pan_x

    @Property(float, notify=viewportChanged)
    def panY(self) -> float:
        return self._pan_y

    @Property(float, notify=viewportChanged)
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter  # type: ignore[no-redef]
    def zoom(self, value: float) -> None:
        self._set_zoom(value)

    @Property(int, notify=selectionChanged)
    def selectedNode(self) -> int:
        return self._selected_node

    @selectedNode.setter  # type: ignore[no-redef]
    def selectedNode(self, value: int) -> None:
        self.setSelectedNode(value)

    # --- Connect mode properties (from ConnectMixin) -----------------------
    @Property(object, notify=connectModeChanged)
    def connectMode(self) -> ConnectMode:
        return self._get_connect_mode()

    @Property(str, notify=connectModeChanged)
    def connectModeName(self) -> str:
        return self._get_connect_mode_name()

    @Property(str, notify=connectModeChanged)
    def labelBuffer(self) -> str:
        return self._get_label_buffer()

    @Property(list, notify=connectionsChanged)
    def connections(self) -> List[TaskConnection]:
        return self._get_connections()

    @Property(list, notify=connectionsChanged)
    def connectionsData(self) -> List[Dict[str, Any]]:
        return self._get_connections_data()

    # --- Viewport -----------------------------------------------------------
    def _set_zoom(self, value: float) -> None:
        clamped = clamp_zoom(value)
        if self._zoom != clamped:
            self._zoom = clamped
            self.viewportChanged.emit()

    @Slot()
    def zoomIn(self) -> None:
        self._set_zoom(self._zoom + ZOOM_STEP)

    @Slot()
    def zoomOut(self) -> None:
        self._set_zoom(self._zoom - ZOOM_STEP)

    @Slot(float, float)
    def pan(self, dx: float, dy: float) -> None:
        if dx == 0 and dy == 0:
            return
        self._pan_x += dx
        self._pan_y += dy
        self.viewportChanged.emit()

    @Slot()
    def resetView(self) -> None:
        changed = (self._pan_x, self._pan_y, self._zoom) != (0.0, 0.0, DEFAULT_ZOOM)
        self._pan_x = 0.0
        self._pan_y = 0.0
        self._zoom = DEFAULT_ZOOM
        if changed:
            self.viewportChanged.emit()

    # --- Selection ----------------------------------------------------------
    @Slot(int)
    def setSelectedNode(self, index: int) -> None:
        if index < 0 or index == self._selected_node:
            return
        self._selected_node = index
        self.selectionChanged.emit()

    @Slot(int)
    def selectNext(self, total: int) -> None:
        if total > 0:
            self.setSelectedNode((self._selected_node + 1) % total)

    @Slot(int)
    def selectPrev(self, total: int) -> None:
        if total > 0:
            if self._selected_node == 0:
                self.setSelectedNode(total - 1)
            else:
                self.setSelectedNode(self._selected_node - 1)

    @Slot(int)
    def clampSelection(self, total: int) -> None:
        """Pull the selection back inside a list that may have shrunk."""
        if total <= 0:
            self.setSelectedNode(0)
        elif self._selected_node >= total:
            self.setSelectedNode(total - 1)

    def selectedTask(self, tasks: Sequence[Task]) -> Optional[Task]:
        if 0 <= self._selected_node < len(tasks):
            return tasks[self._selected_node]
        return None

    def selectInDirection(self, tasks: Sequence[Task], dx: float, dy: float) -> None:
        """Select the nearest task lying in the half-plane of (dx, dy).

        Args:
            tasks: Tasks as indexed by the selection.
            dx: X component of the direction.
            dy: Y component of the direction.
        """
        current = self.selectedTask(tasks)
        if current is None:
            return

        best_idx = self._selected_node
        best_distance = math.inf
        for idx, task in enumerate(tasks):
            if idx == self._selected_node:
                continue
            rel_x = task.x - current.x
            rel_y = task.y - current.y
            # Behind or beside the requested direction
            if rel_x * dx + rel_y * dy <= 0:
                continue
            distance = math.hypot(rel_x, rel_y)
            if distance < best_distance:
                best_distance = distance
                best_idx = idx

        self.setSelectedNode(best_idx)

    def moveSelected(self, tasks: Sequence[Task], dx: float, dy: float) -> Optional[Task]:
        """Shift the selected task and return it so its position can be saved."""
        task = self.selectedTask(tasks)
        if task is None:
            return None
        task.x += dx
        task.y += dy
        self.tasksMoved.emit()
        return task

    # --- Serialization ------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialize viewport, selection and cached connections.

        Returns:
            Dictionary with the canvas view state.
        """
        return {
            "pan_x": self._pan_x,
            "pan_y": self._pan_y,
            "zoom": self._zoom,
            "selected_node": self._selected_node,
            "connections": [
                {
                    "id": conn.id,
                    "from_task_id": conn.from_task_id,
                    "to_task_id": conn.to_task_id,
                    "label": conn.label,
                }
                for conn in self._connections
            ],
        }

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Load canvas view state.

        Args:
            data: Dictionary produced by to_dict.
        """
        self._pan_x = _float_or(data.get("pan_x"), 0.0)
        self._pan_y = _float_or(data.get("pan_y"), 0.0)
        self._zoom = clamp_zoom(_float_or(data.get("zoom"), DEFAULT_ZOOM))
        try:
            self._selected_node = max(0, int(data.get("selected_node", 0)))
        except (TypeError, ValueError):
            self._selected_node = 0

        connections = []
        for conn_data in data.get("connections", []):
            connections.append(TaskConnection(
                id=conn_data.get("id", ""),
                from_task_id=conn_data.get("from_task_id", ""),
                to_task_id=conn_data.get("to_task_id", ""),
                label=conn_data.get("label", ""),
            ))
        self._connections = connections
        self.cancelConnect()

        self.viewportChanged.emit()
        self.selectionChanged.emit()
        self.connectionsChanged.emit()
