"""Connection drawing mixin for CanvasModel.

A connection is drawn in three steps: pick the source (the selected node),
pick a different target, then type an optional label. Cancelling at any
step discards the connection.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

from PySide6.QtCore import Signal, Slot

from .types import (
    INACTIVE,
    ConnectMode,
    EnteringLabel,
    Inactive,
    SelectingTarget,
    Task,
    TaskConnection,
)

if TYPE_CHECKING:
    from .model import CanvasModel

logger = logging.getLogger(__name__)


class ConnectMixin:
    """Mixin providing the connection state machine and connection cache."""

    # Signals (defined in CanvasModel)
    connectModeChanged: Signal
    connectionsChanged: Signal
    connectionCreated: Signal

    # Attributes expected from CanvasModel
    _connect_mode: ConnectMode
    _connections: List[TaskConnection]
    selectedTask: Callable[[Sequence[Task]], Optional[Task]]

    def _init_connect(self) -> None:
        """Initialize connection state. Call from CanvasModel.__init__."""
        self._connect_mode = INACTIVE
        self._connections = []

    def _get_connect_mode(self) -> ConnectMode:
        return self._connect_mode

    def _set_connect_mode(self, mode: ConnectMode) -> None:
        if self._connect_mode != mode:
            self._connect_mode = mode
            self.connectModeChanged.emit()

    def _get_connect_mode_name(self) -> str:
        if isinstance(self._connect_mode, SelectingTarget):
            return "selectingTarget"
        if isinstance(self._connect_mode, EnteringLabel):
            return "enteringLabel"
        return "inactive"

    def _get_label_buffer(self) -> str:
        if isinstance(self._connect_mode, EnteringLabel):
            return self._connect_mode.label_buffer
        return ""

    def beginConnect(self, tasks: Sequence[Task]) -> bool:
        """Start a connection from the selected task."""
        if not isinstance(self._connect_mode, Inactive):
            return False
        task = self.selectedTask(tasks)
        if task is None:
            return False
        self._set_connect_mode(SelectingTarget(task.id))
        return True

    def confirmTarget(self, tasks: Sequence[Task]) -> bool:
        """Use the selected task as the target and move on to the label."""
        mode = self._connect_mode
        if not isinstance(mode, SelectingTarget):
            return False
        task = self.selectedTask(tasks)
        if task is None:
            return False
        if task.id == mode.from_task_id:
            logger.debug("Ignoring self-connection on task %s", task.id)
            return False
        self._set_connect_mode(EnteringLabel(mode.from_task_id, task.id))
        return True

    @Slot(str)
    def appendLabelChar(self, text: str) -> None:
        mode = self._connect_mode
        if isinstance(mode, EnteringLabel) and text:
            self._set_connect_mode(
                EnteringLabel(mode.from_task_id, mode.to_task_id, mode.label_buffer + text)
            )

    @Slot()
    def deleteLabelChar(self) -> None:
        mode = self._connect_mode
        if isinstance(mode, EnteringLabel) and mode.label_buffer:
            self._set_connect_mode(
                EnteringLabel(mode.from_task_id, mode.to_task_id, mode.label_buffer[:-1])
            )

    def confirmLabel(self) -> Optional[TaskConnection]:
        """Finish the connection with the typed label (which may be empty)."""
        mode = self._connect_mode
        if not isinstance(mode, EnteringLabel):
            return None
        connection = TaskConnection.create(mode.from_task_id, mode.to_task_id, mode.label_buffer)
        self._connections.append(connection)
        self._set_connect_mode(INACTIVE)
        self.connectionCreated.emit(connection)
        self.connectionsChanged.emit()
        return connection

    @Slot()
    def cancelConnect(self) -> None:
        self._set_connect_mode(INACTIVE)

    def isConnectSource(self, task_id: str) -> bool:
        mode = self._connect_mode
        return isinstance(mode, SelectingTarget) and mode.from_task_id == task_id

    # --- Connection cache ---------------------------------------------------
    def setConnections(self, connections: Sequence[TaskConnection]) -> None:
        """Replace the cached connections with the store's current list."""
        self._connections = list(connections)
        self.connectionsChanged.emit()

    def _get_connections(self) -> List[TaskConnection]:
        return list(self._connections)

    def _get_connections_data(self) -> List[Dict[str, Any]]:
        return [
            {"id": conn.id, "fromId": conn.from_task_id, "toId": conn.to_task_id, "label": conn.label}
            for conn in self._connections
        ]

    def connectionsForTask(self, task_id: str) -> List[TaskConnection]:
        return [
            conn for conn in self._connections
            if conn.from_task_id == task_id or conn.to_task_id == task_id
        ]

    @Slot(str, result=bool)
    def removeConnection(self, connection_id: str) -> bool:
        for idx, conn in enumerate(self._connections):
            if conn.id == connection_id:
                self._connections.pop(idx)
                self.connectionsChanged.emit()
                return True
        return False

    def deletableConnection(self, tasks: Sequence[Task]) -> Optional[TaskConnection]:
        """Return the connection deleteSelectedConnection would remove."""
        task = self.selectedTask(tasks)
        if task is None:
            return None
        touching = self.connectionsForTask(task.id)
        return touching[0] if touching else None

    def deleteSelectedConnection(self, tasks: Sequence[Task]) -> Optional[TaskConnection]:
        """Remove the first connection touching the selected task."""
        connection = self.deletableConnection(tasks)
        if connection is not None:
            self.removeConnection(connection.id)
        return connection
