"""Keyboard dispatch for the canvas.

Keys arrive as single characters or as upper-case names for special keys
(``ENTER``, ``ESCAPE``, ``BACKSPACE``, ``LEFT``, ``RIGHT``, ``UP``,
``DOWN``). Which keys apply depends on the connect mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .model import CanvasModel
from .settings import CanvasSettings
from .types import EnteringLabel, SelectingTarget, Task, TaskConnection

# h/l/j/k select in direction, H/L/J/K move; canvas y grows upward
DIRECTION_KEYS = {
    "h": (-1.0, 0.0),
    "l": (1.0, 0.0),
    "j": (0.0, -1.0),
    "k": (0.0, 1.0),
}
PAN_KEYS = {
    "LEFT": (-1.0, 0.0),
    "RIGHT": (1.0, 0.0),
    "UP": (0.0, 1.0),
    "DOWN": (0.0, -1.0),
}


@dataclass
class CanvasAction:
    """Outcome of a key press, telling the caller what to persist."""

    handled: bool = False
    moved: Optional[Task] = None
    created: Optional[TaskConnection] = None
    deleted: Optional[TaskConnection] = None


def _handle_browse_key(
    model: CanvasModel,
    tasks: Sequence[Task],
    key: str,
    settings: CanvasSettings,
) -> CanvasAction:
    if key in DIRECTION_KEYS:
        dx, dy = DIRECTION_KEYS[key]
        model.selectInDirection(tasks, dx, dy)
        return CanvasAction(handled=True)
    if key.lower() in DIRECTION_KEYS and key.isupper():
        dx, dy = DIRECTION_KEYS[key.lower()]
        moved = model.moveSelected(tasks, dx * settings.move_step, dy * settings.move_step)
        return CanvasAction(handled=True, moved=moved)
    if key in PAN_KEYS:
        dx, dy = PAN_KEYS[key]
        model.pan(dx * settings.pan_step, dy * settings.pan_step)
        return CanvasAction(handled=True)
    if key in ("+", "="):
        model.zoomIn()
    elif key == "-":
        model.zoomOut()
    elif key == "0":
        model.resetView()
    elif key == "\t":
        model.selectNext(len(tasks))
    elif key == "a":
        model.beginConnect(tasks)
    elif key == "x":
        return CanvasAction(handled=True, deleted=model.deleteSelectedConnection(tasks))
    else:
        return CanvasAction()
    return CanvasAction(handled=True)


def _handle_target_key(model: CanvasModel, tasks: Sequence[Task], key: str) -> CanvasAction:
    if key == "ESCAPE":
        model.cancelConnect()
    elif key == "j":
        model.selectNext(len(tasks))
    elif key == "k":
        model.selectPrev(len(tasks))
    elif key == "ENTER":
        model.confirmTarget(tasks)
    else:
        return CanvasAction()
    return CanvasAction(handled=True)


def _handle_label_key(model: CanvasModel, key: str) -> CanvasAction:
    if key == "ESCAPE":
        model.cancelConnect()
    elif key == "ENTER":
        return CanvasAction(handled=True, created=model.confirmLabel())
    elif key == "BACKSPACE":
        model.deleteLabelChar()
    elif len(key) == 1 and key.isprintable():
        model.appendLabelChar(key)
    else:
        return CanvasAction()
    return CanvasAction(handled=True)


def handle_canvas_key(
    model: CanvasModel,
    tasks: Sequence[Task],
    key: str,
    settings: Optional[CanvasSettings] = None,
) -> CanvasAction:
    """Apply one key press to the canvas."""
    settings = settings or CanvasSettings()
    mode = model.connectMode
    if isinstance(mode, SelectingTarget):
        return _handle_target_key(model, tasks, key)
    if isinstance(mode, EnteringLabel):
        return _handle_label_key(model, key)
    return _handle_browse_key(model, tasks, key, settings)
