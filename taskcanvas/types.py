"""Data types for the task canvas.

This module contains the core data structures shared by the canvas model,
the renderers and the flowchart import.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Union


class TaskStatus(Enum):
    """Board columns a task can live in, in display order."""

    BACKLOG = "backlog"
    PLANNING = "planning"
    RUNNING = "running"
    REVIEW = "review"
    DONE = "done"

    @classmethod
    def columns(cls) -> List["TaskStatus"]:
        return list(cls)

    @classmethod
    def from_value(cls, value: str) -> "TaskStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.BACKLOG


@dataclass
class Task:
    """A task record positioned on the canvas.

    A position of exactly (0, 0) means the task has never been placed.
    """

    id: str
    title: str
    status: TaskStatus = TaskStatus.BACKLOG
    x: float = 0.0
    y: float = 0.0
    has_rich_content: bool = False  # HTML preview attached

    @classmethod
    def create(cls, title: str, status: TaskStatus = TaskStatus.BACKLOG, x: float = 0.0, y: float = 0.0) -> "Task":
        return cls(uuid.uuid4().hex, title, status, x, y)


@dataclass
class TaskConnection:
    """A labeled arrow from one task to another."""

    id: str
    from_task_id: str
    to_task_id: str
    label: str = ""

    @classmethod
    def create(cls, from_task_id: str, to_task_id: str, label: str = "") -> "TaskConnection":
        return cls(uuid.uuid4().hex, from_task_id, to_task_id, label)


@dataclass(frozen=True)
class Inactive:
    """No connection is being drawn."""


@dataclass(frozen=True)
class SelectingTarget:
    """A source task is chosen; waiting for the target."""

    from_task_id: str


@dataclass(frozen=True)
class EnteringLabel:
    """Both ends are chosen; the label is being typed."""

    from_task_id: str
    to_task_id: str
    label_buffer: str = ""


ConnectMode = Union[Inactive, SelectingTarget, EnteringLabel]

INACTIVE = Inactive()


class FlowDirection(Enum):
    """Main axis of an imported flowchart."""

    TOP_DOWN = "TD"
    LEFT_RIGHT = "LR"
