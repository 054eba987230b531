"""Constants for the task canvas."""

from typing import Dict

from .types import TaskStatus


# Task boxes, in canvas units
NODE_WIDTH = 28.0
NODE_HEIGHT = 6.0

# Auto-layout grid
GRID_SPACING_X = 36.0
GRID_SPACING_Y = 10.0
FLOW_COLUMN_HEIGHT = 3

ZOOM_MIN = 0.3
ZOOM_MAX = 3.0
ZOOM_STEP = 0.1
DEFAULT_ZOOM = 1.0

ANCHOR_EPSILON = 0.001

ARROW_HEAD_LENGTH = 2.0
ARROW_HEAD_RATIO = 0.3
ARROW_SPREAD = 0.5  # ~28 degrees

MARKER_SIZE = 1.0

# Padding around the pan origin when computing the visible window
VIEW_MARGIN = 10.0

MOVE_STEP = 2.0
PAN_STEP = 4.0

COLOR_NODE = "#00c8d7"
COLOR_SELECTED = "#f1c40f"
COLOR_ARROW = "#c061cb"
COLOR_CONNECT_SRC = "#2ecc71"
COLOR_BADGE = "#7f8c8d"
COLOR_RICH_BADGE = "#ff7675"

STATUS_COLORS: Dict[TaskStatus, str] = {
    TaskStatus.BACKLOG: "#888888",
    TaskStatus.PLANNING: "#f0c040",
    TaskStatus.RUNNING: "#4080ff",
    TaskStatus.REVIEW: "#ff8040",
    TaskStatus.DONE: "#40c040",
}

TITLE_INACTIVE = " Canvas [a]Connect [x]Unlink [+/-]Zoom [0]Reset "
TITLE_SELECTING = " SELECT TARGET (Enter=confirm, Esc=cancel) "
TITLE_LABEL = " TYPE LABEL (Enter=save, Esc=cancel) "
