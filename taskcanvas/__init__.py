"""Task canvas: a pannable node graph of tasks for terminal dashboards.

The model keeps viewport, selection and connection drawing state; the
renderers turn a task list into braille text, images or SVG.
"""

from .commands import CanvasAction, handle_canvas_key
from .flowchart import FlowEdge, FlowGraph, FlowNode, flowchart_to_canvas, parse_flowchart
from .geometry import connection_anchors, edge_anchor
from .layout import auto_layout
from .model import CanvasModel
from .render import draw_canvas, render_braille, render_raster
from .shapes import ArrowLine, Diamond, TaskBox
from .surface import BrailleSurface, RasterSurface, Surface
from .types import (
    INACTIVE,
    ConnectMode,
    EnteringLabel,
    FlowDirection,
    Inactive,
    SelectingTarget,
    Task,
    TaskConnection,
    TaskStatus,
)

__all__ = [
    "ArrowLine",
    "BrailleSurface",
    "CanvasAction",
    "CanvasModel",
    "ConnectMode",
    "Diamond",
    "EnteringLabel",
    "FlowDirection",
    "FlowEdge",
    "FlowGraph",
    "FlowNode",
    "INACTIVE",
    "Inactive",
    "RasterSurface",
    "SelectingTarget",
    "Surface",
    "Task",
    "TaskBox",
    "TaskConnection",
    "TaskStatus",
    "auto_layout",
    "connection_anchors",
    "draw_canvas",
    "edge_anchor",
    "flowchart_to_canvas",
    "handle_canvas_key",
    "parse_flowchart",
    "render_braille",
    "render_raster",
]
