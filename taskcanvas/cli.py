"""Command line entry point: render a flowchart as a task canvas."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtGui import QGuiApplication
from rich.console import Console

from .export import export_canvas_svg
from .flowchart import flowchart_to_canvas, parse_flowchart
from .model import CanvasModel
from .render import mode_title, render_braille, render_raster
from .settings import configure_logging, load_settings

logger = logging.getLogger(__name__)

SAMPLE_FLOWCHART = """graph LR
    Plan[Plan release] --> Build[Build artifacts]
    Build -->|passes| Review{Code review}
    Review -->|approved| Ship[Ship it]
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskcanvas",
        description="Render a flowchart as a task canvas in the terminal.",
    )
    parser.add_argument("file", nargs="?", help="flowchart text file (a sample is used when omitted)")
    parser.add_argument("--columns", type=int, help="canvas width in terminal cells")
    parser.add_argument("--rows", type=int, help="canvas height in terminal cells")
    parser.add_argument("--png", help="also write a raster image to this path")
    parser.add_argument("--density", type=float, default=8.0, help="pixels per canvas unit for --png")
    parser.add_argument("--svg", help="also write an SVG export to this path")
    parser.add_argument("--smoke", action="store_true", help="build the canvas without printing it")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser


def _read_source(path: Optional[str]) -> Optional[str]:
    if path is None:
        return SAMPLE_FLOWCHART
    # Handle file:// URLs
    if path.startswith("file://"):
        path = path[7:]
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Could not read %s: %s", path, exc)
        return None


def _ensure_gui_application() -> QGuiApplication:
    """Text on raster images needs fonts, which need a GUI application."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication(sys.argv[:1])
    return app


def _title(path: Optional[str]) -> str:
    return Path(path).stem if path else "sample"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the taskcanvas command."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    settings = load_settings()

    source = _read_source(args.file)
    if source is None:
        return 1
    graph = parse_flowchart(source)
    if graph is None:
        logger.error("No flowchart found in %s", args.file or "the sample")
        return 1

    tasks, connections = flowchart_to_canvas(graph)
    model = CanvasModel()
    model.setConnections(connections)
    model.autoLayout(tasks)

    columns = args.columns or settings.columns
    rows = args.rows or settings.rows
    surface = render_braille(tasks, model, columns, rows)

    if args.png:
        _ensure_gui_application()
        raster = render_raster(tasks, model, columns, rows, args.density)
        if not raster.save(args.png):
            return 1
    if args.svg and export_canvas_svg(args.svg, tasks, connections, title=_title(args.file)) is None:
        return 1

    if args.smoke:
        return 0

    console = Console()
    console.rule(mode_title(model.connectMode).strip())
    console.print(surface.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
