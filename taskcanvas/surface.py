"""Drawing surfaces the canvas renders into.

A surface maps a visible window of canvas coordinates onto a grid of
dots. The y axis points up: ``y_bounds[1]`` is the top row. Text is placed
on a separate, coarser grid where the surface has one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from PySide6.QtCore import QPointF
from PySide6.QtGui import QColor, QImage, QPainter
from rich.text import Text

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float]
Cell = Tuple[int, int]

# Bit for each dot of a braille cell, indexed [row][column]
BRAILLE_DOTS = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)
BRAILLE_BLANK = 0x2800


class Surface:
    """Abstract drawing target with a visible coordinate window."""

    def __init__(
        self,
        resolution: Tuple[int, int],
        x_bounds: Bounds,
        y_bounds: Bounds,
        text_resolution: Optional[Tuple[int, int]] = None,
    ) -> None:
        self.resolution = resolution
        self.x_bounds = x_bounds
        self.y_bounds = y_bounds
        self.text_resolution = text_resolution or resolution

    def _map(self, x: float, y: float, resolution: Tuple[int, int]) -> Optional[Cell]:
        left, right = self.x_bounds
        bottom, top = self.y_bounds
        if x < left or x > right or y < bottom or y > top:
            return None
        width = right - left
        height = top - bottom
        if width <= 0 or height <= 0:
            return None
        col = int((x - left) * (resolution[0] - 1) / width)
        row = int((top - y) * (resolution[1] - 1) / height)
        return (col, row)

    def get_point(self, x: float, y: float) -> Optional[Cell]:
        """Project a canvas point to a dot, or None when it is not visible."""
        return self._map(x, y, self.resolution)

    def paint(self, col: int, row: int, color: str) -> None:
        raise NotImplementedError

    def print_text(self, x: float, y: float, text: str, color: str, centered: bool = False) -> bool:
        """Place text with its start (or middle) at a canvas point.

        Returns False when the anchor point is outside the visible window.
        """
        cell = self._map(x, y, self.text_resolution)
        if cell is None or not text:
            return False
        self._draw_text(cell[0], cell[1], text, color, centered)
        return True

    def _draw_text(self, col: int, row: int, text: str, color: str, centered: bool) -> None:
        raise NotImplementedError


class BrailleSurface(Surface):
    """Terminal surface packing 2x4 dots into each braille character cell."""

    def __init__(self, columns: int, rows: int, x_bounds: Bounds, y_bounds: Bounds) -> None:
        columns = max(0, columns)
        rows = max(0, rows)
        super().__init__((columns * 2, rows * 4), x_bounds, y_bounds, (columns, rows))
        self.columns = columns
        self.rows = rows
        self._dots: List[List[int]] = [[0] * columns for _ in range(rows)]
        self._dot_colors: List[List[Optional[str]]] = [[None] * columns for _ in range(rows)]
        self._text: Dict[Cell, Tuple[str, str]] = {}

    def paint(self, col: int, row: int, color: str) -> None:
        cell_col, cell_row = col // 2, row // 4
        if not (0 <= cell_col < self.columns and 0 <= cell_row < self.rows):
            return
        self._dots[cell_row][cell_col] |= BRAILLE_DOTS[row % 4][col % 2]
        self._dot_colors[cell_row][cell_col] = color

    def _draw_text(self, col: int, row: int, text: str, color: str, centered: bool) -> None:
        if centered:
            col -= len(text) // 2
        if not 0 <= row < self.rows:
            return
        for offset, char in enumerate(text):
            target = col + offset
            if 0 <= target < self.columns:
                self._text[(target, row)] = (char, color)

    def cell(self, col: int, row: int) -> Tuple[str, Optional[str]]:
        """Return the character and color shown at a character cell."""
        if (col, row) in self._text:
            return self._text[(col, row)]
        bits = self._dots[row][col]
        if not bits:
            return (" ", None)
        return (chr(BRAILLE_BLANK + bits), self._dot_colors[row][col])

    def dot_count(self) -> int:
        return sum(bin(bits).count("1") for line in self._dots for bits in line)

    def lines(self) -> List[str]:
        return [
            "".join(self.cell(col, row)[0] for col in range(self.columns))
            for row in range(self.rows)
        ]

    def to_text(self) -> Text:
        """Return the surface as styled rich text, one line per row."""
        text = Text()
        for row in range(self.rows):
            run = ""
            run_color: Optional[str] = None
            for col in range(self.columns):
                char, color = self.cell(col, row)
                if color != run_color and run:
                    text.append(run, style=run_color)
                    run = ""
                run_color = color
                run += char
            if run:
                text.append(run, style=run_color)
            if row < self.rows - 1:
                text.append("\n")
        return text


class RasterSurface(Surface):
    """Image surface backed by a QImage, one dot per pixel.

    ``width`` x ``height`` is the image size in canvas units at zoom 1;
    ``density`` is the number of pixels per unit. Drawing text needs a
    running QGuiApplication for font metrics.
    """

    def __init__(
        self,
        width: float,
        height: float,
        x_bounds: Bounds,
        y_bounds: Bounds,
        density: float = 1.0,
        background: str = "#1a1a2e",
    ) -> None:
        pixel_width = max(1, int(width * density))
        pixel_height = max(1, int(height * density))
        super().__init__((pixel_width, pixel_height), x_bounds, y_bounds)
        self._image = QImage(pixel_width, pixel_height, QImage.Format.Format_ARGB32)
        self._image.fill(QColor(background))

    def image(self) -> QImage:
        return self._image

    def paint(self, col: int, row: int, color: str) -> None:
        if 0 <= col < self._image.width() and 0 <= row < self._image.height():
            self._image.setPixelColor(col, row, QColor(color))

    def _draw_text(self, col: int, row: int, text: str, color: str, centered: bool) -> None:
        painter = QPainter(self._image)
        try:
            painter.setPen(QColor(color))
            metrics = painter.fontMetrics()
            x = col - metrics.horizontalAdvance(text) / 2 if centered else col
            painter.drawText(QPointF(x, row + metrics.ascent() / 2), text)
        finally:
            painter.end()

    def save(self, path: Union[str, Path]) -> bool:
        """Write the image to disk; the format follows the file extension."""
        ok = self._image.save(str(path))
        if ok:
            logger.info("Canvas image saved to %s", path)
        else:
            logger.error("Could not save canvas image to %s", path)
        return ok
