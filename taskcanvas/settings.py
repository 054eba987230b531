"""User settings and logging setup for the task canvas.

Settings live in QSettings under the ``canvas/`` group. Missing or
malformed values fall back to the defaults.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from typing import Any, Optional

from PySide6.QtCore import QSettings

from .constants import MOVE_STEP, PAN_STEP

SETTINGS_ORGANIZATION = "TaskCanvas"
SETTINGS_APPLICATION = "TaskCanvas"
SETTINGS_GROUP = "canvas"

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class CanvasSettings:
    """Tunable canvas behaviour."""

    move_step: float = MOVE_STEP
    pan_step: float = PAN_STEP
    columns: int = 100
    rows: int = 30


def _coerce(raw: Any, default: Any) -> Any:
    # QSettings INI files hand every value back as a string
    if raw is None:
        return default
    try:
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except (TypeError, ValueError):
        return default
    return raw


def _open(settings: Optional[QSettings]) -> QSettings:
    if settings is not None:
        return settings
    return QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)


def load_settings(settings: Optional[QSettings] = None) -> CanvasSettings:
    """Read canvas settings, defaulting anything unset or unreadable."""
    store = _open(settings)
    defaults = CanvasSettings()
    values = {}
    store.beginGroup(SETTINGS_GROUP)
    try:
        for spec in fields(CanvasSettings):
            default = getattr(defaults, spec.name)
            values[spec.name] = _coerce(store.value(spec.name), default)
    finally:
        store.endGroup()
    loaded = CanvasSettings(**values)
    if loaded.columns <= 0:
        loaded.columns = defaults.columns
    if loaded.rows <= 0:
        loaded.rows = defaults.rows
    return loaded


def save_settings(canvas_settings: CanvasSettings, settings: Optional[QSettings] = None) -> None:
    store = _open(settings)
    store.beginGroup(SETTINGS_GROUP)
    try:
        for spec in fields(CanvasSettings):
            store.setValue(spec.name, getattr(canvas_settings, spec.name))
    finally:
        store.endGroup()
    store.sync()


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr with timestamps.

    Call this once, early, from the command line entry point.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)
