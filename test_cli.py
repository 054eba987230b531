"""Tests for settings persistence and the taskcanvas command."""

import logging

import pytest
from PySide6.QtCore import QSettings

from taskcanvas.cli import SAMPLE_FLOWCHART, build_parser, main
from taskcanvas.constants import MOVE_STEP, PAN_STEP
from taskcanvas.settings import CanvasSettings, configure_logging, load_settings, save_settings


@pytest.fixture
def ini_settings(tmp_path):
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def chart_file(tmp_path):
    path = tmp_path / "release.mmd"
    path.write_text("graph LR\nA[Draft notes] -->|review| B[Publish]\n", encoding="utf-8")
    return path


class TestSettings:
    def test_defaults_when_empty(self, ini_settings):
        loaded = load_settings(ini_settings)
        assert loaded == CanvasSettings()
        assert loaded.move_step == MOVE_STEP
        assert loaded.pan_step == PAN_STEP

    def test_save_and_load(self, ini_settings):
        save_settings(CanvasSettings(move_step=1.5, pan_step=8.0, columns=120, rows=40), ini_settings)
        loaded = load_settings(ini_settings)
        assert loaded.move_step == 1.5
        assert loaded.pan_step == 8.0
        assert (loaded.columns, loaded.rows) == (120, 40)

    def test_malformed_values_fall_back(self, ini_settings):
        ini_settings.setValue("canvas/move_step", "fast")
        ini_settings.setValue("canvas/columns", "-5")
        ini_settings.setValue("canvas/rows", "0")
        loaded = load_settings(ini_settings)
        assert loaded.move_step == MOVE_STEP
        assert loaded.columns == CanvasSettings().columns
        assert loaded.rows == CanvasSettings().rows


class TestLogging:
    def test_configure_logging_replaces_handlers(self, restore_logging):
        configure_logging(logging.DEBUG)
        configure_logging(logging.DEBUG)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG


class TestCommand:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.file is None
        assert args.density == 8.0
        assert not args.smoke

    def test_sample_chart_parses(self):
        assert "graph LR" in SAMPLE_FLOWCHART

    def test_smoke_run(self, app, restore_logging, capsys):
        assert main(["--smoke"]) == 0
        assert capsys.readouterr().out == ""

    def test_prints_canvas(self, app, restore_logging, capsys):
        assert main(["--columns", "60", "--rows", "20"]) == 0
        assert "Plan release" in capsys.readouterr().out

    def test_renders_file(self, app, restore_logging, capsys, chart_file):
        assert main([str(chart_file), "--columns", "70", "--rows", "20"]) == 0
        assert "Draft notes" in capsys.readouterr().out

    def test_accepts_file_url(self, app, restore_logging, chart_file):
        assert main([f"file://{chart_file}", "--smoke"]) == 0

    def test_missing_file(self, app, restore_logging, tmp_path):
        assert main([str(tmp_path / "nope.mmd"), "--smoke"]) == 1

    def test_not_a_chart(self, app, restore_logging, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("just some notes\n", encoding="utf-8")
        assert main([str(path), "--smoke"]) == 1

    def test_writes_svg_and_png(self, app, restore_logging, tmp_path, chart_file):
        svg = tmp_path / "out.svg"
        png = tmp_path / "out.png"
        assert main([str(chart_file), "--smoke", "--svg", str(svg), "--png", str(png), "--density", "2"]) == 0
        assert ">Draft notes<" in svg.read_text(encoding="utf-8")
        assert png.stat().st_size > 0

    def test_unwritable_svg(self, app, restore_logging, tmp_path, chart_file):
        target = tmp_path / "missing" / "out.svg"
        assert main([str(chart_file), "--smoke", "--svg", str(target)]) == 1
