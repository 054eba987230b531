"""Packaging regression tests."""

import re
from pathlib import Path
from typing import Set

ROOT = Path(__file__).resolve().parent


def _pyproject() -> str:
    return (ROOT / "pyproject.toml").read_text(encoding="utf-8")


def _read_list(key: str) -> Set[str]:
    match = re.search(rf"^{key}\s*=\s*\[(.*?)\]", _pyproject(), flags=re.DOTALL | re.MULTILINE)
    assert match is not None, f"{key} is missing from pyproject.toml"
    return set(re.findall(r'"([^"]+)"', match.group(1)))


def test_package_is_listed():
    assert _read_list("packages") == {"taskcanvas"}


def test_runtime_dependencies_are_declared():
    names = {re.split(r"[<>=!~ ]", dep, maxsplit=1)[0] for dep in _read_list("dependencies")}
    missing = {"PySide6", "rich"} - names
    assert not missing, f"Missing dependencies in pyproject.toml: {sorted(missing)}"


def test_console_script_points_at_cli():
    assert 'taskcanvas = "taskcanvas.cli:main"' in _pyproject()


def test_test_extra_matches_pytest_config():
    names = {re.split(r"[<>=!~ ]", dep, maxsplit=1)[0] for dep in _read_list("test")}
    if "--cov" not in _pyproject():
        assert "pytest-cov" not in names
    assert "pytest" in names
