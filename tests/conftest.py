"""Pytest fixtures and configuration for pathpad tests."""
from __future__ import annotations

import os
from pathlib import Path

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single function or class")
    config.addinivalue_line("markers", "integration: tests that drive the CLI end to end")


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """
    Isolated HOME/APPDATA/XDG_CONFIG_HOME so no real config or history file is
    read or written.
    """
    home = tmp_path / "home"
    (home / "AppData" / "Roaming").mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("APPDATA", str(home / "AppData" / "Roaming"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("PATHPAD_CONFIG", raising=False)
    return home


@pytest.fixture
def dirs(tmp_path) -> dict[str, str]:
    """Four real directories a, b, c, d plus a path that does not exist."""
    root = tmp_path / "bins"
    made = {}
    for name in ("a", "b", "c", "d"):
        p = root / name
        p.mkdir(parents=True)
        made[name] = str(p)
    made["missing"] = str(root / "missing")
    return made


@pytest.fixture
def set_path(monkeypatch):
    """Set $PATH for the test from a list of entries."""
    def _apply(*entries: str) -> str:
        value = os.pathsep.join(entries)
        monkeypatch.setenv("PATH", value)
        return value
    return _apply


@pytest.fixture
def history_file(fake_home) -> Path:
    return fake_home / ".config" / "pathpad" / ".path_history"
