"""Shared fixtures: headless Qt and throwaway settings files."""

from __future__ import annotations

import os
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from transformviz.model.io import SettingsStore


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def settings_path(tmp_path: Path) -> str:
    return str(tmp_path / "transformviz.ini")


@pytest.fixture
def store(qapp, settings_path: str) -> SettingsStore:
    return SettingsStore.from_file(settings_path)
