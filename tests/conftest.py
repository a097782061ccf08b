"""Shared pytest fixtures for Interval Trainer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from intervaltrainer.timer.config import IntervalConfig
from intervaltrainer.timer.engine import IntervalEngine
from intervaltrainer.timer.scheduler import ManualScheduler

from helpers import Recorder


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every test at a throwaway settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setenv("INTERVALTRAINER_SETTINGS", str(path))
    yield path


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def config():
    """Two rounds of 1 s work / 1 s rest."""
    return IntervalConfig(rounds=2, work_duration=1, rest_duration=1)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def engine(qapp, config, scheduler, recorder):
    """Engine on a simulated clock with a recording notifier."""
    eng = IntervalEngine(config, scheduler, recorder)
    recorder.bind(eng)
    return eng
