"""Shared pytest fixtures for analogtimer tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from analogtimer.timer.engine import CountdownEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def engine(qapp):
    """Fresh 60-second engine with the default 0.5 / 0.2 thresholds."""
    e = CountdownEngine(60, warning_threshold=0.5, critical_threshold=0.2)
    yield e
    e.dispose()


@pytest.fixture
def short_engine(qapp):
    """10-second engine — handy for walking through every band."""
    e = CountdownEngine(10)
    yield e
    e.dispose()
