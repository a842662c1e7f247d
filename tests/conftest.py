"""
Shared pytest fixtures for illustration tests.
"""
import os
import sys

import pytest

# Headless runs need the offscreen Qt platform plugin
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
from PySide6.QtWidgets import QApplication


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def settings_manager(qt_app, tmp_path):
    """SettingsManager backed by a throwaway INI file."""
    from core.settings import SettingsManager
    manager = SettingsManager(organization="Test", application="IllustrationsTest",
                              path=tmp_path / "settings.ini")
    yield manager
    manager.clear()


@pytest.fixture
def event_system():
    """Create EventSystem instance for testing."""
    from core.events import EventSystem
    system = EventSystem()
    yield system
    system.clear()


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def animation_manager(qt_app, fake_clock, event_system):
    """AnimationManager driven by the fake clock; ticks are called directly."""
    from core.animation import AnimationManager
    manager = AnimationManager(fps=60, event_system=event_system, clock=fake_clock)
    yield manager
    manager.cleanup()
