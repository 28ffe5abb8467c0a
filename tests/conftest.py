"""Pytest configuration and shared fixtures for displaystage tests

This module provides common fixtures and test utilities used across
unit tests.
"""

import pytest
import logging
from pathlib import Path
from typing import Generator

from displaystage.common.config import Config, ConfigLoader
from displaystage.common.settings import settings
from displaystage.common.types import Monitor, Position, Resolution, VideoMode
from displaystage.surface.state import DisplaySurface
from displaystage.topology.base import StaticMonitorTopology


@pytest.fixture
def sample_config() -> Config:
    """Load sample configuration for testing

    Returns:
        Config object with test values
    """
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Reset settings singleton between tests

    This fixture ensures each test gets a fresh Settings instance.
    """
    settings._initialized = False
    settings._config = None
    yield
    settings._initialized = False
    settings._config = None


@pytest.fixture
def monitors() -> list[Monitor]:
    """Two monitors; topology-wide max refresh is 144000 mHz"""
    return [
        Monitor(
            monitor_id=0,
            name="DP-1",
            physical_width=2560,
            physical_height=1440,
            refresh_rate_millihertz=144000,
            scale_factor=1.0,
            position=Position(0, 0),
            is_primary=True,
            video_modes=(
                VideoMode(2560, 1440, 32, 144000),
                VideoMode(1920, 1080, 32, 120000),
            ),
        ),
        Monitor(
            monitor_id=1,
            name=None,
            physical_width=1920,
            physical_height=1080,
            refresh_rate_millihertz=60000,
            scale_factor=1.5,
            position=Position(2560, 0),
            video_modes=(VideoMode(1920, 1080, 32, 60000),),
        ),
    ]


@pytest.fixture
def topology(monitors: list[Monitor]) -> StaticMonitorTopology:
    """Static topology over the two-monitor fixture"""
    return StaticMonitorTopology(monitors)


@pytest.fixture
def surface() -> DisplaySurface:
    """Windowed 1280x720 surface at base scale 2.0"""
    return DisplaySurface(resolution=Resolution(1280, 720), base_scale_factor=2.0)


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)


def pytest_configure(config) -> None:
    """Register custom pytest markers used by this test suite."""
    config.addinivalue_line("markers", "requires_x11: mark test as requiring X11 display")
