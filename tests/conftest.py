"""Shared test fixtures for adsb-squitter.

Provides:
- Receiver location fixture
- Positions for well-known cities
- Config isolation (no test touches the real ~/.adsb-squitter)
"""

import pytest

from adsb_squitter.position import Position
from tests.fixtures.known_frames import BERLIN, PARIS


# Asheville, NC: default receiver location for tests
RECEIVER_LAT = 35.5951
RECEIVER_LON = -82.5515


@pytest.fixture
def receiver_location():
    """Default receiver as a Position (Asheville, NC)."""
    return Position(RECEIVER_LON, RECEIVER_LAT, 2100.0)


@pytest.fixture
def berlin():
    return Position(BERLIN[0], BERLIN[1], 0.0)


@pytest.fixture
def paris():
    return Position(PARIS[0], PARIS[1], 0.0)


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the config module at a temporary directory."""
    monkeypatch.setattr("adsb_squitter.config.CONFIG_DIR", tmp_path)
    monkeypatch.setattr("adsb_squitter.config.CONFIG_FILE", tmp_path / "config.yaml")
    return tmp_path
