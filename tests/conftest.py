"""Pytest configuration and fixtures for Hue Lights tests."""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

from core.config import HueConfig


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real Hue settings from the shell out of the tests."""
    monkeypatch.delenv('HUE_USERNAME', raising=False)
    monkeypatch.delenv('BRIDGE_IP', raising=False)


@pytest.fixture
def env_file(tmp_path):
    """Path to a (not yet created) env file."""
    return tmp_path / '.env'


@pytest.fixture
def config(env_file):
    """Configuration with nothing stored."""
    return HueConfig(env_file=env_file)


@pytest.fixture
def make_response():
    """Build a fake requests.Response returning the given JSON."""
    def _make(json_data, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data
        return response
    return _make


@pytest.fixture
def sample_lights_payload():
    """v1 /lights payload with two lights, out of order."""
    return {
        '2': {'name': 'Desk', 'state': {'on': False, 'bri': 1, 'hue': 8000}},
        '1': {'name': 'Living room', 'state': {'on': True, 'bri': 254, 'hue': 41000}},
    }
