"""Shared fixtures for progress provider tests."""

import pytest
from unittest.mock import Mock

from progress_provider.base import NavigationService
from progress_provider.config import Config
from progress_provider.core import ProgressProvider


@pytest.fixture
def test_config(tmp_path):
    """Configuration built from defaults only."""
    config_file = tmp_path / 'progress_provider.yml'
    config_file.write_text('')
    return Config(config_file)


@pytest.fixture
def navigation_service():
    """Mock UI-blocking collaborator."""
    return Mock(spec=NavigationService)


@pytest.fixture
def provider(navigation_service, test_config):
    """Progress provider wired to the mock navigation service."""
    return ProgressProvider(navigation_service, config=test_config)
