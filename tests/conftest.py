"""Pytest configuration - loads .env for build settings such as OBOT_VERSION."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from obot_cli import version

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


@pytest.fixture
def fresh_version():
    """Clear the cached process-wide version around a test."""
    version.get.cache_clear()
    yield version.get
    version.get.cache_clear()
