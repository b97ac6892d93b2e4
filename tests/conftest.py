import logging
import os
from unittest.mock import patch

import pytest

# Configure logging for tests (reduce noise)
logging.basicConfig(level=logging.WARNING)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set fake credentials so Settings() never reads a developer's real token"""
    test_env = {
        "DISCORD_TOKEN": "test-discord-token",
        "DATABASE_URL": "sqlite://",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "WARNING",
    }

    with patch.dict(os.environ, test_env, clear=False):
        yield
