"""
Shared fixtures for scipfetch tests.
"""

import logging

import pytest

from scipfetch.scipfetch_config import ScipFetchConfig, TargetOS
from scipfetch.scipfetch_logger import ScipFetchLogger


@pytest.fixture
def logger():
    """Logger that lets DEBUG lines through."""
    return ScipFetchLogger(level=logging.DEBUG)


@pytest.fixture
def linux_config():
    """Config declaring a Linux build target."""
    return ScipFetchConfig(target_os=TargetOS.LINUX)
