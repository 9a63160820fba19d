"""Pytest configuration and fixtures for chronoform tests."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest
from dateutil import tz

# Add the parent directory to sys.path so chronoform can be imported
# without needing to install the package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def utc():
    return tz.tzutc()


@pytest.fixture
def epoch(utc):
    """1970-01-01T00:00:00 UTC."""
    return datetime(1970, 1, 1, tzinfo=utc)


@pytest.fixture
def humanized():
    """Register the humanized syntax for the duration of a test."""
    from chronoform.extensions import humanized as module

    module.register()
    return module
