"""Shared pytest fixtures for the GBCE test suite."""

import pytest

from tests.fixtures import ManualClock


@pytest.fixture
def clock():
    """Provide a manual clock starting at a fixed instant."""
    return ManualClock()
