"""Test fixtures for the GBCE exchange.

This module provides reusable test data creators for securities, exchanges
and a manual clock. All fixtures follow a consistent pattern:
- Sensible defaults that can be overridden
- Deterministic time through ManualClock
- Test data constants for typical values

Example usage:
    >>> from tests.fixtures import ManualClock, create_gbce_exchange
    >>>
    >>> clock = ManualClock()
    >>> exchange = create_gbce_exchange(prices={"ALE": 10.0}, clock=clock)
    >>> clock.advance(seconds=5)
"""

from .market_data import (
    GBCE_SECURITIES,
    TEST_PRICES,
    TEST_START_TIME,
    ManualClock,
    create_gbce_exchange,
    create_test_security,
)

__all__ = [
    # Constants
    "GBCE_SECURITIES",
    "TEST_PRICES",
    "TEST_START_TIME",
    # Time
    "ManualClock",
    # Creators
    "create_test_security",
    "create_gbce_exchange",
]
