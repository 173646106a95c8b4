"""Configuration data models.

This module defines the data structures for application configuration,
using dataclasses for type safety and clarity.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional


@dataclass
class ExchangeConfig:
    """Exchange configuration.

    Attributes
    ----------
    trade_window_seconds : float
        Retention window, in seconds, of every security's trade ledger.
        Only trades younger than this count toward the windowed stock
        price, and older ones are removed on eviction. Default: 900
        seconds (15 minutes).
    """

    trade_window_seconds: float = 900.0

    @property
    def trade_window(self) -> timedelta:
        return timedelta(seconds=self.trade_window_seconds)


@dataclass
class SecurityConfig:
    """Configuration for a listed security.

    Attributes
    ----------
    symbol : str
        Unique identifier for the security
    last_dividend : float
        Most recent dividend per share
    par_value : float
        Nominal value per share
    fixed_dividend : float
        Fixed dividend rate as a fraction. Zero for common stock.
    """

    symbol: str
    last_dividend: float
    par_value: float
    fixed_dividend: float = 0.0


@dataclass
class DemoConfig:
    """Settings of the demo trading session.

    Attributes
    ----------
    trades_per_security : int
        Random trades recorded against each security.
    trade_interval_seconds : float
        Pause after each security's batch of trades.
    trade_window_seconds : float
        Shortened retention window used during the demo so that stale
        trades can be observed without waiting 15 minutes.
    max_price : float
        Upper bound of random prices (lower bound is 0).
    max_quantity : int
        Upper bound of random trade quantities (lower bound is 0).
    sell_probability : float
        Probability that a random trade is a sell.
    seed : Optional[int]
        Seed of the random generator, None for a fresh seed.
    """

    trades_per_security: int = 10
    trade_interval_seconds: float = 0.5
    trade_window_seconds: float = 5.0
    max_price: float = 200.0
    max_quantity: int = 1000
    sell_probability: float = 0.25
    seed: Optional[int] = None


@dataclass
class LoggingConfig:
    """Logging configuration.

    Attributes
    ----------
    level : str
        Name of the root logger level (e.g. "INFO", "DEBUG").
    format : str
        Format string handed to ``logging.basicConfig``.
    """

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
