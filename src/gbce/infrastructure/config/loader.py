"""Configuration loading utilities.

This module provides functionality to load and parse YAML configuration files,
with support for defaults and validation.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .models import DemoConfig, ExchangeConfig, LoggingConfig, SecurityConfig

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _non_negative_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Invalid {name}: {value!r}. Must be a number.")
    if not value >= 0:
        raise ValueError(f"Invalid {name}: {value}. Must not be negative.")
    return float(value)


def _positive_number(value: object, name: str) -> float:
    number = _non_negative_number(value, name)
    if number == 0:
        raise ValueError(
            f"Invalid {name}: {value}. Must be a positive number."
        )
    return number


class ConfigLoader:
    """Loads and manages application configuration from YAML files.

    This class provides a centralized way to load configuration from YAML files,
    with caching to avoid repeated file I/O.

    Parameters
    ----------
    config_path : Optional[Path]
        Path to the configuration file. If None, defaults to "config/default.yaml"

    Attributes
    ----------
    config_path : Path
        The path to the configuration file
    _config_data : Optional[Dict]
        Cached configuration data
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the config loader with a path."""
        self.config_path = Path(config_path or "config/default.yaml")
        self._config_data: Optional[Dict] = None

    def load(self) -> Dict:
        """Load raw configuration data from YAML file.

        Loads the YAML file and caches the result. Subsequent calls
        return the cached data.

        Returns
        -------
        Dict
            The parsed YAML configuration as a dictionary

        Raises
        ------
        FileNotFoundError
            If the configuration file doesn't exist
        yaml.YAMLError
            If the YAML file is malformed
        """
        if self._config_data is None:
            if not self.config_path.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}"
                )

            with open(self.config_path) as f:
                try:
                    self._config_data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise yaml.YAMLError(
                        f"Failed to parse config file {self.config_path}: {e}"
                    )

        return self._config_data

    def get_exchange_config(self) -> ExchangeConfig:
        """Get exchange-specific configuration.

        Returns
        -------
        ExchangeConfig
            The exchange configuration with defaults applied

        Raises
        ------
        ValueError
            If the trade window is not a positive number
        """
        data = self.load()
        exchange_data = data.get("exchange", {})

        window = exchange_data.get("trade_window_seconds", 900.0)
        window = _positive_number(window, "trade_window_seconds")

        return ExchangeConfig(trade_window_seconds=window)

    def get_securities(self) -> List[SecurityConfig]:
        """Get security definitions from configuration.

        Each entry requires ``symbol``, ``last_dividend`` and ``par_value``.
        A preferred stock gives its fixed dividend either as a fraction
        (``fixed_dividend: 0.02``) or as a percentage
        (``fixed_dividend_percentage: 2``), not both.

        Returns
        -------
        List[SecurityConfig]
            Configured securities, or empty list if none defined

        Raises
        ------
        KeyError
            If required security fields are missing
        ValueError
            If a value is negative, a symbol is repeated, or both fixed
            dividend forms are given

        Examples
        --------
        >>> loader = ConfigLoader()
        >>> [s.symbol for s in loader.get_securities()]
        ['TEA', 'POP', 'ALE', 'GIN', 'JOE']
        """
        data = self.load()
        securities_data = data.get("securities", [])

        securities = []
        seen = set()
        for sec_data in securities_data:
            # Required fields - will raise KeyError if missing
            symbol = str(sec_data["symbol"])
            last_dividend = _non_negative_number(
                sec_data["last_dividend"], f"last_dividend for {symbol}"
            )
            par_value = _non_negative_number(
                sec_data["par_value"], f"par_value for {symbol}"
            )

            if symbol in seen:
                raise ValueError(f"Duplicate security symbol: {symbol}")
            seen.add(symbol)

            if (
                "fixed_dividend" in sec_data
                and "fixed_dividend_percentage" in sec_data
            ):
                raise ValueError(
                    f"Security {symbol} sets both fixed_dividend and "
                    "fixed_dividend_percentage. Use only one."
                )

            fixed_dividend = 0.0
            if "fixed_dividend_percentage" in sec_data:
                fixed_dividend = (
                    _non_negative_number(
                        sec_data["fixed_dividend_percentage"],
                        f"fixed_dividend_percentage for {symbol}",
                    )
                    / 100.0
                )
            elif "fixed_dividend" in sec_data:
                fixed_dividend = _non_negative_number(
                    sec_data["fixed_dividend"], f"fixed_dividend for {symbol}"
                )

            securities.append(
                SecurityConfig(
                    symbol=symbol,
                    last_dividend=last_dividend,
                    par_value=par_value,
                    fixed_dividend=fixed_dividend,
                )
            )

        return securities

    def get_demo_config(self) -> DemoConfig:
        """Get demo session settings, defaults applied for missing keys.

        Raises
        ------
        ValueError
            If a numeric setting is negative or NaN, the trade window is not
            positive, or the sell probability is outside [0, 1]
        """
        data = self.load()
        demo_data = data.get("demo", {})
        defaults = DemoConfig()

        trades = demo_data.get(
            "trades_per_security", defaults.trades_per_security
        )
        if isinstance(trades, bool) or not isinstance(trades, int) or trades < 0:
            raise ValueError(
                f"Invalid trades_per_security: {trades}. "
                "Must be a non-negative integer."
            )

        max_quantity = demo_data.get("max_quantity", defaults.max_quantity)
        if (
            isinstance(max_quantity, bool)
            or not isinstance(max_quantity, int)
            or max_quantity < 0
        ):
            raise ValueError(
                f"Invalid max_quantity: {max_quantity}. "
                "Must be a non-negative integer."
            )

        sell_probability = _non_negative_number(
            demo_data.get("sell_probability", defaults.sell_probability),
            "sell_probability",
        )
        if sell_probability > 1:
            raise ValueError(
                f"Invalid sell_probability: {sell_probability}. "
                "Must be between 0 and 1."
            )

        return DemoConfig(
            trades_per_security=trades,
            trade_interval_seconds=_non_negative_number(
                demo_data.get(
                    "trade_interval_seconds", defaults.trade_interval_seconds
                ),
                "trade_interval_seconds",
            ),
            trade_window_seconds=_positive_number(
                demo_data.get(
                    "trade_window_seconds", defaults.trade_window_seconds
                ),
                "trade_window_seconds",
            ),
            max_price=_non_negative_number(
                demo_data.get("max_price", defaults.max_price), "max_price"
            ),
            max_quantity=max_quantity,
            sell_probability=sell_probability,
            seed=demo_data.get("seed", defaults.seed),
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration.

        Raises
        ------
        ValueError
            If the level is not a standard logging level name
        """
        data = self.load()
        logging_data = data.get("logging", {})
        defaults = LoggingConfig()

        level = str(logging_data.get("level", defaults.level)).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid logging level '{level}'. "
                f"Valid levels are: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )

        return LoggingConfig(
            level=level,
            format=logging_data.get("format", defaults.format),
        )

    def configure_logging(self) -> None:
        """Apply the logging section to the root logger."""
        logging_config = self.get_logging_config()
        logging.basicConfig(
            level=getattr(logging, logging_config.level),
            format=logging_config.format,
        )
