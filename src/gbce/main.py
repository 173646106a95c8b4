"""
GBCE - Main Module

This module serves as the entry point for the GBCE demo session.
"""

import logging
import random
import sys
import time
from pathlib import Path
from typing import Callable, Optional

import yaml

from .domain.exchange import ExchangeError, ExchangeVenue, TradeSide
from .infrastructure.config import ConfigLoader, DemoConfig
from .infrastructure.factories import ExchangeFactory

logger = logging.getLogger(__name__)


def run_demo(
    exchange: ExchangeVenue,
    demo: DemoConfig,
    sleep: Callable[[float], None] = time.sleep,
) -> float:
    """
    Drive a short random trading session on the exchange.

    Every security gets a random initial price. Then, one security at a
    time in symbol order, the trade window is shortened, a new price is
    set, the share index is logged, a batch of random trades is recorded,
    and the session pauses. Finally stale trades are evicted.

    Parameters
    ----------
    exchange : ExchangeVenue
        Exchange with securities already listed.
    demo : DemoConfig
        Session settings.
    sleep : Callable[[float], None]
        Pause function, replaceable in tests.

    Returns
    -------
    float
        The share index at the end of the session.
    """
    rng = random.Random(demo.seed)

    for security in exchange:
        security.set_price(rng.uniform(0.0, demo.max_price))

    for security in exchange:
        # A short window makes stale trades observable within the session
        security.set_trade_window(demo.trade_window_seconds)
        security.set_price(rng.uniform(0.0, demo.max_price))

        logger.info(f"Share index = {exchange.share_index()}")

        for _ in range(demo.trades_per_security):
            side = TradeSide.from_flag(rng.random() < demo.sell_probability)
            security.add_trade(rng.randint(0, demo.max_quantity), side)

        sleep(demo.trade_interval_seconds)

    evicted = exchange.evict_stale_trades()
    logger.info(f"Evicted {evicted} stale trades")

    for summary in exchange.snapshot()["securities"]:
        logger.info(
            ", ".join(f"{key} = {value}" for key, value in summary.items())
        )

    return exchange.share_index()


def main(config_path: Optional[Path] = None) -> int:
    """
    Main entry point for the application.

    Parameters
    ----------
    config_path : Optional[Path]
        YAML configuration, defaults to ``config/default.yaml``.

    Returns
    -------
    int
        0 on success, 1 if configuration or an exchange operation failed.
    """
    loader = ConfigLoader(config_path)

    try:
        loader.configure_logging()
        exchange = ExchangeFactory.create_from_loader(loader)
        share_index = run_demo(exchange, loader.get_demo_config())
    except (
        ExchangeError,
        FileNotFoundError,
        KeyError,
        ValueError,
        yaml.YAMLError,
    ) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    logger.info(f"Final share index = {share_index}")
    return 0


def cli() -> None:
    """Console script wrapper around ``main``."""
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    sys.exit(main(config_path))


if __name__ == "__main__":
    cli()
