"""Factory for creating configured exchange instances.

This module provides factory methods to create ExchangeVenue instances
with their securities listed from configuration.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from ...domain.exchange.core.ledger import Clock
from ...domain.exchange.venue import ExchangeVenue
from ..config.loader import ConfigLoader
from ..config.models import ExchangeConfig, SecurityConfig

logger = logging.getLogger(__name__)


class ExchangeFactory:
    """Factory for creating configured exchange instances.

    This class provides static methods to create ExchangeVenue instances
    based on configuration objects, hiding the details of window setup
    and security listing.
    """

    @staticmethod
    def create_from_config(
        config: ExchangeConfig,
        securities: Iterable[SecurityConfig] = (),
        clock: Optional[Clock] = None,
    ) -> ExchangeVenue:
        """Create exchange based on configuration.

        Parameters
        ----------
        config : ExchangeConfig
            Configuration specifying the exchange settings
        securities : Iterable[SecurityConfig]
            Securities to list, in order
        clock : Optional[Clock]
            Time source for trade timestamps, defaults to ``datetime.now``

        Returns
        -------
        ExchangeVenue
            Configured exchange with every security listed

        Raises
        ------
        SecurityAlreadyExistsError
            If two securities share a symbol
        """
        exchange = ExchangeVenue(
            trade_window=config.trade_window,
            clock=clock or datetime.now,
        )

        for security in securities:
            exchange.add_security(
                security.symbol,
                security.last_dividend,
                security.par_value,
                security.fixed_dividend,
            )

        logger.info(
            f"Created exchange with {len(exchange)} securities and a "
            f"{config.trade_window_seconds}s trade window"
        )
        return exchange

    @staticmethod
    def create_from_loader(
        loader: ConfigLoader, clock: Optional[Clock] = None
    ) -> ExchangeVenue:
        """Create exchange from the exchange and securities sections."""
        return ExchangeFactory.create_from_config(
            loader.get_exchange_config(),
            loader.get_securities(),
            clock=clock,
        )
