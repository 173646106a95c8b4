"""
Exchange Venue module for the GBCE exchange.

This module defines the ExchangeVenue class, which is the main entry point for
the exchange.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterator, List, Optional, Union

from .core.ledger import FIFTEEN_MINUTES, Clock, as_window
from .core.security import Security
from .errors import (
    EmptyExchangeError,
    SecurityAlreadyExistsError,
    SecurityNotFoundError,
)
from .types import TradeSide

logger = logging.getLogger(__name__)


class ExchangeVenue:
    r"""
    The Global Beverage Corporation Exchange.

    This class represents the venue where securities are listed. It keeps
    every security under its symbol, routes price updates, trades and ratio
    queries to the right security, and computes the exchange-wide share
    index.

    Responsibilities
    ---------------

    - List securities under unique symbols
    - Route symbol-addressed operations to the owning security
    - Translate unknown symbols into SecurityNotFoundError
    - Evict stale trades across all securities
    - Compute the share index with cached contributions

    NOT Responsible For
    -------------------

    - Validating prices, quantities or dividends (done by Security)
    - Windowed price arithmetic (done by TradeLedger)
    - Formatting output for humans (callers use ``snapshot``)

    Parameters
    ----------
    trade_window : timedelta or float, default=15 minutes
        Retention window given to every security listed from now on.
    clock : Callable[[], datetime], default=datetime.now
        Time source given to every security listed from now on.

    Attributes
    ----------
    _securities : Dict[str, Security]
        Map of symbols to their securities.
    _cached_index_value : Optional[float]
        Share index computed by the last recomputation, None until the
        first fold.

    Notes
    -----
    The share index is the geometric mean of the prices of all $n$ listed
    securities:

    $$I = \prod_{i=1}^{n} P_i^{1/n}$$

    Each security caches $P_i^{1/n}$ and reports whether its price or the
    exponent moved since the last call. The product is refolded only when
    at least one security reports a change; otherwise the cached index is
    returned unchanged.

    Iteration over securities is in sorted symbol order so that output and
    eviction order are deterministic.

    The venue is not thread-safe. Both the index cache and the per-security
    caches are plain mutable state; callers driving the venue from several
    threads must synchronise externally.

    TradingContext
    -------------
    This implementation assumes:

    - Securities are never delisted once added
    - A duplicate symbol is rejected, never overwritten
    - No order matching: trades are reported, not executed
    - The index is undefined for an exchange with no securities

    Examples
    --------
    >>> gbce = ExchangeVenue()
    >>> _ = gbce.add_security("ALE", 23.0, 60.0)
    >>> _ = gbce.add_security("GIN", 8.0, 100.0, fixed_dividend=0.02)
    >>> gbce.set_price("ALE", 10.0)
    >>> gbce.set_price("GIN", 10.0)
    >>> round(gbce.share_index(), 6)
    10.0
    """

    def __init__(
        self,
        trade_window: Union[timedelta, float] = FIFTEEN_MINUTES,
        clock: Clock = datetime.now,
    ):
        # Map of symbols to their securities
        self._securities: Dict[str, Security] = {}

        self._trade_window = as_window(trade_window)
        self._clock = clock

        # Last folded share index
        self._cached_index_value: Optional[float] = None

    def add_security(
        self,
        symbol: str,
        last_dividend: float,
        par_value: float,
        fixed_dividend: float = 0.0,
    ) -> Security:
        """
        List a new security on the exchange.

        Parameters
        ----------
        symbol : str
            Unique identifier of the security.
        last_dividend : float
            Most recent dividend per share.
        par_value : float
            Nominal value per share.
        fixed_dividend : float, default=0.0
            Fixed dividend rate as a fraction; positive means preferred.

        Returns
        -------
        Security
            The newly listed security.

        Raises
        ------
        SecurityAlreadyExistsError
            If a security with the same symbol is already listed.
        EmptyIdentifierError
            If ``symbol`` is empty.
        NegativeValueError
            If any numeric argument is negative.
        """
        if symbol in self._securities:
            raise SecurityAlreadyExistsError(symbol)

        security = Security(
            symbol,
            last_dividend,
            par_value,
            fixed_dividend,
            trade_window=self._trade_window,
            clock=self._clock,
        )
        self._securities[symbol] = security

        logger.info(
            f"Listed {security.security_type.value} security {symbol}: "
            f"last_dividend={last_dividend}, par_value={par_value}, "
            f"fixed_dividend={fixed_dividend}"
        )
        return security

    def get_security(self, symbol: str) -> Security:
        """
        Look up a listed security.

        Raises
        ------
        SecurityNotFoundError
            If no security is listed under ``symbol``.
        """
        try:
            return self._securities[symbol]
        except KeyError:
            logger.warning(f"Security {symbol} not found")
            raise SecurityNotFoundError(symbol) from None

    def get_all_securities(self) -> List[Security]:
        """All listed securities in symbol order."""
        return [self._securities[symbol] for symbol in self.symbols()]

    def symbols(self) -> List[str]:
        return sorted(self._securities)

    def set_price(self, symbol: str, price: float) -> None:
        self.get_security(symbol).set_price(price)

    def get_price(self, symbol: str) -> float:
        return self.get_security(symbol).price

    def add_trade(
        self,
        symbol: str,
        quantity: int,
        side: Union[TradeSide, str, bool],
    ) -> None:
        """Record a trade at the security's current price."""
        self.get_security(symbol).add_trade(quantity, side)

    def stock_price(self, symbol: str) -> float:
        return self.get_security(symbol).stock_price()

    def stock_price_and_clear(self, symbol: str) -> float:
        return self.get_security(symbol).stock_price_and_clear()

    def dividend_yield(self, symbol: str) -> float:
        return self.get_security(symbol).dividend_yield()

    def pe_ratio(self, symbol: str) -> float:
        return self.get_security(symbol).pe_ratio()

    def set_trade_window(self, window: Union[timedelta, float]) -> None:
        """
        Change the retention window of every security.

        Securities listed afterwards also receive the new window. A zero or
        negative window raises ValueError before any security is touched.
        """
        window = as_window(window)
        self._trade_window = window
        for security in self.get_all_securities():
            security.set_trade_window(window)

    def evict_stale_trades(self) -> int:
        """
        Evict stale trades from every security.

        Returns
        -------
        int
            Total number of records removed.
        """
        evicted = 0
        for security in self.get_all_securities():
            evicted += security.evict_stale_trades()
        return evicted

    def share_index(self) -> float:
        """
        Geometric mean of the prices of all listed securities.

        Returns
        -------
        float
            The share index, refolded only if any contribution changed.

        Raises
        ------
        EmptyExchangeError
            If no security is listed.

        Notes
        -----
        Two passes are made on purpose. The first calls ``has_changed`` on
        every security without short-circuiting, so every cache is current.
        The second folds the product when the first found a change, or when
        no product has been folded yet (a caller may already have refreshed
        every contribution cache through ``has_changed``).
        """
        if not self._securities:
            raise EmptyExchangeError()

        securities = self.get_all_securities()
        exponent = 1.0 / len(securities)

        changed = False
        for security in securities:
            # has_changed must run for every security
            changed = security.has_changed(exponent) or changed

        if changed or self._cached_index_value is None:
            product = 1.0
            for security in securities:
                product *= security.cached_contribution()
            self._cached_index_value = product
            logger.info(
                f"Share index recomputed over {len(securities)} "
                f"securities: {product}"
            )

        return self._cached_index_value

    def snapshot(self) -> Dict[str, object]:
        """
        Debug dump of the whole exchange.

        Returns
        -------
        Dict[str, object]
            ``securities`` with each security's ``to_dict`` in symbol order,
            and ``share_index`` (None when nothing is listed).
        """
        share_index: Optional[float] = None
        if self._securities:
            share_index = self.share_index()
        return {
            "securities": [s.to_dict() for s in self.get_all_securities()],
            "share_index": share_index,
        }

    def __len__(self) -> int:
        return len(self._securities)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._securities

    def __iter__(self) -> Iterator[Security]:
        return iter(self.get_all_securities())
