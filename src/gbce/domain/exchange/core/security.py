"""
Security module for the GBCE exchange.

This module defines the Security class, a listed stock together with its
dividend parameters, current price and trade ledger.
"""

import logging
import math
import numbers
from datetime import datetime, timedelta
from typing import Optional, Union

from ..errors import (
    EmptyIdentifierError,
    InvalidDenominatorError,
    NegativeValueError,
)
from ..types import SecurityType, TradeSide
from .ledger import FIFTEEN_MINUTES, Clock, TradeLedger
from .numeric import ieee_divide

logger = logging.getLogger(__name__)


def _require_non_negative(field: str, value: float) -> None:
    # NaN fails every comparison, so test for the accepted range
    if not value >= 0:
        raise NegativeValueError(field, value)


def _require_whole_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(
        quantity, numbers.Integral
    ):
        raise ValueError(
            f"Trade quantity must be a whole number, got {quantity!r}"
        )
    _require_non_negative("quantity", quantity)


class Security:
    r"""
    A stock listed on the exchange.

    A security is identified by its symbol and described by its last
    dividend, par value and fixed dividend rate. It owns a TradeLedger and
    derives dividend yield, P/E ratio and windowed stock price from these.

    Common and preferred stocks share this single class: a positive fixed
    dividend rate makes the security preferred, anything else is common.

    Parameters
    ----------
    symbol : str
        Unique, non-empty identifier of the security.
    last_dividend : float, default=0.0
        Most recent dividend paid per share.
    par_value : float, default=0.0
        Nominal value per share.
    fixed_dividend : float, default=0.0
        Fixed dividend rate as a fraction (0.02 means 2%).
    trade_window : timedelta or float, default=15 minutes
        Retention window of the owned ledger.
    clock : Callable[[], datetime], default=datetime.now
        Time source forwarded to the owned ledger.

    Raises
    ------
    EmptyIdentifierError
        If ``symbol`` is empty.
    NegativeValueError
        If any dividend or par value argument is negative.

    Notes
    -----
    Dividend yield depends on the security type:

    $$\text{Yield}_{common} = \frac{D_{last}}{P}$$

    $$\text{Yield}_{preferred} = \frac{r_{fixed} \times V_{par}}{P}$$

    and the P/E ratio is:

    $$\text{P/E} = \frac{P}{D_{last}}$$

    A zero denominator is not an error: it resolves to ``inf`` or ``nan``
    following IEEE-754. A negative denominator raises
    InvalidDenominatorError.

    For the share index, each security caches its contribution
    $P^{1/n}$. The cache is refreshed by ``has_changed`` only when the
    exponent or the price differs from the last values it saw, sparing
    repeated ``pow`` calls when nothing moved.

    TradingContext
    --------------
    This implementation assumes:
    - Trades are always recorded at the security's current stored price
    - The trade side never affects any calculation
    - Instances are used from a single thread

    Examples
    --------
    >>> ale = Security("ALE", last_dividend=23.0, par_value=60.0)
    >>> ale.set_price(10.0)
    >>> ale.is_common()
    True
    >>> round(ale.dividend_yield(), 2)
    2.3

    >>> gin = Security("GIN", 8.0, 100.0, fixed_dividend=0.02)
    >>> gin.set_price(10.0)
    >>> round(gin.dividend_yield(), 2)
    0.2
    """

    def __init__(
        self,
        symbol: str,
        last_dividend: float = 0.0,
        par_value: float = 0.0,
        fixed_dividend: float = 0.0,
        trade_window: Union[timedelta, float] = FIFTEEN_MINUTES,
        clock: Clock = datetime.now,
    ):
        if not symbol:
            raise EmptyIdentifierError()
        _require_non_negative("last_dividend", last_dividend)
        _require_non_negative("par_value", par_value)
        _require_non_negative("fixed_dividend", fixed_dividend)

        self._symbol = symbol
        self._ledger = TradeLedger(window=trade_window, clock=clock)

        self._price = 0.0
        self._last_dividend = float(last_dividend)
        self._fixed_dividend = float(fixed_dividend)
        self._par_value = float(par_value)

        # Share index contribution cache
        self._previous_exponent = 0.0
        self._previous_price = 0.0
        self._price_pow = 0.0

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def price(self) -> float:
        return self._price

    @property
    def last_dividend(self) -> float:
        return self._last_dividend

    @property
    def fixed_dividend(self) -> float:
        return self._fixed_dividend

    @property
    def fixed_dividend_percentage(self) -> float:
        return self._fixed_dividend * 100.0

    @property
    def par_value(self) -> float:
        return self._par_value

    @property
    def trade_count(self) -> int:
        """Number of trades currently held by the ledger."""
        return len(self._ledger)

    @property
    def trade_window(self) -> timedelta:
        return self._ledger.window

    @property
    def security_type(self) -> SecurityType:
        if self.is_preferred():
            return SecurityType.PREFERRED
        return SecurityType.COMMON

    def is_common(self) -> bool:
        """Whether the security has no fixed dividend rate."""
        return self._fixed_dividend <= 0.0

    def is_preferred(self) -> bool:
        """Whether the security has a positive fixed dividend rate."""
        return self._fixed_dividend > 0.0

    def set_price(self, price: float) -> None:
        _require_non_negative("price", price)
        self._price = float(price)

    def set_last_dividend(self, dividend: float) -> None:
        _require_non_negative("last_dividend", dividend)
        self._last_dividend = float(dividend)

    def set_fixed_dividend(self, dividend: float) -> None:
        _require_non_negative("fixed_dividend", dividend)
        self._fixed_dividend = float(dividend)

    def set_fixed_dividend_percentage(self, percentage: float) -> None:
        """Set the fixed dividend rate from a percentage (2.0 means 2%)."""
        _require_non_negative("fixed_dividend_percentage", percentage)
        self._fixed_dividend = percentage / 100.0

    def set_trade_window(self, window: Union[timedelta, float]) -> None:
        """Change the retention window of the owned ledger."""
        self._ledger.set_window(window)

    def add_trade(
        self,
        quantity: int,
        side: Union[TradeSide, str, bool],
        price: Optional[float] = None,
    ) -> None:
        """
        Record a trade against this security.

        Parameters
        ----------
        quantity : int
            Number of shares traded.
        side : TradeSide, str or bool
            Buy/sell indicator. A boolean is read as "is sell".
        price : float, optional
            Price reported with the trade. Defaults to the stored price.

        Raises
        ------
        NegativeValueError
            If the quantity or the price is negative or NaN.
        ValueError
            If the quantity is not a whole number.

        Notes
        -----
        The explicit ``price`` is validated but the trade is always recorded
        at the security's stored price, which stays the single source of
        truth for pricing.
        """
        if price is None:
            _require_whole_quantity(quantity)
            _require_non_negative("price", self._price)
            self.add_trade(quantity, side, self._price)
            return

        _require_whole_quantity(quantity)
        _require_non_negative("price", price)

        self._ledger.add_trade(quantity, TradeSide.coerce(side), self._price)

    def dividend_yield(self, ticker_price: Optional[float] = None) -> float:
        """
        Dividend yield at the given ticker price.

        Parameters
        ----------
        ticker_price : float, optional
            Price to divide by. Defaults to the stored price.

        Returns
        -------
        float
            ``last_dividend / P`` for common stock,
            ``fixed_dividend * par_value / P`` for preferred stock.
            A zero ticker price yields ``inf`` or ``nan``.

        Raises
        ------
        InvalidDenominatorError
            If the ticker price is negative.
        """
        if ticker_price is None:
            ticker_price = self._price

        if ticker_price < 0:
            raise InvalidDenominatorError("ticker_price", ticker_price)

        if self.is_common():
            return ieee_divide(self._last_dividend, ticker_price)
        return ieee_divide(self._fixed_dividend * self._par_value, ticker_price)

    def pe_ratio(self, ticker_price: Optional[float] = None) -> float:
        """
        Price to earnings ratio at the given ticker price.

        Parameters
        ----------
        ticker_price : float, optional
            Price to use. Defaults to the stored price.

        Returns
        -------
        float
            ``ticker_price / last_dividend``; ``inf`` when the last dividend
            is zero.

        Raises
        ------
        InvalidDenominatorError
            If the last dividend is negative. Setters already reject
            negative dividends, so this only guards corrupted state.
        """
        if ticker_price is None:
            ticker_price = self._price

        if self._last_dividend < 0:
            raise InvalidDenominatorError("last_dividend", self._last_dividend)

        return ieee_divide(ticker_price, self._last_dividend)

    def has_changed(self, exponent: float) -> bool:
        """
        Refresh the cached index contribution if its inputs moved.

        Parameters
        ----------
        exponent : float
            Exponent shared by all securities, ``1 / n``.

        Returns
        -------
        bool
            True if the exponent or the price differs from the previous
            call, in which case ``price ** exponent`` was recomputed.
        """
        changed = (
            exponent != self._previous_exponent
            or self._price != self._previous_price
        )

        if changed:
            self._previous_exponent = exponent
            self._previous_price = self._price
            self._price_pow = math.pow(self._price, exponent)
            logger.debug(
                f"{self._symbol} contribution recomputed: "
                f"{self._price} ** {exponent} = {self._price_pow}"
            )

        return changed

    def cached_contribution(self) -> float:
        """Last value computed by ``has_changed``."""
        return self._price_pow

    def stock_price(self) -> float:
        """Volume-weighted price of the trades inside the window."""
        return self._ledger.windowed_price()

    def stock_price_and_clear(self) -> float:
        """Windowed stock price, then eviction of stale trades."""
        return self._ledger.windowed_price_then_evict()

    def evict_stale_trades(self) -> int:
        return self._ledger.evict_stale()

    def clear_trades(self) -> None:
        self._ledger.clear()

    def to_dict(self) -> dict:
        """
        Debug summary of the security.

        Returns
        -------
        dict
            Identity, dividend parameters, price, derived ratios, number of
            trades and windowed stock price.
        """
        return {
            "symbol": self._symbol,
            "type": self.security_type.value,
            "last_dividend": self._last_dividend,
            "par_value": self._par_value,
            "fixed_dividend": self._fixed_dividend,
            "price": self._price,
            "dividend_yield": self.dividend_yield(),
            "pe_ratio": self.pe_ratio(),
            "trade_count": self.trade_count,
            "stock_price": self.stock_price(),
        }

    def __repr__(self) -> str:
        return (
            f"Security(symbol={self._symbol!r}, "
            f"type={self.security_type.value}, price={self._price})"
        )
