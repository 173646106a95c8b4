"""
Trade ledger module for the GBCE exchange.

This module defines the TradeLedger class, which keeps the time-ordered
trades of a single security and derives its windowed stock price.
"""

import bisect
import logging
from datetime import datetime, timedelta
from typing import Callable, Iterator, List, Union

from ..types import TradeSide
from .trade import TradeRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

FIFTEEN_MINUTES = timedelta(minutes=15)
FIVE_SECONDS = timedelta(seconds=5)
HALF_SECOND = timedelta(milliseconds=500)


def as_window(duration: Union[timedelta, float]) -> timedelta:
    """Read a window as a timedelta, numbers as seconds; must be positive."""
    if not isinstance(duration, timedelta):
        duration = timedelta(seconds=duration)
    if duration <= timedelta(0):
        raise ValueError(f"Trade window must be positive, got {duration}")
    return duration


class TradeLedger:
    r"""
    Time-ordered trade records with a trailing retention window.

    The ledger admits trades stamped with the current wall-clock time and
    answers one question: what is the volume-weighted average price of the
    trades recorded within the last ``window``? Records that fall out of the
    window are ignored by the price and can be compacted away with
    ``evict_stale``.

    Parameters
    ----------
    window : timedelta or float, default=15 minutes
        Retention window. Numbers are interpreted as seconds.
    clock : Callable[[], datetime], default=datetime.now
        Source of "now" used to stamp trades and compute ages.

    Attributes
    ----------
    _records : List[TradeRecord]
        Records sorted by timestamp, ties kept in insertion order.
    _timestamps : List[datetime]
        Timestamps parallel to ``_records`` for bisection.

    Notes
    -----
    The windowed stock price over records $i$ with age strictly less than
    the window is:

    $$P = \frac{\sum_i p_i q_i}{\sum_i q_i}$$

    Degenerate sums resolve to 0.0 instead of raising: an empty ledger, a
    total quantity of zero, or a non-positive total notional all yield 0.0.

    Because records are sorted by timestamp, stale records always form a
    prefix of the ledger, so eviction is a single slice deletion located by
    bisection.

    The ledger is not thread-safe. It is owned by exactly one Security and
    must only be driven from one thread at a time.

    Examples
    --------
    >>> ledger = TradeLedger(window=FIVE_SECONDS)
    >>> ledger.add_trade(10, TradeSide.BUY, 100.0)
    >>> ledger.add_trade(30, TradeSide.SELL, 200.0)
    >>> ledger.windowed_price()
    175.0
    """

    def __init__(
        self,
        window: Union[timedelta, float] = FIFTEEN_MINUTES,
        clock: Clock = datetime.now,
    ):
        self._window = as_window(window)
        self._clock = clock
        self._records: List[TradeRecord] = []
        self._timestamps: List[datetime] = []

    @property
    def window(self) -> timedelta:
        """Current retention window."""
        return self._window

    def set_window(self, duration: Union[timedelta, float]) -> None:
        """
        Reconfigure the retention window.

        Parameters
        ----------
        duration : timedelta or float
            New window. Numbers are interpreted as seconds.

        Raises
        ------
        ValueError
            If the window is zero or negative.

        Notes
        -----
        Only later calls to ``windowed_price`` and ``evict_stale`` see the
        new window. Records already evicted are not brought back.
        """
        self._window = as_window(duration)

    def add_trade(self, quantity: int, side: TradeSide, price: float) -> None:
        """
        Record a trade stamped with the current time.

        Parameters
        ----------
        quantity : int
            Number of shares traded.
        side : TradeSide
            Buy or sell indicator.
        price : float
            Price per share.

        Notes
        -----
        No validation is done here; Security checks its inputs before
        calling. Inserting never evicts.
        """
        timestamp = self._clock()
        record = TradeRecord(
            timestamp=timestamp, quantity=quantity, side=side, price=price
        )

        # bisect_right keeps equal timestamps in insertion order
        position = bisect.bisect_right(self._timestamps, timestamp)
        self._timestamps.insert(position, timestamp)
        self._records.insert(position, record)

        logger.debug(
            f"Recorded {side.value} {quantity} @ {price} at "
            f"{timestamp.isoformat(timespec='milliseconds')}"
        )

    def windowed_price(self) -> float:
        """
        Volume-weighted average price over the retention window.

        Returns
        -------
        float
            The VWAP of records younger than the window, or 0.0 if the
            ledger is empty or the sums are degenerate.
        """
        if not self._records:
            return 0.0

        now = self._clock()
        notional = 0.0
        quantity = 0.0

        for record in self._records:
            if now - record.timestamp >= self._window:
                continue
            notional += record.price * record.quantity
            quantity += record.quantity

        if quantity <= 0.0:
            return 0.0

        if notional <= 0.0:
            return 0.0

        return notional / quantity

    def evict_stale(self) -> int:
        """
        Remove every record whose age is at least the window.

        Returns
        -------
        int
            Number of records removed.
        """
        if not self._records:
            return 0

        cutoff = self._clock() - self._window
        # age >= window  <=>  timestamp <= now - window
        stale = bisect.bisect_right(self._timestamps, cutoff)
        if stale:
            del self._timestamps[:stale]
            del self._records[:stale]
            logger.debug(f"Evicted {stale} stale trades")
        return stale

    def windowed_price_then_evict(self) -> float:
        """Return the windowed price, then evict stale records."""
        result = self.windowed_price()
        self.evict_stale()
        return result

    def clear(self) -> None:
        """Remove all records."""
        self._records.clear()
        self._timestamps.clear()

    def is_empty(self) -> bool:
        """Whether the ledger holds no records."""
        return not self._records

    def to_dicts(self) -> List[dict]:
        """Debug representation of every record, oldest first."""
        return [record.to_dict() for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TradeRecord]:
        return iter(list(self._records))
