"""Common types and enums for the exchange module.

This module contains shared types used across the exchange components
to avoid circular imports.
"""

from enum import Enum
from typing import Union


class TradeSide(str, Enum):
    """Buy/sell indicator attached to every trade record.

    Attributes
    ----------
    BUY : str
        The trade was a purchase of shares.
    SELL : str
        The trade was a sale of shares.

    Notes
    -----
    The side is informational only. Neither the windowed stock price nor
    any ratio depends on it, so a ledger holding only sells prices exactly
    like one holding only buys.

    Examples
    --------
    >>> TradeSide("sell")
    <TradeSide.SELL: 'sell'>
    >>> TradeSide.from_flag(True)
    <TradeSide.SELL: 'sell'>
    """

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_flag(cls, is_sell: bool) -> "TradeSide":
        """Convert a boolean sell indicator into a side."""
        return cls.SELL if is_sell else cls.BUY

    @classmethod
    def coerce(cls, side: Union["TradeSide", str, bool]) -> "TradeSide":
        """Accept a TradeSide, its string value or a boolean sell flag.

        Raises
        ------
        ValueError
            If a string is not 'buy' or 'sell'.
        """
        if isinstance(side, cls):
            return side
        if isinstance(side, bool):
            return cls.from_flag(side)
        try:
            return cls(side)
        except ValueError:
            raise ValueError(f"Trade side must be 'buy' or 'sell', got {side!r}")


class SecurityType(str, Enum):
    """Dividend classification of a listed security.

    Attributes
    ----------
    COMMON : str
        No fixed dividend rate. Yield is derived from the last dividend.
    PREFERRED : str
        Positive fixed dividend rate. Yield is derived from the fixed
        rate applied to the par value.
    """

    COMMON = "common"
    PREFERRED = "preferred"
