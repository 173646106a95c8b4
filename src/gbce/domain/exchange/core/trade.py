"""
Trade record module for the GBCE exchange.

This module defines the TradeRecord class, which represents one trade kept
in a security's ledger.
"""

from dataclasses import dataclass
from datetime import datetime

from ..types import TradeSide


@dataclass(frozen=True)
class TradeRecord:
    r"""
    Represents a single trade recorded against a security.

    A trade record captures when shares changed hands, how many, in which
    direction, and at what price. Records are immutable: once a trade is in
    the ledger it is only ever removed, never edited.

    Parameters
    ----------
    timestamp : datetime
        Wall-clock instant at which the trade was recorded.
    quantity : int
        Number of shares traded.
    side : TradeSide
        Whether the shares were bought or sold.
    price : float
        Price per share of the trade.

    Notes
    -----
    The notional value of a trade is:

    $$\text{Value} = \text{Price} \times \text{Quantity}$$

    Summing notional values and quantities over a window is what yields
    the volume-weighted stock price computed by the ledger.

    TradingContext
    --------------
    This implementation assumes:
    - Records carry no counterparty or order identifiers
    - Validation happens in Security before a record is created
    - The side never influences any price calculation

    Examples
    --------
    >>> record = TradeRecord(
    ...     timestamp=datetime(2024, 1, 2, 9, 30),
    ...     quantity=10,
    ...     side=TradeSide.BUY,
    ...     price=150.0,
    ... )
    >>> record.value
    1500.0
    """

    timestamp: datetime
    quantity: int
    side: TradeSide
    price: float

    @property
    def value(self) -> float:
        """Notional value of the trade (price * quantity)."""
        return self.price * self.quantity

    def to_dict(self) -> dict:
        """
        Convert the record to a dictionary for debug output.

        Returns
        -------
        dict
            The timestamp in ISO format, quantity, side, price and value.
        """
        return {
            "timestamp": self.timestamp.isoformat(timespec="milliseconds"),
            "quantity": self.quantity,
            "side": self.side.value,
            "price": self.price,
            "value": self.value,
        }
