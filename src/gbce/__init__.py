"""
GBCE - Global Beverage Corporation Exchange.

An in-memory stock exchange that tracks recent trades per security and
derives dividend yield, P/E ratio, windowed stock price and the
exchange-wide share index.
"""

from .domain.exchange import (
    EmptyExchangeError,
    EmptyIdentifierError,
    ExchangeError,
    ExchangeVenue,
    InvalidDenominatorError,
    NegativeValueError,
    Security,
    SecurityAlreadyExistsError,
    SecurityNotFoundError,
    SecurityType,
    TradeLedger,
    TradeRecord,
    TradeSide,
)

__version__ = "0.1.0"

__all__ = [
    "ExchangeVenue",
    "Security",
    "TradeLedger",
    "TradeRecord",
    "TradeSide",
    "SecurityType",
    "ExchangeError",
    "NegativeValueError",
    "EmptyIdentifierError",
    "InvalidDenominatorError",
    "SecurityNotFoundError",
    "SecurityAlreadyExistsError",
    "EmptyExchangeError",
]
