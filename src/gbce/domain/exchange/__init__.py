"""
Exchange module for the GBCE exchange.

This module contains the trade ledger, securities, the exchange venue and
the exceptions they raise.
"""

from .core import Security, TradeLedger, TradeRecord
from .errors import (
    EmptyExchangeError,
    EmptyIdentifierError,
    ExchangeError,
    InvalidDenominatorError,
    NegativeValueError,
    SecurityAlreadyExistsError,
    SecurityNotFoundError,
)
from .types import SecurityType, TradeSide
from .venue import ExchangeVenue

__all__ = [
    "TradeRecord",
    "TradeLedger",
    "Security",
    "ExchangeVenue",
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
