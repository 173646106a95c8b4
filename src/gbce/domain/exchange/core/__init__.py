"""Core exchange models: trade records, ledgers and securities."""

from .ledger import FIFTEEN_MINUTES, FIVE_SECONDS, HALF_SECOND, TradeLedger
from .security import Security
from .trade import TradeRecord

__all__ = [
    "TradeRecord",
    "TradeLedger",
    "Security",
    "FIFTEEN_MINUTES",
    "FIVE_SECONDS",
    "HALF_SECOND",
]
