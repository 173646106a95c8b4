"""Factories that build configured domain objects."""

from .exchange_factory import ExchangeFactory

__all__ = ["ExchangeFactory"]
