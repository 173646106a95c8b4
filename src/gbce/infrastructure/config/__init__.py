"""Infrastructure configuration module."""

from .loader import ConfigLoader
from .models import DemoConfig, ExchangeConfig, LoggingConfig, SecurityConfig

__all__ = [
    "ConfigLoader",
    "ExchangeConfig",
    "SecurityConfig",
    "DemoConfig",
    "LoggingConfig",
]
