"""Constants module for the GBCE exchange.

This module contains the error codes and error messages shared by the
exchange domain, preventing string duplication across the codebase.
"""

from .errors import ErrorCodes, ErrorMessages

__all__ = ["ErrorCodes", "ErrorMessages"]
