"""Exception taxonomy for the exchange domain.

Every exception is raised where the problem is detected and propagates
unchanged through the calling layers. The only translation happens in
ExchangeVenue, which turns a missing dictionary key into
SecurityNotFoundError.
"""

from typing import Optional

from ...constants import ErrorCodes, ErrorMessages


class ExchangeError(Exception):
    """Base class for all exchange failures.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.

    Attributes
    ----------
    error_code : str
        Stable code identifying the failure kind.
    """

    error_code = "EXCHANGE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NegativeValueError(ExchangeError, ValueError):
    """A quantity, price, dividend or par value was negative."""

    error_code = ErrorCodes.NEGATIVE_VALUE

    def __init__(
        self, field: Optional[str] = None, value: Optional[float] = None
    ):
        if field is None:
            message = ErrorMessages.NEGATIVE_VALUE
        else:
            message = ErrorMessages.format_negative_value(field, value)
        super().__init__(message)
        self.field = field
        self.value = value


class EmptyIdentifierError(ExchangeError, ValueError):
    """A security was constructed with an empty symbol."""

    error_code = ErrorCodes.EMPTY_IDENTIFIER

    def __init__(self):
        super().__init__(ErrorMessages.EMPTY_IDENTIFIER)


class InvalidDenominatorError(ExchangeError, ArithmeticError):
    """A ratio was requested with a negative denominator."""

    error_code = ErrorCodes.INVALID_DENOMINATOR

    def __init__(self, field: str, value: float):
        super().__init__(
            f"{ErrorMessages.INVALID_DENOMINATOR}: {field}={value}"
        )
        self.field = field
        self.value = value


class SecurityNotFoundError(ExchangeError, LookupError):
    """No security is listed under the requested symbol."""

    error_code = ErrorCodes.SECURITY_NOT_FOUND

    def __init__(self, symbol: str):
        super().__init__(ErrorMessages.format_not_found(symbol))
        self.symbol = symbol


class SecurityAlreadyExistsError(ExchangeError, ValueError):
    """A security with the same symbol is already listed."""

    error_code = ErrorCodes.SECURITY_ALREADY_EXISTS

    def __init__(self, symbol: str):
        super().__init__(ErrorMessages.format_already_exists(symbol))
        self.symbol = symbol


class EmptyExchangeError(ExchangeError, ValueError):
    """The share index was requested with no listed securities."""

    error_code = ErrorCodes.EMPTY_EXCHANGE

    def __init__(self):
        super().__init__(ErrorMessages.EMPTY_EXCHANGE)
