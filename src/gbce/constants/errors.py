"""Error codes and messages used across the exchange."""


class ErrorCodes:
    """Error codes carried by exchange exceptions."""

    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    EMPTY_IDENTIFIER = "EMPTY_IDENTIFIER"
    INVALID_DENOMINATOR = "INVALID_DENOMINATOR"
    SECURITY_NOT_FOUND = "SECURITY_NOT_FOUND"
    SECURITY_ALREADY_EXISTS = "SECURITY_ALREADY_EXISTS"
    EMPTY_EXCHANGE = "EMPTY_EXCHANGE"


class ErrorMessages:
    """Error messages for user responses."""

    NEGATIVE_VALUE = "Unexpected negative value"
    EMPTY_IDENTIFIER = "Unexpected empty symbol"
    INVALID_DENOMINATOR = "Unexpected zero denominator"
    EMPTY_EXCHANGE = "Share index requires at least one listed security"

    @staticmethod
    def format_negative_value(field: str, value: float) -> str:
        """Format a negative value message."""
        return f"Unexpected negative value for {field}: {value}"

    @staticmethod
    def format_not_found(symbol: str) -> str:
        """Format an unknown security message."""
        return f"Security {symbol} not found"

    @staticmethod
    def format_already_exists(symbol: str) -> str:
        """Format a duplicate security message."""
        return f"Security with symbol {symbol} already exists"
