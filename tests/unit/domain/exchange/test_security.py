"""Unit tests for the Security model."""

import math
from datetime import timedelta

import pytest

from gbce.domain.exchange.core.security import Security
from gbce.domain.exchange.errors import (
    EmptyIdentifierError,
    InvalidDenominatorError,
    NegativeValueError,
)
from gbce.domain.exchange.types import SecurityType, TradeSide
from tests.fixtures import create_test_security


class TestSecurityValidation:
    """Test construction and setter validation."""

    def test_empty_symbol_is_rejected(self):
        """
        Given an empty symbol
        When creating a security
        Then EmptyIdentifierError is raised
        """
        with pytest.raises(EmptyIdentifierError, match="empty symbol"):
            Security("")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"last_dividend": -1.0},
            {"par_value": -0.01},
            {"fixed_dividend": -0.02},
            {"last_dividend": float("nan")},
            {"par_value": float("nan")},
        ],
    )
    def test_negative_constructor_values_are_rejected(self, kwargs):
        """
        Given one negative or NaN numeric argument
        When creating a security
        Then NegativeValueError is raised
        """
        with pytest.raises(NegativeValueError):
            Security("POP", **kwargs)

    @pytest.mark.parametrize(
        "setter",
        [
            "set_price",
            "set_last_dividend",
            "set_fixed_dividend",
            "set_fixed_dividend_percentage",
        ],
    )
    @pytest.mark.parametrize("value", [-1.0, float("nan")])
    def test_negative_setter_values_are_rejected(self, setter, value):
        """
        Given a valid security
        When any setter receives a negative or NaN value
        Then NegativeValueError is raised and the state is unchanged
        """
        security = create_test_security("POP", price=10.0)
        before = security.to_dict()

        with pytest.raises(NegativeValueError):
            getattr(security, setter)(value)

        assert security.to_dict() == before

    def test_negative_value_error_is_a_value_error(self):
        """
        Given a negative price
        When setting it
        Then the error is also catchable as ValueError and names the field
        """
        security = create_test_security("POP")
        with pytest.raises(ValueError) as exc_info:
            security.set_price(-5.0)

        assert exc_info.value.field == "price"
        assert exc_info.value.error_code == "NEGATIVE_VALUE"

    def test_defaults(self):
        """
        Given only a symbol
        When creating a security
        Then all numbers start at zero and the security is common
        """
        security = Security("TEA")

        assert security.symbol == "TEA"
        assert security.price == 0.0
        assert security.last_dividend == 0.0
        assert security.par_value == 0.0
        assert security.fixed_dividend == 0.0
        assert security.is_common()
        assert security.trade_count == 0
        assert security.trade_window == timedelta(minutes=15)


class TestSecurityType:
    """Test common/preferred classification."""

    def test_common_stock(self):
        security = create_test_security("ALE")
        assert security.is_common()
        assert not security.is_preferred()
        assert security.security_type == SecurityType.COMMON

    def test_preferred_stock(self):
        security = create_test_security("GIN")
        assert security.is_preferred()
        assert not security.is_common()
        assert security.security_type == SecurityType.PREFERRED

    def test_fixed_dividend_percentage_round_trip(self):
        """
        Given a common stock
        When a 2% fixed dividend is set as a percentage
        Then the rate is stored as 0.02 and the stock becomes preferred
        """
        security = create_test_security("POP")

        security.set_fixed_dividend_percentage(2.0)

        assert security.fixed_dividend == pytest.approx(0.02)
        assert security.fixed_dividend_percentage == pytest.approx(2.0)
        assert security.is_preferred()

    def test_zero_fixed_dividend_makes_stock_common_again(self):
        security = create_test_security("GIN")
        security.set_fixed_dividend(0.0)
        assert security.is_common()


class TestDividendYield:
    """Test dividend yield formulas."""

    def test_common_dividend_yield(self):
        """
        Given ALE (last dividend 23) priced at 10
        When computing the dividend yield
        Then it is 23 / 10
        """
        security = create_test_security("ALE", price=10.0)
        assert 2.29 <= security.dividend_yield() <= 2.31

    def test_preferred_dividend_yield(self):
        """
        Given GIN (2% fixed, par 100) priced at 10
        When computing the dividend yield
        Then it is 0.02 * 100 / 10
        """
        security = create_test_security("GIN", price=10.0)
        assert 0.19999 <= security.dividend_yield() <= 0.20001

    def test_explicit_ticker_price_overrides_stored_price(self):
        security = create_test_security("ALE", price=10.0)
        assert security.dividend_yield(23.0) == pytest.approx(1.0)

    def test_negative_ticker_price_is_rejected(self):
        """
        Given a negative ticker price
        When computing the dividend yield
        Then InvalidDenominatorError is raised
        """
        security = create_test_security("ALE", price=10.0)
        with pytest.raises(InvalidDenominatorError):
            security.dividend_yield(-1.0)

    def test_zero_ticker_price_is_infinite(self):
        """
        Given a stored price of zero and a positive dividend
        When computing the dividend yield
        Then the result is +inf instead of an exception
        """
        security = create_test_security("ALE", price=0.0)
        assert security.dividend_yield() == math.inf

    def test_zero_dividend_over_zero_price_is_nan(self):
        security = create_test_security("TEA", price=0.0)
        assert math.isnan(security.dividend_yield())


class TestPeRatio:
    """Test the P/E ratio formula."""

    def test_positive_dividend(self):
        """
        Given JOE (last dividend 13) priced at 10
        When computing the P/E ratio
        Then it is 10 / 13
        """
        security = create_test_security("JOE", price=10.0)
        assert 0.769230 <= security.pe_ratio() <= 0.769232

    def test_zero_dividend_is_infinite(self):
        """
        Given TEA (last dividend 0) priced at 10
        When computing the P/E ratio
        Then it is +inf
        """
        security = create_test_security("TEA", price=10.0)
        assert math.isinf(security.pe_ratio())
        assert security.pe_ratio() > 0

    def test_explicit_ticker_price(self):
        security = create_test_security("POP", price=10.0)
        assert security.pe_ratio(16.0) == pytest.approx(2.0)

    def test_negative_last_dividend_is_rejected(self):
        """
        Given a last dividend corrupted to a negative value
        When computing the P/E ratio
        Then InvalidDenominatorError is raised
        """
        security = create_test_security("POP", price=10.0)
        security._last_dividend = -1.0

        with pytest.raises(InvalidDenominatorError):
            security.pe_ratio()


class TestSecurityTrades:
    """Test trade admission and ledger delegation."""

    def test_trades_are_recorded_at_stored_price(self, clock):
        """
        Given a security priced at 10
        When a trade reports an explicit price of 99
        Then the ledger records it at the stored price of 10
        """
        security = create_test_security("ALE", price=10.0, clock=clock)

        security.add_trade(5, TradeSide.BUY, 99.0)

        assert security.trade_count == 1
        assert security.stock_price() == pytest.approx(10.0)

    def test_trade_without_price_uses_stored_price(self, clock):
        security = create_test_security("ALE", price=12.5, clock=clock)

        security.add_trade(5, "sell")

        assert security.stock_price() == pytest.approx(12.5)

    def test_boolean_side_flag_is_accepted(self, clock):
        security = create_test_security("ALE", price=12.5, clock=clock)

        security.add_trade(5, True)

        assert security.trade_count == 1

    @pytest.mark.parametrize(
        "quantity,price", [(-1, 10.0), (1, -10.0), (1, float("nan"))]
    )
    def test_negative_trade_inputs_are_rejected(self, clock, quantity, price):
        """
        Given a negative quantity or a negative or NaN explicit price
        When adding a trade
        Then NegativeValueError is raised and nothing is recorded
        """
        security = create_test_security("ALE", price=10.0, clock=clock)

        with pytest.raises(NegativeValueError):
            security.add_trade(quantity, TradeSide.BUY, price)

        assert security.trade_count == 0

    @pytest.mark.parametrize("quantity", [2.5, 3.0, True, float("nan")])
    @pytest.mark.parametrize("price", [None, 10.0])
    def test_fractional_quantities_are_rejected(self, clock, quantity, price):
        """
        Given a quantity that is not a whole number of shares
        When adding a trade with or without an explicit price
        Then ValueError is raised and nothing is recorded
        """
        security = create_test_security("ALE", price=10.0, clock=clock)

        with pytest.raises(ValueError, match="whole number"):
            security.add_trade(quantity, TradeSide.BUY, price)

        assert security.trade_count == 0

    @pytest.mark.parametrize(
        "window", [0, -1.0, timedelta(0), timedelta(seconds=-5)]
    )
    def test_non_positive_trade_window_is_rejected(self, clock, window):
        """
        Given a security with a 5 second window
        When the window is set to zero or a negative duration
        Then ValueError is raised and the window is unchanged
        """
        security = create_test_security(
            "ALE", price=10.0, clock=clock, trade_window=timedelta(seconds=5)
        )

        with pytest.raises(ValueError, match="Trade window must be positive"):
            security.set_trade_window(window)

        assert security.trade_window == timedelta(seconds=5)

    def test_stock_price_follows_price_changes(self, clock):
        """
        Given trades recorded at two different stored prices
        When computing the stock price
        Then it is the volume-weighted mix of both
        """
        security = create_test_security("ALE", price=10.0, clock=clock)
        security.add_trade(10, TradeSide.BUY)
        security.set_price(20.0)
        security.add_trade(30, TradeSide.BUY)

        assert security.stock_price() == pytest.approx(17.5)

    def test_window_delegation(self, clock):
        """
        Given a security whose window is shortened to 5 seconds
        When 6 seconds pass
        Then the stock price drops to 0 and eviction clears the ledger
        """
        security = create_test_security("ALE", price=10.0, clock=clock)
        security.set_trade_window(timedelta(seconds=5))
        security.add_trade(10, TradeSide.BUY)
        clock.advance(seconds=6)

        assert security.stock_price() == 0.0
        assert security.evict_stale_trades() == 1
        assert security.trade_count == 0

    def test_stock_price_and_clear(self, clock):
        security = create_test_security(
            "ALE", price=10.0, clock=clock, trade_window=timedelta(seconds=5)
        )
        security.add_trade(10, TradeSide.BUY)
        clock.advance(seconds=6)
        security.set_price(30.0)
        security.add_trade(10, TradeSide.BUY)

        assert security.stock_price_and_clear() == pytest.approx(30.0)
        assert security.trade_count == 1

    def test_clear_trades(self, clock):
        security = create_test_security("ALE", price=10.0, clock=clock)
        security.add_trade(10, TradeSide.BUY)

        security.clear_trades()

        assert security.trade_count == 0


class TestIndexContributionCache:
    """Test the change-detection cache used by the share index."""

    def test_first_call_reports_change(self):
        """
        Given a fresh security priced at 16
        When asked with exponent 0.5
        Then a change is reported and the contribution is 16 ** 0.5
        """
        security = create_test_security("ALE", price=16.0)

        assert security.has_changed(0.5) is True
        assert security.cached_contribution() == pytest.approx(4.0)

    def test_repeated_call_reports_no_change(self):
        security = create_test_security("ALE", price=16.0)
        security.has_changed(0.5)

        assert security.has_changed(0.5) is False
        assert security.cached_contribution() == pytest.approx(4.0)

    def test_price_change_is_detected(self):
        """
        Given a cached contribution
        When the price moves
        Then exactly one call reports a change and the cache is refreshed
        """
        security = create_test_security("ALE", price=16.0)
        security.has_changed(0.5)

        security.set_price(25.0)

        assert security.has_changed(0.5) is True
        assert security.cached_contribution() == pytest.approx(5.0)
        assert security.has_changed(0.5) is False

    def test_exponent_change_is_detected(self):
        security = create_test_security("ALE", price=27.0)
        security.has_changed(0.5)

        assert security.has_changed(1.0 / 3.0) is True
        assert security.cached_contribution() == pytest.approx(3.0)

    def test_setting_same_price_is_not_a_change(self):
        security = create_test_security("ALE", price=16.0)
        security.has_changed(0.5)

        security.set_price(16.0)

        assert security.has_changed(0.5) is False

    def test_pow_is_skipped_when_nothing_changed(self, monkeypatch):
        """
        Given a cached contribution
        When has_changed is called again with the same inputs
        Then math.pow is not called
        """
        security = create_test_security("ALE", price=16.0)
        security.has_changed(0.5)

        calls = []
        monkeypatch.setattr(
            math, "pow", lambda base, exp: calls.append((base, exp)) or 0.0
        )
        security.has_changed(0.5)

        assert calls == []


class TestSecurityDebugOutput:
    """Test the debug summary."""

    def test_to_dict(self, clock):
        security = create_test_security("GIN", price=10.0, clock=clock)
        security.add_trade(4, TradeSide.BUY)

        summary = security.to_dict()

        assert summary["symbol"] == "GIN"
        assert summary["type"] == "preferred"
        assert summary["dividend_yield"] == pytest.approx(0.2)
        assert summary["pe_ratio"] == pytest.approx(1.25)
        assert summary["trade_count"] == 1
        assert summary["stock_price"] == pytest.approx(10.0)

    def test_repr(self):
        assert repr(create_test_security("TEA", price=1.5)) == (
            "Security(symbol='TEA', type=common, price=1.5)"
        )
