"""Volatility estimator tests."""

from __future__ import annotations

import pytest

from nivesh_advisor.volatility import daily_returns_pct, volatility


def test_needs_two_prices():
    assert volatility([]) == 0
    assert volatility([100.0]) == 0


def test_flat_series_has_zero_volatility():
    assert volatility([100.0] * 10) == 0


def test_population_standard_deviation():
    # returns: +10% and -9.0909%
    prices = [110.0, 100.0, 110.0]
    returns = [10.0, (100.0 - 110.0) / 110.0 * 100]
    mean = sum(returns) / 2
    expected = (sum((r - mean) ** 2 for r in returns) / 2) ** 0.5
    assert volatility(prices) == pytest.approx(expected)
    assert volatility(prices) == pytest.approx(9.5454545, rel=1e-6)


def test_uses_at_most_29_returns():
    prices = [100.0 + (i % 2) for i in range(40)]
    assert len(daily_returns_pct(prices)) == 29
    assert volatility(prices) == volatility(prices[:30])


def test_zero_price_is_skipped():
    assert daily_returns_pct([100.0, 0.0, 50.0]) == [pytest.approx(-100.0)]
