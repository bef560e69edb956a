"""Chart overlay frame tests."""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from app.indicators.compute import (
    IndicatorCache,
    bars_to_frame,
    clear_indicator_cache,
    compute_chart_indicators,
    get_cached_indicators,
    latest_ema_signal,
    latest_rsi,
)
from nivesh_advisor.models import PriceBar


def _rising_bars(count: int) -> list[PriceBar]:
    start = date(2023, 1, 1)
    oldest_first = [
        PriceBar(
            date=start + timedelta(days=i),
            open=100.0 + i,
            high=101.0 + i,
            low=99.0 + i,
            close=100.0 + i,
            volume=1_000.0,
        )
        for i in range(count)
    ]
    return list(reversed(oldest_first))


def test_bars_to_frame_is_oldest_first():
    df = bars_to_frame(_rising_bars(3))
    assert df["close"].tolist() == [100.0, 101.0, 102.0]
    assert df.index[0] == pd.Timestamp(2023, 1, 1)


def test_overlays_are_padded_until_enough_history():
    clear_indicator_cache()
    df = compute_chart_indicators("TCS.NS", _rising_bars(250))
    assert pd.isna(df["ema_200"].iloc[198])
    assert df["ema_200"].iloc[199] == pytest.approx(sum(100.0 + i for i in range(200)) / 200)
    assert pd.isna(df["sma_20"].iloc[18])
    assert df["sma_20"].iloc[19] == pytest.approx(109.5)
    assert get_cached_indicators("TCS.NS") is df


def test_rising_series_has_strong_bullish_alignment():
    df = compute_chart_indicators("INFY.NS", _rising_bars(250))
    signal = latest_ema_signal(df)
    assert signal.type == "bullish"
    assert signal.strength == 5
    assert latest_rsi(df) == 100


def test_short_history_is_neutral():
    df = compute_chart_indicators("ITC.NS", _rising_bars(10))
    signal = latest_ema_signal(df)
    assert signal.type == "neutral"
    assert signal.strength == 0


def test_empty_history():
    df = compute_chart_indicators("EMPTY.NS", [])
    assert df.empty
    assert latest_ema_signal(df).type == "neutral"


def test_cache_drops_expired_symbols_on_write():
    cache = IndicatorCache()
    df = bars_to_frame(_rising_bars(3))
    cache.set("OLD.NS", df)
    cache._store["OLD.NS"].as_of -= timedelta(hours=1)
    cache.set("NEW.NS", df)
    assert len(cache) == 1
    assert cache.get("OLD.NS") is None
    assert cache.get("NEW.NS").data is df
