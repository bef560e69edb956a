"""Chart overlay computation with simple caching."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Sequence

import numpy as np
import pandas as pd

from app.config import get_settings
from nivesh_advisor.indicators import (
    ema_alignment_signal,
    ema_sma_seeded,
    rsi,
    sma_series,
)
from nivesh_advisor.models import EMASignal, PriceBar

EMA_PERIODS = (9, 21, 50, 200)
SMA_PERIODS = (20, 50)


@dataclass
class CachedIndicators:
    symbol: str
    as_of: datetime
    data: pd.DataFrame


class IndicatorCache:
    """In-memory cache for per-symbol indicator dataframes."""

    def __init__(self) -> None:
        self._store: Dict[str, CachedIndicators] = {}

    @staticmethod
    def _expired(cached: CachedIndicators, now: datetime) -> bool:
        ttl = timedelta(minutes=get_settings().indicator_cache_ttl_minutes)
        return now - cached.as_of > ttl

    def get(self, symbol: str) -> CachedIndicators | None:
        cached = self._store.get(symbol)
        if not cached:
            return None
        if self._expired(cached, datetime.utcnow()):
            self._store.pop(symbol, None)
            return None
        return cached

    def set(self, symbol: str, df: pd.DataFrame) -> None:
        now = datetime.utcnow()
        # drop stale symbols so the store only holds recently requested ones
        for key in [k for k, v in self._store.items() if self._expired(v, now)]:
            del self._store[key]
        self._store[symbol] = CachedIndicators(symbol=symbol, as_of=now, data=df)

    def __len__(self) -> int:
        return len(self._store)

    def clear(self) -> None:
        self._store.clear()


_cache = IndicatorCache()


def bars_to_frame(bars: Sequence[PriceBar]) -> pd.DataFrame:
    """Return an oldest-first OHLCV frame indexed by date from newest-first bars."""

    if not bars:
        return pd.DataFrame(columns=["open", "high", "low", "close", "volume"])
    df = pd.DataFrame(
        {
            "open": [bar.open for bar in bars],
            "high": [bar.high for bar in bars],
            "low": [bar.low for bar in bars],
            "close": [bar.close for bar in bars],
            "volume": [bar.volume for bar in bars],
        },
        index=pd.to_datetime([bar.date for bar in bars]),
    )
    return df.iloc[::-1].copy()


def _as_series(values: Sequence[float | None], index: pd.Index) -> pd.Series:
    return pd.Series([np.nan if v is None else v for v in values], index=index, dtype=float)


def compute_chart_indicators(symbol: str, bars: Sequence[PriceBar]) -> pd.DataFrame:
    """Add EMA/SMA overlay columns to the price frame and cache the result.

    EMAs use the SMA-seeded variant so long periods stay empty until enough
    history exists.
    """

    df = bars_to_frame(bars)
    closes = df["close"].tolist()
    for period in EMA_PERIODS:
        df[f"ema_{period}"] = _as_series(ema_sma_seeded(closes, period), df.index)
    for period in SMA_PERIODS:
        df[f"sma_{period}"] = _as_series(sma_series(closes, period), df.index)
    _cache.set(symbol, df)
    return df


def latest_ema_signal(df: pd.DataFrame) -> EMASignal:
    """Grade the most recent row of an indicator frame."""

    if df.empty:
        return ema_alignment_signal(None, None, None, 0.0)
    last = df.iloc[-1]
    return ema_alignment_signal(
        float(last["ema_21"]),
        float(last["ema_50"]),
        float(last["ema_200"]),
        float(last["close"]),
    )


def latest_rsi(df: pd.DataFrame, period: int = 14) -> float:
    # rsi() expects newest-first closes
    return rsi(df["close"].iloc[::-1].tolist(), period)


def get_cached_indicators(symbol: str) -> pd.DataFrame | None:
    cached = _cache.get(symbol)
    return cached.data if cached else None


def clear_indicator_cache() -> None:
    _cache.clear()


__all__ = [
    "EMA_PERIODS",
    "IndicatorCache",
    "SMA_PERIODS",
    "bars_to_frame",
    "clear_indicator_cache",
    "compute_chart_indicators",
    "get_cached_indicators",
    "latest_ema_signal",
    "latest_rsi",
]
