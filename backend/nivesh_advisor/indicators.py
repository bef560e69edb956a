"""Technical indicators computed from plain price sequences.

Ordering differs between helpers and callers depend on it:

* ``rsi`` and ``sma`` take closes **newest-first** (index 0 is today), the
  order in which snapshots store their history.
* ``ema``, ``ema_sma_seeded`` and ``sma_series`` take values **oldest-first**,
  the order chart series are plotted in.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .models import EMASignal, Trend

NEUTRAL_RSI = 50.0


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """Return a single-window RSI anchored at the most recent ``period + 1`` closes."""

    if period <= 0 or len(closes) < period + 1:
        return NEUTRAL_RSI

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = closes[i - 1] - closes[i]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def sma(closes: Sequence[float], period: int) -> float:
    """Average of the latest ``period`` closes, falling back to the latest close."""

    if period <= 0 or len(closes) < period:
        return float(closes[0]) if closes else 0.0
    return sum(closes[:period]) / period


def sma_series(values: Sequence[float], period: int) -> List[Optional[float]]:
    """Rolling simple moving average; the first ``period - 1`` points are ``None``."""

    result: List[Optional[float]] = []
    for i in range(len(values)):
        if period <= 0 or i < period - 1:
            result.append(None)
        else:
            window = values[i - period + 1 : i + 1]
            result.append(sum(window) / period)
    return result


def ema(values: Sequence[float], period: int) -> List[float]:
    """Exponential moving average seeded with the first value.

    Every index carries a value, including the warm-up region.
    """

    if not values:
        return []
    multiplier = 2 / (period + 1)
    result = [float(values[0])]
    for value in values[1:]:
        previous = result[-1]
        result.append((value - previous) * multiplier + previous)
    return result


def ema_sma_seeded(values: Sequence[float], period: int) -> List[Optional[float]]:
    """Exponential moving average seeded with the SMA of the first ``period`` values.

    Entries before the seed are ``None``; long-range chart overlays rely on the
    gap rather than on a value biased towards the first close.
    """

    multiplier = 2 / (period + 1)
    result: List[Optional[float]] = []
    for i, value in enumerate(values):
        if period <= 0 or i < period - 1:
            result.append(None)
        elif i == period - 1:
            result.append(sum(values[:period]) / period)
        else:
            previous = result[i - 1]
            if previous is None:
                result.append(None)
            else:
                result.append((value - previous) * multiplier + previous)
    return result


def classify_trend(price: float, ma50: float, ma200: float) -> Trend:
    if price > ma50 and ma50 > ma200:
        return "bullish"
    if price < ma50 and ma50 < ma200:
        return "bearish"
    return "neutral"


def _missing(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)


def ema_alignment_signal(
    ema21: Optional[float],
    ema50: Optional[float],
    ema200: Optional[float],
    price: float,
) -> EMASignal:
    """Grade how many of the five price/EMA alignment checks point upwards."""

    if _missing(ema21) or _missing(ema50) or _missing(ema200):
        return EMASignal(
            type="neutral",
            message="Insufficient data: Need at least 200 data points for full EMA analysis",
            strength=0,
        )

    bullish_count = sum(
        [
            price > ema21,
            price > ema50,
            price > ema200,
            ema21 > ema50,
            ema50 > ema200,
        ]
    )

    if bullish_count >= 4:
        return EMASignal(
            type="bullish",
            message="Strong Bullish: Price above all EMAs with bullish alignment",
            strength=bullish_count,
        )
    if bullish_count == 3:
        return EMASignal(
            type="bullish",
            message="Bullish: Most indicators showing upward momentum",
            strength=bullish_count,
        )
    if bullish_count <= 1:
        return EMASignal(
            type="bearish",
            message="Strong Bearish: Price below EMAs with bearish alignment",
            strength=5 - bullish_count,
        )
    return EMASignal(
        type="bearish",
        message="Bearish: Most indicators showing downward pressure",
        strength=5 - bullish_count,
    )


__all__ = [
    "NEUTRAL_RSI",
    "rsi",
    "sma",
    "sma_series",
    "ema",
    "ema_sma_seeded",
    "classify_trend",
    "ema_alignment_signal",
]
