"""Short-window volatility of day-over-day percentage returns."""
from __future__ import annotations

import math
from typing import Sequence

# At most 29 return observations: the latest 30 prices.
VOLATILITY_WINDOW = 30


def daily_returns_pct(prices: Sequence[float], window: int = VOLATILITY_WINDOW) -> list[float]:
    """Percentage change of each price over the next older one, newest-first."""

    returns: list[float] = []
    for i in range(1, min(len(prices), window)):
        previous = prices[i]
        if previous == 0:
            continue
        returns.append(((prices[i - 1] - previous) / previous) * 100)
    return returns


def volatility(prices: Sequence[float]) -> float:
    """Population standard deviation of the latest daily returns, in percent."""

    if len(prices) < 2:
        return 0.0

    returns = daily_returns_pct(prices)
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((value - mean) ** 2 for value in returns) / len(returns)
    return math.sqrt(variance)


__all__ = ["VOLATILITY_WINDOW", "daily_returns_pct", "volatility"]
