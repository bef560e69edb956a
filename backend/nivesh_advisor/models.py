"""Domain models used by the Nivesh Advisor analysis engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional, Sequence

RiskProfile = Literal["low", "medium", "high"]
Trend = Literal["bullish", "neutral", "bearish"]
Recommendation = Literal["strong_buy", "buy", "hold", "sell", "strong_sell"]

RISK_PROFILES: tuple[str, ...] = ("low", "medium", "high")


@dataclass(frozen=True)
class PriceBar:
    """Daily OHLCV bar for a listed stock."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class NavPoint:
    """Published net asset value of a mutual fund scheme on one day."""

    date: Optional[date]
    nav: float


@dataclass(frozen=True)
class StockSnapshot:
    """Quote, fundamentals and price history for one analysis pass.

    ``historical_data`` is stored newest-first: index 0 is the latest bar.
    """

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    open: float
    high: float
    low: float
    volume: float
    market_cap: float
    pe: float
    eps: float
    fifty_day_ma: float
    two_hundred_day_ma: float
    historical_data: Sequence[PriceBar] = field(default_factory=tuple)

    def closes(self) -> list[float]:
        """Return closing prices in stored (newest-first) order."""

        return [bar.close for bar in self.historical_data]


@dataclass(frozen=True)
class FundSnapshot:
    """NAV history and trailing returns of a mutual fund scheme."""

    scheme_code: str
    scheme_name: str
    nav: float
    date: Optional[date]
    nav_history: Sequence[NavPoint] = field(default_factory=tuple)
    cagr_1y: Optional[float] = None
    cagr_3y: Optional[float] = None
    cagr_5y: Optional[float] = None

    def navs(self) -> list[float]:
        return [point.nav for point in self.nav_history]


@dataclass(frozen=True)
class StockAnalysis:
    symbol: str
    technical_score: float
    fundamental_score: float
    risk_match_score: float
    total_score: float
    trend: Trend
    rsi: float
    recommendation: Recommendation


@dataclass(frozen=True)
class FundAnalysis:
    scheme_code: str
    returns_score: float
    stability_score: float
    total_score: float
    recommendation: Recommendation


@dataclass(frozen=True)
class YearlyEntry:
    """Cumulative SIP position at the end of one year."""

    year: int
    invested: int
    value: int
    returns: int
    sip_amount: int
    inflation_adjusted: int


@dataclass(frozen=True)
class SIPResult:
    """Outcome of a month-by-month SIP projection."""

    future_value: int
    total_invested: float
    total_returns: float
    inflation_adjusted_value: int
    taxable_gains: int
    post_tax_value: int
    yearly_breakdown: list[YearlyEntry] = field(default_factory=list)


@dataclass(frozen=True)
class EMASignal:
    """Alignment of price against the 21/50/200 EMAs."""

    type: Trend
    message: str
    strength: int
