"""Heuristic 0-100 scoring of stocks and mutual funds.

The constants below are part of the published scoring contract; users compare
scores across releases, so they are not configurable.
"""
from __future__ import annotations

import math
from typing import Optional

from .indicators import classify_trend, rsi
from .models import (
    FundAnalysis,
    FundSnapshot,
    Recommendation,
    RiskProfile,
    StockAnalysis,
    StockSnapshot,
)
from .volatility import volatility

BASELINE_SCORE = 50.0

TECHNICAL_WEIGHT = 0.4
FUNDAMENTAL_WEIGHT = 0.4
RISK_MATCH_WEIGHT = 0.2

RETURNS_WEIGHT = 0.5
STABILITY_WEIGHT = 0.5

LARGE_CAP = 1_000_000_000_000  # 1 lakh crore
MID_CAP = 100_000_000_000  # 10 thousand crore

# Lower bound of each band, highest first.
RECOMMENDATION_BANDS: tuple[tuple[float, Recommendation], ...] = (
    (80.0, "strong_buy"),
    (65.0, "buy"),
    (45.0, "hold"),
    (30.0, "sell"),
)


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def recommendation_for(total_score: float) -> Recommendation:
    """Map a total score onto its recommendation band."""

    for lower_bound, label in RECOMMENDATION_BANDS:
        if total_score >= lower_bound:
            return label
    return "strong_sell"


def technical_score(price: float, ma50: float, ma200: float, trend: str, rsi_value: float) -> float:
    score = BASELINE_SCORE

    if trend == "bullish":
        score += 20
    elif trend == "bearish":
        score -= 20

    if rsi_value < 30:
        score += 15  # oversold
    elif rsi_value > 70:
        score -= 15  # overbought
    elif 40 <= rsi_value <= 60:
        score += 5

    if price > ma50:
        score += 10
    if price > ma200:
        score += 5

    return clamp_score(score)


def fundamental_score(pe: float, eps: float, market_cap: float) -> float:
    """Score valuation, profitability and size; zero PE or EPS means unknown."""

    score = BASELINE_SCORE

    if 0 < pe < 15:
        score += 20
    elif 15 <= pe < 25:
        score += 10
    elif 25 <= pe < 40:
        score -= 5
    elif pe >= 40:
        score -= 15

    if eps > 0:
        score += 15
    else:
        score -= 10

    if market_cap > LARGE_CAP:
        score += 10
    elif market_cap > MID_CAP:
        score += 5

    return clamp_score(score)


def risk_match_score(vol: float, risk: RiskProfile) -> float:
    """How well the observed volatility suits the investor's risk appetite."""

    if risk == "low":
        if vol < 2:
            return 90.0
        if vol < 4:
            return 60.0
        return 30.0
    if risk == "medium":
        if 2 <= vol <= 5:
            return 90.0
        return 60.0
    if vol > 4:
        return 80.0
    return 60.0


def analyze_stock(stock: StockSnapshot, risk: RiskProfile) -> StockAnalysis:
    """Score a stock snapshot for an investor with the given risk profile."""

    closes = stock.closes()
    rsi_value = rsi(closes)
    trend = classify_trend(stock.price, stock.fifty_day_ma, stock.two_hundred_day_ma)

    technical = technical_score(
        stock.price, stock.fifty_day_ma, stock.two_hundred_day_ma, trend, rsi_value
    )
    fundamental = fundamental_score(stock.pe, stock.eps, stock.market_cap)
    risk_match = risk_match_score(volatility(closes), risk)

    total = (
        technical * TECHNICAL_WEIGHT
        + fundamental * FUNDAMENTAL_WEIGHT
        + risk_match * RISK_MATCH_WEIGHT
    )

    return StockAnalysis(
        symbol=stock.symbol,
        technical_score=technical,
        fundamental_score=fundamental,
        risk_match_score=risk_match,
        total_score=total,
        trend=trend,
        rsi=rsi_value,
        recommendation=recommendation_for(total),
    )


def _has_value(cagr: Optional[float]) -> bool:
    # Zero and NaN CAGRs carry no signal.
    return cagr is not None and cagr != 0 and not math.isnan(cagr)


def returns_score(
    cagr_1y: Optional[float], cagr_3y: Optional[float], cagr_5y: Optional[float]
) -> float:
    """Reward trailing CAGRs; each horizon is checked independently."""

    score = BASELINE_SCORE

    if _has_value(cagr_1y):
        if cagr_1y > 20:
            score += 20
        elif cagr_1y > 10:
            score += 10
        elif cagr_1y < 0:
            score -= 15

    if _has_value(cagr_3y):
        if cagr_3y > 15:
            score += 15
        elif cagr_3y > 10:
            score += 8

    if _has_value(cagr_5y):
        if cagr_5y > 12:
            score += 15
        elif cagr_5y > 8:
            score += 8

    return clamp_score(score)


def stability_score(vol: float) -> float:
    if vol < 1:
        return 90.0
    if vol < 2:
        return 75.0
    if vol < 3:
        return 60.0
    return 40.0


def analyze_fund(fund: FundSnapshot) -> FundAnalysis:
    """Score a mutual fund on trailing returns and NAV stability."""

    returns = returns_score(fund.cagr_1y, fund.cagr_3y, fund.cagr_5y)
    stability = stability_score(volatility(fund.navs()))
    total = returns * RETURNS_WEIGHT + stability * STABILITY_WEIGHT

    return FundAnalysis(
        scheme_code=fund.scheme_code,
        returns_score=returns,
        stability_score=stability,
        total_score=total,
        recommendation=recommendation_for(total),
    )


__all__ = [
    "RECOMMENDATION_BANDS",
    "analyze_fund",
    "analyze_stock",
    "clamp_score",
    "fundamental_score",
    "recommendation_for",
    "returns_score",
    "risk_match_score",
    "stability_score",
    "technical_score",
]
