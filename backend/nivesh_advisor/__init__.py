"""Core package for the Nivesh Advisor analysis engine."""

from .models import (
    FundAnalysis,
    FundSnapshot,
    NavPoint,
    PriceBar,
    SIPResult,
    StockAnalysis,
    StockSnapshot,
    YearlyEntry,
)
from .scoring import analyze_fund, analyze_stock, recommendation_for
from .sip import project_sip, sip_future_value, solve_sip_for_target

__all__ = [
    "FundAnalysis",
    "FundSnapshot",
    "NavPoint",
    "PriceBar",
    "SIPResult",
    "StockAnalysis",
    "StockSnapshot",
    "YearlyEntry",
    "analyze_fund",
    "analyze_stock",
    "project_sip",
    "recommendation_for",
    "sip_future_value",
    "solve_sip_for_target",
]
