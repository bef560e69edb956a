"""Schemas for stock and fund snapshots and their analyses."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict
from typing import Literal, Optional

from pydantic import BaseModel

from nivesh_advisor.models import FundAnalysis, FundSnapshot, StockAnalysis, StockSnapshot

RecommendationLabel = Literal["strong_buy", "buy", "hold", "sell", "strong_sell"]
TrendLabel = Literal["bullish", "neutral", "bearish"]


class PriceBarSchema(BaseModel):
    date: dt.date
    open: float
    high: float
    low: float
    close: float
    volume: float


class StockSnapshotSchema(BaseModel):
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
    historical_data: list[PriceBarSchema]

    @classmethod
    def from_snapshot(cls, snapshot: StockSnapshot) -> "StockSnapshotSchema":
        return cls(**asdict(snapshot))


class NavPointSchema(BaseModel):
    date: Optional[dt.date] = None
    nav: float


class FundSnapshotSchema(BaseModel):
    scheme_code: str
    scheme_name: str
    nav: float
    date: Optional[dt.date] = None
    nav_history: list[NavPointSchema]
    cagr_1y: Optional[float] = None
    cagr_3y: Optional[float] = None
    cagr_5y: Optional[float] = None

    @classmethod
    def from_snapshot(cls, snapshot: FundSnapshot) -> "FundSnapshotSchema":
        return cls(**asdict(snapshot))


class StockAnalysisSchema(BaseModel):
    symbol: str
    technical_score: float
    fundamental_score: float
    risk_match_score: float
    total_score: float
    trend: TrendLabel
    rsi: float
    recommendation: RecommendationLabel

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "TCS.NS",
                "technical_score": 80,
                "fundamental_score": 85,
                "risk_match_score": 90,
                "total_score": 84,
                "trend": "bullish",
                "rsi": 55.2,
                "recommendation": "strong_buy",
            }
        }

    @classmethod
    def from_analysis(cls, analysis: StockAnalysis) -> "StockAnalysisSchema":
        return cls(**asdict(analysis))


class FundAnalysisSchema(BaseModel):
    scheme_code: str
    returns_score: float
    stability_score: float
    total_score: float
    recommendation: RecommendationLabel

    @classmethod
    def from_analysis(cls, analysis: FundAnalysis) -> "FundAnalysisSchema":
        return cls(**asdict(analysis))


class StockRecommendationSchema(BaseModel):
    symbol: str
    name: str
    price: float
    change_percent: float
    analysis: StockAnalysisSchema


class FundRecommendationSchema(BaseModel):
    scheme_code: str
    scheme_name: str
    nav: float
    analysis: FundAnalysisSchema


class RecommendationsResponse(BaseModel):
    risk_level: Literal["low", "medium", "high"]
    stocks: list[StockRecommendationSchema]
    funds: list[FundRecommendationSchema]


__all__ = [
    "FundAnalysisSchema",
    "FundRecommendationSchema",
    "FundSnapshotSchema",
    "NavPointSchema",
    "PriceBarSchema",
    "RecommendationsResponse",
    "StockAnalysisSchema",
    "StockRecommendationSchema",
    "StockSnapshotSchema",
]
