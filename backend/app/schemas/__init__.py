"""Pydantic schema exports."""

from .analysis import (
    FundAnalysisSchema,
    FundRecommendationSchema,
    FundSnapshotSchema,
    NavPointSchema,
    PriceBarSchema,
    RecommendationsResponse,
    StockAnalysisSchema,
    StockRecommendationSchema,
    StockSnapshotSchema,
)
from .indicators import ChartIndicatorsResponse, EMASignalSchema, IndicatorPointSchema
from .insights import InsightRequest, InsightResponse
from .sip import (
    GoalSIPRequest,
    GoalSIPResponse,
    SIPClosedFormRequest,
    SIPClosedFormResponse,
    SIPProjectionRequest,
    SIPProjectionResponse,
    YearlyEntrySchema,
)

__all__ = [
    "ChartIndicatorsResponse",
    "EMASignalSchema",
    "FundAnalysisSchema",
    "FundRecommendationSchema",
    "FundSnapshotSchema",
    "GoalSIPRequest",
    "GoalSIPResponse",
    "IndicatorPointSchema",
    "InsightRequest",
    "InsightResponse",
    "NavPointSchema",
    "PriceBarSchema",
    "RecommendationsResponse",
    "SIPClosedFormRequest",
    "SIPClosedFormResponse",
    "SIPProjectionRequest",
    "SIPProjectionResponse",
    "StockAnalysisSchema",
    "StockRecommendationSchema",
    "StockSnapshotSchema",
    "YearlyEntrySchema",
]
