"""Schemas for chart overlay series."""

from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel


class IndicatorPointSchema(BaseModel):
    date: dt.date
    close: float
    ema_9: Optional[float] = None
    ema_21: Optional[float] = None
    ema_50: Optional[float] = None
    ema_200: Optional[float] = None
    sma_20: Optional[float] = None
    sma_50: Optional[float] = None


class EMASignalSchema(BaseModel):
    type: Literal["bullish", "neutral", "bearish"]
    message: str
    strength: int


class ChartIndicatorsResponse(BaseModel):
    symbol: str
    rsi: float
    signal: EMASignalSchema
    points: list[IndicatorPointSchema]


__all__ = ["ChartIndicatorsResponse", "EMASignalSchema", "IndicatorPointSchema"]
