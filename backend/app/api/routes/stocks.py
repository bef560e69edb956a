"""Stock snapshot, analysis and chart indicator endpoints."""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.config import get_settings
from app.core.telemetry import record_analysis, record_provider_failure
from app.indicators.compute import (
    compute_chart_indicators,
    get_cached_indicators,
    latest_ema_signal,
    latest_rsi,
)
from app.providers.yahoo_finance import get_yahoo_client
from app.schemas import (
    ChartIndicatorsResponse,
    EMASignalSchema,
    IndicatorPointSchema,
    StockAnalysisSchema,
    StockSnapshotSchema,
)
from app.services.market_data import MarketDataError, load_stock_snapshot
from nivesh_advisor.models import RiskProfile, StockSnapshot
from nivesh_advisor.scoring import analyze_stock

router = APIRouter()


def _market_data_http_error(exc: MarketDataError) -> HTTPException:
    if exc.not_found:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Market data error: {exc}",
    )


async def _snapshot(symbol: str, client) -> StockSnapshot:
    try:
        return await load_stock_snapshot(symbol, client)
    except MarketDataError as exc:
        record_provider_failure("stock", exc.not_found)
        raise _market_data_http_error(exc) from exc


@router.get("/{symbol}", response_model=StockSnapshotSchema)
async def get_stock(symbol: str, client=Depends(get_yahoo_client)) -> StockSnapshotSchema:
    snapshot = await _snapshot(symbol, client)
    return StockSnapshotSchema.from_snapshot(snapshot)


@router.get("/{symbol}/analysis", response_model=StockAnalysisSchema)
async def get_stock_analysis(
    symbol: str,
    risk: RiskProfile | None = Query(default=None),
    client=Depends(get_yahoo_client),
) -> StockAnalysisSchema:
    snapshot = await _snapshot(symbol, client)
    analysis = analyze_stock(snapshot, risk or get_settings().default_risk_profile)
    record_analysis("stock", analysis.recommendation)
    return StockAnalysisSchema.from_analysis(analysis)


def _optional(value: float) -> float | None:
    return None if math.isnan(value) else value


@router.get("/{symbol}/indicators", response_model=ChartIndicatorsResponse)
async def get_stock_indicators(
    symbol: str, client=Depends(get_yahoo_client)
) -> ChartIndicatorsResponse:
    key = symbol.strip().upper()
    df = get_cached_indicators(key)
    if df is None:
        snapshot = await _snapshot(key, client)
        df = compute_chart_indicators(key, snapshot.historical_data)
    signal = latest_ema_signal(df)
    points = [
        IndicatorPointSchema(
            date=index.date(),
            close=row["close"],
            ema_9=_optional(row["ema_9"]),
            ema_21=_optional(row["ema_21"]),
            ema_50=_optional(row["ema_50"]),
            ema_200=_optional(row["ema_200"]),
            sma_20=_optional(row["sma_20"]),
            sma_50=_optional(row["sma_50"]),
        )
        for index, row in df.iterrows()
    ]
    return ChartIndicatorsResponse(
        symbol=key,
        rsi=latest_rsi(df),
        signal=EMASignalSchema(type=signal.type, message=signal.message, strength=signal.strength),
        points=points,
    )


__all__ = ["get_stock", "get_stock_analysis", "get_stock_indicators"]
