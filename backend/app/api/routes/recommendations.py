"""Personalised stock and fund recommendations."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, Query

from app.config import get_settings
from app.providers.mfapi import get_mfapi_client
from app.providers.yahoo_finance import get_yahoo_client
from app.schemas import (
    FundAnalysisSchema,
    FundRecommendationSchema,
    RecommendationsResponse,
    StockAnalysisSchema,
    StockRecommendationSchema,
)
from app.services.market_data import POPULAR_FUNDS, POPULAR_STOCKS
from app.services.recommendations import (
    load_fund_recommendations,
    load_stock_recommendations,
)
from nivesh_advisor.models import RiskProfile

router = APIRouter()


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@router.get("", response_model=RecommendationsResponse)
async def list_recommendations(
    risk: RiskProfile | None = Query(default=None),
    symbols: str | None = Query(default=None, description="Comma-separated stock symbols"),
    funds: str | None = Query(default=None, description="Comma-separated scheme codes"),
    stock_client=Depends(get_yahoo_client),
    fund_client=Depends(get_mfapi_client),
) -> RecommendationsResponse:
    """Score the requested (or popular) assets and return them best first.

    Assets whose data cannot be fetched are left out rather than failing the
    whole request.
    """

    risk_level = risk or get_settings().default_risk_profile
    stock_symbols = _split(symbols) or [item["symbol"] for item in POPULAR_STOCKS]
    scheme_codes = _split(funds) or [item["code"] for item in POPULAR_FUNDS]

    ranked_stocks, ranked_funds = await asyncio.gather(
        load_stock_recommendations(stock_symbols, risk_level, stock_client),
        load_fund_recommendations(scheme_codes, fund_client),
    )

    return RecommendationsResponse(
        risk_level=risk_level,
        stocks=[
            StockRecommendationSchema(
                symbol=item.snapshot.symbol,
                name=item.snapshot.name,
                price=item.snapshot.price,
                change_percent=item.snapshot.change_percent,
                analysis=StockAnalysisSchema.from_analysis(item.analysis),
            )
            for item in ranked_stocks
        ],
        funds=[
            FundRecommendationSchema(
                scheme_code=item.snapshot.scheme_code,
                scheme_name=item.snapshot.scheme_name,
                nav=item.snapshot.nav,
                analysis=FundAnalysisSchema.from_analysis(item.analysis),
            )
            for item in ranked_funds
        ],
    )


__all__ = ["list_recommendations"]
