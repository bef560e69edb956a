"""Mutual fund snapshot and analysis endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.telemetry import record_analysis, record_provider_failure
from app.providers.mfapi import get_mfapi_client
from app.schemas import FundAnalysisSchema, FundSnapshotSchema
from app.services.market_data import MarketDataError, load_fund_snapshot
from nivesh_advisor.models import FundSnapshot
from nivesh_advisor.scoring import analyze_fund

router = APIRouter()


async def _snapshot(scheme_code: str, client) -> FundSnapshot:
    try:
        return await load_fund_snapshot(scheme_code, client)
    except MarketDataError as exc:
        record_provider_failure("fund", exc.not_found)
        status_code = (
            status.HTTP_404_NOT_FOUND if exc.not_found else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc


@router.get("/{scheme_code}", response_model=FundSnapshotSchema)
async def get_fund(scheme_code: str, client=Depends(get_mfapi_client)) -> FundSnapshotSchema:
    snapshot = await _snapshot(scheme_code, client)
    return FundSnapshotSchema.from_snapshot(snapshot)


@router.get("/{scheme_code}/analysis", response_model=FundAnalysisSchema)
async def get_fund_analysis(
    scheme_code: str, client=Depends(get_mfapi_client)
) -> FundAnalysisSchema:
    snapshot = await _snapshot(scheme_code, client)
    analysis = analyze_fund(snapshot)
    record_analysis("fund", analysis.recommendation)
    return FundAnalysisSchema.from_analysis(analysis)


__all__ = ["get_fund", "get_fund_analysis"]
