"""AI insight endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.providers.llm import get_text_generator
from app.schemas import InsightRequest, InsightResponse
from app.services.insights import InsightError, generate_insight

router = APIRouter()


@router.post("", response_model=InsightResponse)
async def create_insight(
    payload: InsightRequest,
    generator=Depends(get_text_generator),
) -> InsightResponse:
    try:
        text = await generate_insight(
            payload.asset_type,
            payload.asset_name,
            payload.analysis,
            payload.user_risk_level,
            generator,
        )
    except InsightError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return InsightResponse(insight=text, generated=generator is not None)


__all__ = ["create_insight"]
