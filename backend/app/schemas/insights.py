"""Schemas for AI-generated investment commentary."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class InsightRequest(BaseModel):
    asset_name: str = Field(..., min_length=1)
    asset_type: Literal["stock", "fund"]
    analysis: dict[str, Any]
    user_risk_level: Literal["low", "medium", "high"] = "medium"


class InsightResponse(BaseModel):
    insight: str
    generated: bool = Field(
        default=True,
        description="False when the deterministic fallback text was returned.",
    )


__all__ = ["InsightRequest", "InsightResponse"]
