"""Schemas for SIP projection and goal planning."""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, Field

from nivesh_advisor.models import SIPResult


class SIPProjectionRequest(BaseModel):
    monthly_amount: float = Field(..., gt=0)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    years: int = Field(..., ge=1, le=60)
    step_up_percent: float = Field(0.0, ge=0, le=100)
    inflation_rate_percent: float = Field(0.0, ge=0, le=50)
    apply_tax: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "monthly_amount": 10000,
                "annual_rate_percent": 12,
                "years": 10,
                "step_up_percent": 10,
                "inflation_rate_percent": 6,
                "apply_tax": False,
            }
        }


class YearlyEntrySchema(BaseModel):
    year: int
    invested: int
    value: int
    returns: int
    sip_amount: int
    inflation_adjusted: int


class SIPProjectionResponse(BaseModel):
    future_value: int
    total_invested: float
    total_returns: float
    inflation_adjusted_value: int
    taxable_gains: int
    post_tax_value: int
    yearly_breakdown: list[YearlyEntrySchema]

    @classmethod
    def from_result(cls, result: SIPResult) -> "SIPProjectionResponse":
        return cls(**asdict(result))


class SIPClosedFormRequest(BaseModel):
    monthly_amount: float = Field(..., gt=0)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    years: int = Field(..., ge=1, le=60)


class SIPClosedFormResponse(BaseModel):
    future_value: int
    total_invested: float
    total_returns: int


class GoalSIPRequest(BaseModel):
    target_amount: float = Field(..., gt=0)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    years: int = Field(..., ge=1, le=60)
    step_up_percent: float = Field(0.0, ge=0, le=100)


class GoalSIPResponse(BaseModel):
    target_amount: float
    required_monthly_amount: float
    projection: SIPProjectionResponse


__all__ = [
    "GoalSIPRequest",
    "GoalSIPResponse",
    "SIPClosedFormRequest",
    "SIPClosedFormResponse",
    "SIPProjectionRequest",
    "SIPProjectionResponse",
    "YearlyEntrySchema",
]
