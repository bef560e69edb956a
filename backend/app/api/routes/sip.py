"""SIP calculator endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas import (
    GoalSIPRequest,
    GoalSIPResponse,
    SIPClosedFormRequest,
    SIPClosedFormResponse,
    SIPProjectionRequest,
    SIPProjectionResponse,
)
from nivesh_advisor.sip import project_sip, sip_future_value, solve_sip_for_target

router = APIRouter()


@router.post("/project", response_model=SIPProjectionResponse)
async def project(request: SIPProjectionRequest) -> SIPProjectionResponse:
    """Project a (step-up) SIP month by month with inflation and tax adjustments."""

    result = project_sip(
        request.monthly_amount,
        request.annual_rate_percent,
        request.years,
        step_up_percent=request.step_up_percent,
        inflation_rate_percent=request.inflation_rate_percent,
        apply_tax=request.apply_tax,
    )
    return SIPProjectionResponse.from_result(result)


@router.post("/closed-form", response_model=SIPClosedFormResponse)
async def closed_form(request: SIPClosedFormRequest) -> SIPClosedFormResponse:
    values = sip_future_value(request.monthly_amount, request.annual_rate_percent, request.years)
    return SIPClosedFormResponse(**values)


@router.post("/goal", response_model=GoalSIPResponse)
async def goal(request: GoalSIPRequest) -> GoalSIPResponse:
    """Return the monthly SIP needed to reach a target corpus."""

    monthly = solve_sip_for_target(
        request.target_amount,
        request.annual_rate_percent,
        request.years,
        request.step_up_percent,
    )
    projection = project_sip(
        monthly, request.annual_rate_percent, request.years, step_up_percent=request.step_up_percent
    )
    return GoalSIPResponse(
        target_amount=request.target_amount,
        required_monthly_amount=monthly,
        projection=SIPProjectionResponse.from_result(projection),
    )


__all__ = ["project", "closed_form", "goal"]
