"""Systematic investment plan (SIP) projections and goal solving."""
from __future__ import annotations

import math
from typing import Dict

from .models import SIPResult, YearlyEntry

LTCG_EXEMPTION = 125_000
LTCG_RATE = 0.125

GOAL_MIN_MONTHLY = 100
GOAL_ROUNDING = 100
GOAL_ITERATIONS = 50


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity."""

    return int(math.floor(value + 0.5))


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 12 / 100


def sip_future_value(monthly_amount: float, annual_rate_percent: float, years: int) -> Dict[str, float]:
    """Closed-form future value of a level SIP invested at the start of each month.

    ``FV = P * ((1 + r)^n - 1) / r * (1 + r)``
    """

    rate = monthly_rate(annual_rate_percent)
    months = years * 12

    if rate == 0:
        future_value = monthly_amount * months
    else:
        future_value = monthly_amount * ((math.pow(1 + rate, months) - 1) / rate) * (1 + rate)

    total_invested = monthly_amount * months
    return {
        "future_value": round_half_up(future_value),
        "total_invested": total_invested,
        "total_returns": round_half_up(future_value - total_invested),
    }


def project_sip(
    monthly_amount: float,
    annual_rate_percent: float,
    years: int,
    step_up_percent: float = 0.0,
    inflation_rate_percent: float = 0.0,
    apply_tax: bool = False,
) -> SIPResult:
    """Simulate a SIP month by month with optional annual step-up, inflation and LTCG tax."""

    rate = monthly_rate(annual_rate_percent)
    yearly_breakdown: list[YearlyEntry] = []
    total_invested = 0.0
    value = 0.0
    contribution = monthly_amount

    for year in range(1, int(years) + 1):
        for _ in range(12):
            value = (value + contribution) * (1 + rate)
            total_invested += contribution

        inflation_factor = math.pow(1 + inflation_rate_percent / 100, year)
        yearly_breakdown.append(
            YearlyEntry(
                year=year,
                invested=round_half_up(total_invested),
                value=round_half_up(value),
                returns=round_half_up(value - total_invested),
                sip_amount=round_half_up(contribution),
                inflation_adjusted=round_half_up(value / inflation_factor),
            )
        )

        # Step-up applies from the second year onwards.
        contribution *= 1 + step_up_percent / 100

    future_value = round_half_up(value)
    total_returns = future_value - total_invested
    inflation_factor = math.pow(1 + inflation_rate_percent / 100, years)
    inflation_adjusted_value = round_half_up(future_value / inflation_factor)

    taxable_gains = 0.0
    post_tax_value = future_value
    if apply_tax and total_returns > LTCG_EXEMPTION:
        taxable_gains = total_returns - LTCG_EXEMPTION
        tax = taxable_gains * LTCG_RATE
        post_tax_value = round_half_up(future_value - tax)

    return SIPResult(
        future_value=future_value,
        total_invested=total_invested,
        total_returns=total_returns,
        inflation_adjusted_value=inflation_adjusted_value,
        taxable_gains=round_half_up(taxable_gains),
        post_tax_value=post_tax_value,
        yearly_breakdown=yearly_breakdown,
    )


def solve_sip_for_target(
    target_amount: float,
    annual_rate_percent: float,
    years: int,
    step_up_percent: float = 0.0,
) -> float:
    """Binary-search the monthly SIP needed to reach ``target_amount``.

    Runs a fixed number of bisection steps over ``[100, target / months]`` and
    rounds the result up to the next multiple of 100.
    """

    if years <= 0:
        return 0.0

    low = float(GOAL_MIN_MONTHLY)
    high = target_amount / (years * 12)
    result = low

    for _ in range(GOAL_ITERATIONS):
        mid = (low + high) / 2
        projection = project_sip(mid, annual_rate_percent, years, step_up_percent, 0.0, False)
        if projection.future_value >= target_amount:
            result = mid
            high = mid
        else:
            low = mid

    return float(math.ceil(result / GOAL_ROUNDING) * GOAL_ROUNDING)


__all__ = [
    "LTCG_EXEMPTION",
    "LTCG_RATE",
    "monthly_rate",
    "project_sip",
    "round_half_up",
    "sip_future_value",
    "solve_sip_for_target",
]
