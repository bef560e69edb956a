"""Trailing-return metrics for mutual fund NAV histories."""
from __future__ import annotations

import math
from typing import Optional, Sequence

from .models import FundSnapshot, NavPoint

NAV_HISTORY_LIMIT = 365

# Offsets (in published NAV entries, newest-first) used as the reference
# point for each trailing horizon.
ONE_YEAR_OFFSET = 250
THREE_YEAR_OFFSET = 750
FIVE_YEAR_OFFSET = 1250


def compute_cagr(current: float, past: Optional[float], years: float) -> Optional[float]:
    """Compound annual growth rate in percent, or ``None`` without a usable base."""

    if past is None or past <= 0 or math.isnan(past) or years <= 0:
        return None
    if years == 1:
        return (current / past - 1) * 100
    return (math.pow(current / past, 1 / years) - 1) * 100


def _nav_at(entries: Sequence[NavPoint], offset: int) -> Optional[float]:
    if len(entries) <= offset:
        return None
    return entries[offset].nav


def _usable(point: NavPoint) -> bool:
    return not math.isnan(point.nav)


def build_fund_snapshot(
    scheme_code: str,
    scheme_name: str,
    entries: Sequence[NavPoint],
) -> FundSnapshot:
    """Assemble a fund snapshot from its full NAV history, newest-first.

    ``entries`` keeps one point per published row, with a NaN nav where the
    row could not be parsed, so the horizon offsets count rows rather than
    parsed values. NaN points are left out of ``nav_history``.
    """

    latest = next((point for point in entries if _usable(point)), None)
    current = latest.nav if latest else 0.0
    latest_date = latest.date if latest else None

    return FundSnapshot(
        scheme_code=scheme_code,
        scheme_name=scheme_name,
        nav=current,
        date=latest_date,
        nav_history=tuple(p for p in entries[:NAV_HISTORY_LIMIT] if _usable(p)),
        cagr_1y=compute_cagr(current, _nav_at(entries, ONE_YEAR_OFFSET), 1),
        cagr_3y=compute_cagr(current, _nav_at(entries, THREE_YEAR_OFFSET), 3),
        cagr_5y=compute_cagr(current, _nav_at(entries, FIVE_YEAR_OFFSET), 5),
    )


__all__ = [
    "FIVE_YEAR_OFFSET",
    "NAV_HISTORY_LIMIT",
    "ONE_YEAR_OFFSET",
    "THREE_YEAR_OFFSET",
    "build_fund_snapshot",
    "compute_cagr",
]
