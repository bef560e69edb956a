"""Rank stocks and funds by their composite score."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from app.core.telemetry import record_provider_failure
from app.providers.mfapi import MFAPIClient
from app.providers.yahoo_finance import YahooFinanceClient
from app.services.market_data import load_fund_snapshot, load_stock_snapshot
from nivesh_advisor.models import (
    FundAnalysis,
    FundSnapshot,
    RiskProfile,
    StockAnalysis,
    StockSnapshot,
)
from nivesh_advisor.scoring import analyze_fund, analyze_stock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedStock:
    snapshot: StockSnapshot
    analysis: StockAnalysis


@dataclass(frozen=True)
class RankedFund:
    snapshot: FundSnapshot
    analysis: FundAnalysis


def rank_stocks(snapshots: Iterable[StockSnapshot], risk: RiskProfile) -> list[RankedStock]:
    ranked = [RankedStock(snapshot=s, analysis=analyze_stock(s, risk)) for s in snapshots]
    ranked.sort(key=lambda item: item.analysis.total_score, reverse=True)
    return ranked


def rank_funds(snapshots: Iterable[FundSnapshot]) -> list[RankedFund]:
    ranked = [RankedFund(snapshot=s, analysis=analyze_fund(s)) for s in snapshots]
    ranked.sort(key=lambda item: item.analysis.total_score, reverse=True)
    return ranked


def _successful(keys: Sequence[str], results: Sequence[object], kind: str) -> list:
    loaded = []
    for key, result in zip(keys, results):
        if isinstance(result, BaseException):
            logger.warning("Skipping %s %s: %s", kind, key, result)
            record_provider_failure(kind, getattr(result, "not_found", False))
            continue
        loaded.append(result)
    return loaded


async def load_stock_recommendations(
    symbols: Sequence[str],
    risk: RiskProfile,
    client: YahooFinanceClient,
) -> list[RankedStock]:
    """Fetch each symbol concurrently and rank the ones that loaded."""

    results = await asyncio.gather(
        *(load_stock_snapshot(symbol, client) for symbol in symbols),
        return_exceptions=True,
    )
    return rank_stocks(_successful(symbols, results, "stock"), risk)


async def load_fund_recommendations(
    scheme_codes: Sequence[str],
    client: MFAPIClient,
) -> list[RankedFund]:
    results = await asyncio.gather(
        *(load_fund_snapshot(code, client) for code in scheme_codes),
        return_exceptions=True,
    )
    return rank_funds(_successful(scheme_codes, results, "fund"))


__all__ = [
    "RankedFund",
    "RankedStock",
    "load_fund_recommendations",
    "load_stock_recommendations",
    "rank_funds",
    "rank_stocks",
]
