"""Market data helpers for building stock and fund snapshots."""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import date, datetime, timezone
from typing import Any

from app.providers.mfapi import MFAPIClient, MFAPIError
from app.providers.yahoo_finance import YahooFinanceClient, YahooFinanceError
from nivesh_advisor.funds import build_fund_snapshot
from nivesh_advisor.indicators import sma
from nivesh_advisor.models import FundSnapshot, NavPoint, PriceBar, StockSnapshot

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 365

POPULAR_STOCKS: list[dict[str, str]] = [
    {"symbol": "RELIANCE.NS", "name": "Reliance Industries"},
    {"symbol": "TCS.NS", "name": "Tata Consultancy Services"},
    {"symbol": "HDFCBANK.NS", "name": "HDFC Bank"},
    {"symbol": "INFY.NS", "name": "Infosys"},
    {"symbol": "ICICIBANK.NS", "name": "ICICI Bank"},
    {"symbol": "HINDUNILVR.NS", "name": "Hindustan Unilever"},
    {"symbol": "SBIN.NS", "name": "State Bank of India"},
    {"symbol": "BHARTIARTL.NS", "name": "Bharti Airtel"},
    {"symbol": "ITC.NS", "name": "ITC Limited"},
    {"symbol": "KOTAKBANK.NS", "name": "Kotak Mahindra Bank"},
]

POPULAR_FUNDS: list[dict[str, str]] = [
    {"code": "119551", "name": "Axis Bluechip Fund"},
    {"code": "118989", "name": "Mirae Asset Large Cap Fund"},
    {"code": "120503", "name": "SBI Small Cap Fund"},
    {"code": "120505", "name": "HDFC Mid-Cap Opportunities Fund"},
    {"code": "119597", "name": "Parag Parikh Flexi Cap Fund"},
]


class MarketDataError(ValueError):
    """Raised when upstream data cannot be turned into a snapshot."""

    def __init__(self, message: str, *, not_found: bool = False) -> None:
        super().__init__(message)
        self.not_found = not_found


def _number(values: list[Any] | None, index: int) -> float:
    if not values or index >= len(values):
        return 0.0
    value = values[index]
    return float(value) if value else 0.0


def _raw(section: dict[str, Any] | None, key: str) -> float:
    if not section:
        return 0.0
    entry = section.get(key)
    if isinstance(entry, dict):
        return float(entry.get("raw") or 0.0)
    return 0.0


def parse_price_history(result: dict[str, Any]) -> list[PriceBar]:
    """Convert a chart result into bars ordered newest-first."""

    timestamps = result.get("timestamp") or []
    quotes = ((result.get("indicators") or {}).get("quote") or [{}])[0] or {}
    bars: list[PriceBar] = []
    for index, ts in enumerate(timestamps):
        close = _number(quotes.get("close"), index)
        if close <= 0:
            continue
        bars.append(
            PriceBar(
                date=datetime.fromtimestamp(ts, tz=timezone.utc).date(),
                open=_number(quotes.get("open"), index),
                high=_number(quotes.get("high"), index),
                low=_number(quotes.get("low"), index),
                close=close,
                volume=_number(quotes.get("volume"), index),
            )
        )
    bars.reverse()
    return bars


def parse_stock_snapshot(
    chart_payload: dict[str, Any],
    summary_payload: dict[str, Any] | None = None,
) -> StockSnapshot:
    """Build a :class:`StockSnapshot` from Yahoo chart and quoteSummary payloads."""

    results = (chart_payload.get("chart") or {}).get("result") or []
    if not results:
        raise MarketDataError("Stock not found", not_found=True)
    result = results[0]
    meta = result.get("meta") or {}

    bars = parse_price_history(result)
    closes = [bar.close for bar in bars]
    ma50 = sma(closes, 50)
    ma200 = sma(closes, 200)

    pe = eps = market_cap = 0.0
    if summary_payload:
        summary_results = (summary_payload.get("quoteSummary") or {}).get("result") or [{}]
        summary = summary_results[0] or {}
        market_cap = _raw(summary.get("price"), "marketCap")
        pe = _raw(summary.get("summaryDetail"), "trailingPE")
        eps = _raw(summary.get("defaultKeyStatistics"), "trailingEps")

    latest_close = closes[0] if closes else 0.0
    price = meta.get("regularMarketPrice") or latest_close
    previous_close = meta.get("chartPreviousClose") or (closes[1] if len(closes) > 1 else 0.0) or price
    change = price - previous_close
    change_percent = (change / previous_close) * 100 if previous_close > 0 else 0.0
    latest = bars[0] if bars else None
    symbol = meta.get("symbol") or ""

    return StockSnapshot(
        symbol=symbol,
        name=meta.get("shortName") or symbol,
        price=float(price),
        change=float(change),
        change_percent=float(change_percent),
        open=latest.open if latest else 0.0,
        high=latest.high if latest else 0.0,
        low=latest.low if latest else 0.0,
        volume=float(meta.get("regularMarketVolume") or (latest.volume if latest else 0.0)),
        market_cap=market_cap,
        pe=pe,
        eps=eps,
        fifty_day_ma=ma50,
        two_hundred_day_ma=ma200,
        historical_data=tuple(bars[:HISTORY_LIMIT]),
    )


def _parse_nav_date(value: str) -> date | None:
    try:
        return datetime.strptime(value, "%d-%m-%Y").date()
    except (TypeError, ValueError):
        return None


def parse_fund_snapshot(scheme_code: str, payload: dict[str, Any]) -> FundSnapshot:
    """Build a :class:`FundSnapshot` from an mfapi.in scheme payload."""

    entries: list[NavPoint] = []
    for item in payload.get("data") or []:
        if not isinstance(item, dict):
            item = {}
        try:
            nav = float(item.get("nav"))
        except (TypeError, ValueError):
            # keep the row so trailing-return offsets still line up
            nav = math.nan
        entries.append(NavPoint(date=_parse_nav_date(item.get("date")), nav=nav))
    if not any(not math.isnan(entry.nav) for entry in entries):
        raise MarketDataError(f"No NAV data for scheme {scheme_code}", not_found=True)

    scheme_name = (payload.get("meta") or {}).get("scheme_name") or scheme_code
    return build_fund_snapshot(scheme_code, scheme_name, entries)


async def load_stock_snapshot(symbol: str, client: YahooFinanceClient) -> StockSnapshot:
    normalized = symbol.strip().upper()
    if not normalized:
        raise MarketDataError("Symbol must not be empty.")
    try:
        chart_payload, summary_payload = await asyncio.gather(
            client.chart(normalized), client.quote_summary(normalized)
        )
    except YahooFinanceError as exc:
        raise MarketDataError(str(exc), not_found=exc.not_found) from exc
    snapshot = parse_stock_snapshot(chart_payload, summary_payload)
    logger.debug("Loaded %s with %d bars", normalized, len(snapshot.historical_data))
    return snapshot


async def load_fund_snapshot(scheme_code: str, client: MFAPIClient) -> FundSnapshot:
    code = scheme_code.strip()
    try:
        payload = await client.scheme(code)
    except MFAPIError as exc:
        raise MarketDataError(str(exc), not_found=exc.not_found) from exc
    return parse_fund_snapshot(code, payload)


__all__ = [
    "HISTORY_LIMIT",
    "MarketDataError",
    "POPULAR_FUNDS",
    "POPULAR_STOCKS",
    "load_fund_snapshot",
    "load_stock_snapshot",
    "parse_fund_snapshot",
    "parse_price_history",
    "parse_stock_snapshot",
]
