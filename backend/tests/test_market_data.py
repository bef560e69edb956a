"""Snapshot builder tests for Yahoo Finance and mfapi.in payloads."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from app.providers.yahoo_finance import YahooFinanceError
from app.services.market_data import (
    MarketDataError,
    load_stock_snapshot,
    parse_fund_snapshot,
    parse_stock_snapshot,
)

# 2024-01-02, 2024-01-03, 2024-01-04 at 00:00 UTC
TIMESTAMPS = [1704153600, 1704240000, 1704326400]


def _chart_payload(meta: dict | None = None) -> dict:
    return {
        "chart": {
            "result": [
                {
                    "meta": meta
                    if meta is not None
                    else {
                        "symbol": "TCS.NS",
                        "shortName": "Tata Consultancy Services",
                        "regularMarketPrice": 106.0,
                        "chartPreviousClose": 104.0,
                        "regularMarketVolume": 5000,
                    },
                    "timestamp": TIMESTAMPS,
                    "indicators": {
                        "quote": [
                            {
                                "open": [99.0, 101.0, 104.0],
                                "high": [101.0, 102.0, 106.0],
                                "low": [98.0, 100.0, 103.0],
                                "close": [100.0, None, 105.0],
                                "volume": [1000, 1100, 1200],
                            }
                        ]
                    },
                }
            ]
        }
    }


def _summary_payload() -> dict:
    return {
        "quoteSummary": {
            "result": [
                {
                    "price": {"marketCap": {"raw": 1.4e13}},
                    "summaryDetail": {"trailingPE": {"raw": 28.5}},
                    "defaultKeyStatistics": {"trailingEps": {"raw": 130.2}},
                }
            ]
        }
    }


def test_parse_stock_snapshot_orders_history_newest_first():
    snapshot = parse_stock_snapshot(_chart_payload(), _summary_payload())
    assert snapshot.symbol == "TCS.NS"
    assert snapshot.name == "Tata Consultancy Services"
    assert [bar.close for bar in snapshot.historical_data] == [105.0, 100.0]
    assert snapshot.historical_data[0].date == date(2024, 1, 4)
    assert snapshot.price == 106.0
    assert snapshot.change == pytest.approx(2.0)
    assert snapshot.change_percent == pytest.approx(2.0 / 104.0 * 100)
    assert snapshot.open == 104.0
    assert snapshot.volume == 5000
    assert snapshot.market_cap == 1.4e13
    assert snapshot.pe == 28.5
    assert snapshot.eps == 130.2
    # not enough bars for either average: both fall back to the latest close
    assert snapshot.fifty_day_ma == 105.0
    assert snapshot.two_hundred_day_ma == 105.0


def test_parse_stock_snapshot_without_quote_fields():
    snapshot = parse_stock_snapshot(_chart_payload(meta={"symbol": "INFY.NS"}))
    assert snapshot.name == "INFY.NS"
    assert snapshot.price == 105.0
    assert snapshot.change == pytest.approx(5.0)
    assert snapshot.change_percent == pytest.approx(5.0)
    assert snapshot.pe == 0.0
    assert snapshot.eps == 0.0
    assert snapshot.market_cap == 0.0


def test_missing_chart_result_is_not_found():
    with pytest.raises(MarketDataError) as excinfo:
        parse_stock_snapshot({"chart": {"result": None}})
    assert excinfo.value.not_found is True


def test_parse_fund_snapshot():
    payload = {
        "meta": {"scheme_name": "Parag Parikh Flexi Cap Fund"},
        "data": [
            {"date": "17-10-2026", "nav": "101.5"},
            {"date": "16-10-2026", "nav": "bad"},
            {"date": "15-10-2026", "nav": "100.0"},
        ],
    }
    snapshot = parse_fund_snapshot("119597", payload)
    assert snapshot.scheme_name == "Parag Parikh Flexi Cap Fund"
    assert snapshot.nav == 101.5
    assert snapshot.date == date(2026, 10, 17)
    assert [point.nav for point in snapshot.nav_history] == [101.5, 100.0]
    assert snapshot.cagr_1y is None


def test_parse_fund_snapshot_without_navs():
    with pytest.raises(MarketDataError):
        parse_fund_snapshot("119597", {"meta": {}, "data": []})


class StubYahooClient:
    def __init__(self, chart_payload=None, error: Exception | None = None) -> None:
        self.chart_payload = chart_payload
        self.error = error
        self.requested: list[str] = []

    async def chart(self, symbol: str) -> dict:
        self.requested.append(symbol)
        if self.error:
            raise self.error
        return self.chart_payload

    async def quote_summary(self, symbol: str) -> dict | None:
        return None


@pytest.mark.asyncio
async def test_load_stock_snapshot_normalizes_symbol():
    client = StubYahooClient(chart_payload=_chart_payload())
    snapshot = await load_stock_snapshot("  tcs.ns ", client)
    assert client.requested == ["TCS.NS"]
    assert snapshot.symbol == "TCS.NS"


@pytest.mark.asyncio
async def test_load_stock_snapshot_wraps_provider_errors():
    client = StubYahooClient(error=YahooFinanceError("Symbol not found", not_found=True))
    with pytest.raises(MarketDataError) as excinfo:
        await load_stock_snapshot("NOPE.NS", client)
    assert excinfo.value.not_found is True


class OverlapCheckingYahooClient:
    """Chart only completes once the summary request has started."""

    def __init__(self) -> None:
        self.summary_started = asyncio.Event()

    async def chart(self, symbol: str) -> dict:
        await self.summary_started.wait()
        return _chart_payload()

    async def quote_summary(self, symbol: str) -> dict | None:
        self.summary_started.set()
        return _summary_payload()


@pytest.mark.asyncio
async def test_chart_and_summary_are_requested_together():
    snapshot = await asyncio.wait_for(load_stock_snapshot("TCS.NS", OverlapCheckingYahooClient()), 1)
    assert snapshot.pe == 28.5


@pytest.mark.asyncio
async def test_not_found_comes_from_the_provider_flag():
    reworded = StubYahooClient(error=YahooFinanceError("no such ticker", not_found=True))
    with pytest.raises(MarketDataError) as excinfo:
        await load_stock_snapshot("GONE.NS", reworded)
    assert excinfo.value.not_found is True

    outage = StubYahooClient(error=YahooFinanceError("Symbol not found upstream timeout"))
    with pytest.raises(MarketDataError) as excinfo:
        await load_stock_snapshot("TCS.NS", outage)
    assert excinfo.value.not_found is False


def test_unparseable_navs_keep_their_row_position():
    rows = [{"date": "30-09-2024", "nav": "400.0"}, {"date": "29-09-2024", "nav": "N.A."}]
    rows += [{"date": "", "nav": str(400.0 - i)} for i in range(2, 262)]
    snapshot = parse_fund_snapshot("119551", {"meta": {}, "data": rows})
    assert snapshot.nav == 400.0
    assert len(snapshot.nav_history) == 261
    # the one-year reference is row 250 (nav 150.0), not the 250th parsed value
    assert snapshot.cagr_1y == pytest.approx((400.0 / 150.0 - 1) * 100)


def test_fund_with_only_unparseable_navs_is_not_found():
    with pytest.raises(MarketDataError) as excinfo:
        parse_fund_snapshot("119597", {"meta": {}, "data": [{"date": "", "nav": "-"}]})
    assert excinfo.value.not_found is True
