"""HTTP API tests against the routers with stubbed market data clients."""

from __future__ import annotations

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.routes import api_router
from app.providers.llm import get_text_generator
from app.providers.mfapi import MFAPIError, get_mfapi_client
from app.providers.yahoo_finance import YahooFinanceError, get_yahoo_client

TIMESTAMPS = [1704153600, 1704240000, 1704326400]


def _chart(symbol: str) -> dict:
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": symbol, "shortName": symbol.split(".")[0].title()},
                    "timestamp": TIMESTAMPS,
                    "indicators": {
                        "quote": [
                            {
                                "open": [99.0, 101.0, 104.0],
                                "high": [101.0, 102.0, 106.0],
                                "low": [98.0, 100.0, 103.0],
                                "close": [100.0, 102.0, 105.0],
                                "volume": [1000, 1100, 1200],
                            }
                        ]
                    },
                }
            ]
        }
    }


class StubYahoo:
    def __init__(self, missing: set[str] | None = None) -> None:
        self.missing = missing or set()

    async def chart(self, symbol: str) -> dict:
        if symbol in self.missing:
            raise YahooFinanceError("Symbol not found", not_found=True)
        return _chart(symbol)

    async def quote_summary(self, symbol: str) -> dict | None:
        return None


class StubMFAPI:
    async def scheme(self, scheme_code: str) -> dict:
        if scheme_code == "000000":
            raise MFAPIError(f"No NAV data for scheme {scheme_code}", not_found=True)
        return {
            "meta": {"scheme_name": f"Scheme {scheme_code}"},
            "data": [
                {"date": "17-10-2026", "nav": "52.0"},
                {"date": "16-10-2026", "nav": "51.5"},
            ],
        }


def _app(yahoo: StubYahoo | None = None) -> FastAPI:
    app = FastAPI()
    app.include_router(api_router)
    app.dependency_overrides[get_yahoo_client] = lambda: yahoo or StubYahoo()
    app.dependency_overrides[get_mfapi_client] = lambda: StubMFAPI()
    app.dependency_overrides[get_text_generator] = lambda: None
    return app


async def _get(app: FastAPI, url: str, **params):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(url, params=params)


async def _post(app: FastAPI, url: str, payload: dict):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post(url, json=payload)


async def test_sip_projection():
    response = await _post(
        _app(),
        "/sip/project",
        {"monthly_amount": 10000, "annual_rate_percent": 12, "years": 10},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["total_invested"] == 1_200_000
    assert len(payload["yearly_breakdown"]) == 10
    assert payload["future_value"] == payload["yearly_breakdown"][-1]["value"]
    assert payload["post_tax_value"] == payload["future_value"]


async def test_sip_closed_form():
    response = await _post(
        _app(),
        "/sip/closed-form",
        {"monthly_amount": 10000, "annual_rate_percent": 12, "years": 10},
    )
    assert response.status_code == 200
    assert 2_320_000 < response.json()["future_value"] < 2_330_000


async def test_sip_goal_reaches_target():
    response = await _post(
        _app(),
        "/sip/goal",
        {"target_amount": 1_000_000, "annual_rate_percent": 12, "years": 5},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["required_monthly_amount"] % 100 == 0
    assert payload["projection"]["future_value"] >= 1_000_000


async def test_sip_rejects_zero_years():
    response = await _post(
        _app(),
        "/sip/project",
        {"monthly_amount": 10000, "annual_rate_percent": 12, "years": 0},
    )
    assert response.status_code == 422


async def test_insight_falls_back_without_generator():
    response = await _post(
        _app(),
        "/insights",
        {
            "asset_name": "Infosys",
            "asset_type": "stock",
            "analysis": {"trend": "bullish", "technical_score": 80, "recommendation": "buy"},
            "user_risk_level": "low",
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["generated"] is False
    assert "Infosys" in payload["insight"]


async def test_stock_analysis():
    response = await _get(_app(), "/stocks/tcs.ns/analysis", risk="low")
    assert response.status_code == 200
    payload = response.json()
    assert payload["symbol"] == "TCS.NS"
    assert payload["trend"] == "neutral"
    assert payload["recommendation"] in {"strong_buy", "buy", "hold", "sell", "strong_sell"}
    assert 0 <= payload["total_score"] <= 100


async def test_unknown_stock_is_404():
    response = await _get(_app(StubYahoo(missing={"NOPE.NS"})), "/stocks/NOPE.NS")
    assert response.status_code == 404


async def test_stock_indicators_are_oldest_first():
    response = await _get(_app(), "/stocks/INFY.NS/indicators")
    assert response.status_code == 200
    payload = response.json()
    assert [point["close"] for point in payload["points"]] == [100.0, 102.0, 105.0]
    assert payload["points"][0]["ema_200"] is None
    assert payload["signal"]["type"] == "neutral"


async def test_fund_snapshot_and_analysis():
    app = _app()
    snapshot = await _get(app, "/funds/119551")
    assert snapshot.status_code == 200
    assert snapshot.json()["nav"] == 52.0

    analysis = await _get(app, "/funds/119551/analysis")
    assert analysis.status_code == 200
    assert analysis.json()["scheme_code"] == "119551"


async def test_unknown_fund_is_404():
    response = await _get(_app(), "/funds/000000")
    assert response.status_code == 404


async def test_recommendations_skip_failed_assets():
    app = _app(StubYahoo(missing={"NOPE.NS"}))
    response = await _get(
        app, "/recommendations", risk="high", symbols="TCS.NS,NOPE.NS", funds="119551,000000"
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["risk_level"] == "high"
    assert [item["symbol"] for item in payload["stocks"]] == ["TCS.NS"]
    assert [item["scheme_code"] for item in payload["funds"]] == ["119551"]


class CountingYahoo(StubYahoo):
    def __init__(self) -> None:
        super().__init__()
        self.chart_calls: list[str] = []

    async def chart(self, symbol: str) -> dict:
        self.chart_calls.append(symbol)
        return await super().chart(symbol)


async def test_indicators_are_served_from_cache_on_repeat():
    yahoo = CountingYahoo()
    app = _app(yahoo)
    first = await _get(app, "/stocks/TCS.NS/indicators")
    second = await _get(app, "/stocks/tcs.ns/indicators")
    assert first.status_code == second.status_code == 200
    assert second.json() == first.json()
    assert yahoo.chart_calls == ["TCS.NS"]
