"""Score stocks and mutual funds from the command line."""

from __future__ import annotations

import argparse
import asyncio

from app.core.logging import setup_logging
from app.providers.mfapi import MFAPIClient
from app.providers.yahoo_finance import YahooFinanceClient
from app.services.recommendations import (
    load_fund_recommendations,
    load_stock_recommendations,
)


async def _run(symbols: list[str], funds: list[str], risk: str) -> None:
    if symbols:
        client = YahooFinanceClient()
        try:
            ranked = await load_stock_recommendations(symbols, risk, client)
        finally:
            await client.aclose()
        print(f"{'symbol':<16}{'trend':<10}{'rsi':>7}{'tech':>7}{'fund':>7}{'risk':>7}{'total':>8}  rec")
        for item in ranked:
            a = item.analysis
            print(
                f"{a.symbol:<16}{a.trend:<10}{a.rsi:>7.1f}{a.technical_score:>7.0f}"
                f"{a.fundamental_score:>7.0f}{a.risk_match_score:>7.0f}{a.total_score:>8.1f}  {a.recommendation}"
            )

    if funds:
        client = MFAPIClient()
        try:
            ranked_funds = await load_fund_recommendations(funds, client)
        finally:
            await client.aclose()
        print(f"{'scheme':<10}{'returns':>9}{'stability':>11}{'total':>8}  rec")
        for item in ranked_funds:
            a = item.analysis
            print(
                f"{a.scheme_code:<10}{a.returns_score:>9.0f}{a.stability_score:>11.0f}"
                f"{a.total_score:>8.1f}  {a.recommendation}"
            )


def main() -> None:
    parser = argparse.ArgumentParser(description="Score stocks and mutual funds")
    parser.add_argument("--symbol", action="append", default=[], help="Stock symbol, e.g. TCS.NS")
    parser.add_argument("--fund", action="append", default=[], help="mfapi.in scheme code")
    parser.add_argument("--risk", choices=["low", "medium", "high"], default="medium")
    args = parser.parse_args()
    if not args.symbol and not args.fund:
        parser.error("pass at least one --symbol or --fund")

    setup_logging()
    asyncio.run(_run(args.symbol, args.fund, args.risk))


if __name__ == "__main__":
    main()
