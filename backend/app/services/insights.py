"""Beginner-friendly commentary on stock and fund analyses."""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping

from app.providers.llm import TextGenerator

logger = logging.getLogger(__name__)

AssetType = Literal["stock", "fund"]


class InsightError(RuntimeError):
    """Raised when the text generator fails to produce an insight."""


def _fmt(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.1f}"
    return "n/a"


def build_stock_prompt(asset_name: str, analysis: Mapping[str, Any], risk_level: str) -> str:
    return (
        f"You are a financial advisor for Indian retail investors. "
        f"Analyze {asset_name} stock for a {risk_level}-risk investor.\n\n"
        "Current Analysis:\n"
        f"- Trend: {analysis.get('trend', 'n/a')}\n"
        f"- RSI: {_fmt(analysis.get('rsi'))}\n"
        f"- Technical Score: {_fmt(analysis.get('technical_score'))}/100\n"
        f"- Fundamental Score: {_fmt(analysis.get('fundamental_score'))}/100\n"
        f"- Overall Score: {_fmt(analysis.get('total_score'))}/100\n"
        f"- Recommendation: {analysis.get('recommendation', 'n/a')}\n\n"
        "Provide a brief, beginner-friendly explanation (2-3 paragraphs) covering:\n"
        "1. Why this stock might be suitable/unsuitable for their risk profile\n"
        "2. Key factors to consider\n"
        "3. Any risks they should be aware of\n\n"
        "Keep the language simple and avoid jargon. Use Indian Rupee context."
    )


def build_fund_prompt(asset_name: str, analysis: Mapping[str, Any]) -> str:
    return (
        f"You are a financial advisor for Indian retail investors. "
        f"Analyze {asset_name} mutual fund for SIP investment.\n\n"
        "Current Analysis:\n"
        f"- Returns Score: {_fmt(analysis.get('returns_score'))}/100\n"
        f"- Stability Score: {_fmt(analysis.get('stability_score'))}/100\n"
        f"- Overall Score: {_fmt(analysis.get('total_score'))}/100\n"
        f"- Recommendation: {analysis.get('recommendation', 'n/a')}\n\n"
        "Provide a brief, beginner-friendly explanation (2-3 paragraphs) covering:\n"
        "1. Why this fund might be good for systematic investment\n"
        "2. Historical performance context\n"
        "3. Any risks or considerations\n\n"
        "Keep the language simple. Use Indian Rupee and SIP context."
    )


def build_prompt(
    asset_type: AssetType, asset_name: str, analysis: Mapping[str, Any], risk_level: str
) -> str:
    if asset_type == "stock":
        return build_stock_prompt(asset_name, analysis, risk_level)
    return build_fund_prompt(asset_name, analysis)


def fallback_insight(
    asset_type: AssetType, asset_name: str, analysis: Mapping[str, Any], risk_level: str
) -> str:
    """Deterministic commentary used when no language model is configured."""

    if asset_type == "stock":
        return (
            f"Based on the analysis of {asset_name}, here are key insights for a "
            f"{risk_level}-risk investor:\n\n"
            f"This stock shows a {analysis.get('trend', 'neutral')} trend with a technical score of "
            f"{_fmt(analysis.get('technical_score'))}/100. The overall recommendation is "
            f"{analysis.get('recommendation', 'n/a')}. For your {risk_level}-risk profile, consider "
            "your investment horizon and diversification strategy.\n\n"
            "Note: This is a technical analysis only. Please consult with a financial advisor "
            "before making investment decisions."
        )
    return (
        f"The {asset_name} mutual fund shows promising metrics with a returns score of "
        f"{_fmt(analysis.get('returns_score'))}/100 and stability score of "
        f"{_fmt(analysis.get('stability_score'))}/100. For systematic investment, this fund could "
        "be suitable based on its track record.\n\n"
        "Note: This analysis is for educational purposes. Consult a financial advisor for "
        "personalized recommendations."
    )


async def generate_insight(
    asset_type: AssetType,
    asset_name: str,
    analysis: Mapping[str, Any],
    risk_level: str,
    generator: TextGenerator | None,
) -> str:
    """Return commentary from ``generator``, or the fallback text without one."""

    if generator is None:
        logger.warning("No text generator configured; returning fallback insight")
        return fallback_insight(asset_type, asset_name, analysis, risk_level)

    prompt = build_prompt(asset_type, asset_name, analysis, risk_level)
    try:
        return await generator.generate(prompt)
    except Exception as exc:
        logger.exception("Insight generation failed for %s", asset_name)
        raise InsightError("Failed to generate insight. Please try again later.") from exc


__all__ = [
    "AssetType",
    "InsightError",
    "build_fund_prompt",
    "build_prompt",
    "build_stock_prompt",
    "fallback_insight",
    "generate_insight",
]
