"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_BASE_CURRENCY = "INR"


class AppSettings(BaseSettings):
    """Configuration options for the Nivesh Advisor service."""

    app_name: str = Field(default="Nivesh Advisor")
    timezone: str = Field(default=DEFAULT_TIMEZONE)
    base_currency: str = Field(default=DEFAULT_BASE_CURRENCY)
    log_level: str = Field(default="INFO")

    yahoo_chart_base_url: str = Field(default="https://query1.finance.yahoo.com/v8/finance/chart")
    yahoo_summary_base_url: str = Field(
        default="https://query1.finance.yahoo.com/v10/finance/quoteSummary"
    )
    mfapi_base_url: str = Field(default="https://api.mfapi.in/mf")
    provider_timeout_seconds: float = Field(default=15.0)

    openai_api_key: str | None = Field(default=None, env="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", env="OPENAI_MODEL")

    default_risk_profile: Literal["low", "medium", "high"] = Field(default="medium")
    indicator_cache_ttl_minutes: int = Field(default=5)

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="nivesh-advisor")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"openai_api_key"}
        return {k: ("***" if k in hidden else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_TIMEZONE",
    "DEFAULT_BASE_CURRENCY",
    "get_settings",
]
