"""OpenTelemetry setup plus the advisor's own metric instruments.

Instruments are created against the global meter, so they record into a no-op
provider until :func:`setup_telemetry` installs the OTLP pipeline.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes

from app.config import AppSettings

logger = logging.getLogger(__name__)

METRIC_EXPORT_INTERVAL_MS = 15000

_meter = metrics.get_meter("nivesh_advisor")
_analysis_counter = _meter.create_counter(
    "nivesh.analyses",
    unit="1",
    description="Asset analyses served, by asset type and recommendation",
)
_provider_failure_counter = _meter.create_counter(
    "nivesh.provider.failures",
    unit="1",
    description="Market data lookups that failed and were skipped or rejected",
)

_initialised = False


def record_analysis(asset_type: str, recommendation: str) -> None:
    _analysis_counter.add(1, {"asset_type": asset_type, "recommendation": recommendation})


def record_provider_failure(asset_type: str, not_found: bool) -> None:
    _provider_failure_counter.add(1, {"asset_type": asset_type, "not_found": not_found})


def _otlp_kwargs(settings: AppSettings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"insecure": settings.telemetry_otlp_insecure}
    if settings.telemetry_otlp_endpoint:
        kwargs["endpoint"] = settings.telemetry_otlp_endpoint
    return kwargs


def setup_telemetry(app: FastAPI, settings: AppSettings) -> bool:
    """Export traces, metrics and logs over OTLP and instrument FastAPI and httpx.

    Returns ``True`` when instrumentation is active after the call. Repeated
    calls are no-ops.
    """

    global _initialised  # noqa: PLW0603

    if _initialised:
        return True
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return False

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
            ResourceAttributes.SERVICE_NAMESPACE: "nivesh-advisor",
            ResourceAttributes.SERVICE_VERSION: app.version,
        }
    )
    otlp = _otlp_kwargs(settings)

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio)),
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**otlp)))
    trace.set_tracer_provider(tracer_provider)

    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(**otlp), export_interval_millis=METRIC_EXPORT_INTERVAL_MS
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(meter_provider)

    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(**otlp)))
    set_logger_provider(logger_provider)
    LoggingInstrumentor().instrument(set_logging_format=False)

    FastAPIInstrumentor.instrument_app(
        app, tracer_provider=tracer_provider, meter_provider=meter_provider
    )
    # Yahoo Finance, mfapi.in and OpenAI all go through httpx
    HTTPXClientInstrumentor().instrument()

    _initialised = True
    logger.info("Telemetry exporting to %s", settings.telemetry_otlp_endpoint or "default OTLP endpoint")
    return True


__all__ = ["record_analysis", "record_provider_failure", "setup_telemetry"]
