"""OpenTelemetry adapter for ask metrics.

Why: Hit rate and score distribution show whether the threshold fits the cards.
"""

from dataclasses import dataclass
from importlib import import_module
from typing import Any

from pbl_tutor.application.ports.telemetry_port import TelemetryPort


@dataclass
class OtelConfig:
    """Configuration for OpenTelemetry."""

    service_name: str = "pbl-tutor"
    otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    environment: str = "production"
    enable_console: bool = False  # Debug: print metrics to console


class OpenTelemetryAdapter(TelemetryPort):
    """OpenTelemetry adapter for counters and histograms.

    Metrics:
    - Counters: incr() for events (asks by status)
    - Histograms: observe() for distributions (top score per ask)

    Metrics become no-ops if opentelemetry-sdk is not installed.
    """

    def __init__(self, cfg: OtelConfig) -> None:
        self._cfg = cfg
        self._meter: Any | None = None
        self._counters: dict[str, Any] = {}
        self._histograms: dict[str, Any] = {}
        self._init_otel()

    def _init_otel(self) -> None:
        try:
            otel_sdk = import_module("opentelemetry.sdk.metrics")
            otel_export = import_module("opentelemetry.sdk.metrics.export")
            otel_metrics = import_module("opentelemetry.metrics")
            otel_resources = import_module("opentelemetry.sdk.resources")

            resource = otel_resources.Resource.create(
                {
                    "service.name": self._cfg.service_name,
                    "deployment.environment": self._cfg.environment,
                }
            )

            readers = []
            if self._cfg.otlp_endpoint:
                otel_otlp = import_module("opentelemetry.exporter.otlp.proto.grpc.metric_exporter")
                otlp_exporter = otel_otlp.OTLPMetricExporter(endpoint=self._cfg.otlp_endpoint)
                readers.append(otel_export.PeriodicExportingMetricReader(otlp_exporter))
            if self._cfg.enable_console:
                console_exporter = otel_export.ConsoleMetricExporter()
                readers.append(otel_export.PeriodicExportingMetricReader(console_exporter))

            provider = otel_sdk.MeterProvider(resource=resource, metric_readers=readers)
            otel_metrics.set_meter_provider(provider)
            self._meter = otel_metrics.get_meter(__name__)
        except Exception:  # noqa: BLE001
            # Degrade to no-op metrics
            self._meter = None

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        """Increment a counter metric.

        Examples:
            - incr("pbl.ask.total", {"status": "hit"})
            - incr("pbl.ask.total", {"status": "NotReadyError"})
        """
        if self._meter is None:
            return
        try:
            if name not in self._counters:
                self._counters[name] = self._meter.create_counter(
                    name=name,
                    description=f"Counter for {name}",
                )
            self._counters[name].add(1, attributes=tags or {})
        except Exception:  # noqa: BLE001
            # Metrics never break an ask
            pass

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        """Record a value in a histogram, e.g. observe("pbl.ask.top_score", 0.82)."""
        if self._meter is None:
            return
        try:
            if name not in self._histograms:
                self._histograms[name] = self._meter.create_histogram(
                    name=name,
                    description=f"Histogram for {name}",
                )
            self._histograms[name].record(value, attributes=tags or {})
        except Exception:  # noqa: BLE001
            pass
