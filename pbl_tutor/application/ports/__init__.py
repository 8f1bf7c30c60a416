"""Application ports package."""

from pbl_tutor.application.ports.card_loader_port import CardLoaderPort
from pbl_tutor.application.ports.embedding_port import EmbeddingPort
from pbl_tutor.application.ports.telemetry_port import NoopTelemetry, TelemetryPort

__all__ = [
    "CardLoaderPort",
    "EmbeddingPort",
    "NoopTelemetry",
    "TelemetryPort",
]
