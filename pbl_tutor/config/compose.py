"""Dependency injection container with environment-driven wiring.

Why: Single place for wiring; domain and application layers stay pure.
"""

from __future__ import annotations

import logging

from pbl_tutor.application.index_store import CardIndexStore
from pbl_tutor.application.ports import (
    CardLoaderPort,
    EmbeddingPort,
    NoopTelemetry,
    TelemetryPort,
)
from pbl_tutor.application.use_cases.ask_case_question import AskCaseQuestion
from pbl_tutor.application.use_cases.build_card_index import BuildCardIndex
from pbl_tutor.application.use_cases.lookup_initial_card import LookupInitialCard
from pbl_tutor.config.settings import AppSettings
from pbl_tutor.domain.models import Card, CardIndex

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container for application components.

    Responsibilities:
    1. Read settings from environment (via AppSettings)
    2. Build adapters lazily (embedding, card loader, telemetry)
    3. Own the one CardIndexStore shared by all use cases
    4. Inject dependencies into use cases

    Adapters may be passed in explicitly, which is how tests swap in fakes.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        embedding: EmbeddingPort | None = None,
        card_loader: CardLoaderPort | None = None,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        self._embedding = embedding
        self._card_loader = card_loader
        self._telemetry = telemetry
        self._cards: list[Card] | None = None
        self.index_store = CardIndexStore()

    # ===== Adapters =====

    def get_embedding(self) -> EmbeddingPort:
        if self._embedding is None:
            from pbl_tutor.infrastructure.embeddings.openai_embedding_adapter import (
                OpenAIEmbeddingAdapter,
            )

            self._embedding = OpenAIEmbeddingAdapter(
                base_url=self.settings.embed_base_url,
                api_key=self.settings.embed_api_key,
                model=self.settings.embed_model,
                timeout_s=self.settings.embed_timeout_s,
                max_retries=self.settings.embed_max_retries,
            )
        return self._embedding

    def get_card_loader(self) -> CardLoaderPort:
        if self._card_loader is None:
            from pbl_tutor.infrastructure.loaders.json_card_loader import JsonCardLoader

            self._card_loader = JsonCardLoader(path=self.settings.cards_path)
        return self._card_loader

    def get_telemetry(self) -> TelemetryPort:
        if self._telemetry is None:
            self._telemetry = self._build_telemetry()
        return self._telemetry

    def get_cards(self) -> list[Card]:
        """Card catalog, loaded once."""
        if self._cards is None:
            self._cards = self.get_card_loader().load()
            logger.info("Loaded %d cards from %s", len(self._cards), self.settings.cards_path)
        return self._cards

    # ===== Use Cases =====

    def get_build_index_use_case(self) -> BuildCardIndex:
        return BuildCardIndex(
            embedding=self.get_embedding(),
            store=self.index_store,
            max_workers=self.settings.index_workers,
        )

    def get_ask_use_case(self) -> AskCaseQuestion:
        return AskCaseQuestion(
            embedding=self.get_embedding(),
            store=self.index_store,
            threshold=self.settings.sim_threshold,
            top_k=self.settings.top_k,
            telemetry=self.get_telemetry(),
        )

    def get_initial_card_use_case(self) -> LookupInitialCard:
        return LookupInitialCard(self.get_cards())

    def build_index(self) -> CardIndex:
        """Load the cards and publish a fresh index (raises on any failure)."""
        return self.get_build_index_use_case().execute(self.get_cards())

    # ===== Private Builder Methods =====

    def _build_telemetry(self) -> TelemetryPort:
        if not self.settings.telemetry_enabled:
            return NoopTelemetry()

        from pbl_tutor.infrastructure.telemetry.otel_adapter import (
            OpenTelemetryAdapter,
            OtelConfig,
        )

        cfg = OtelConfig(
            service_name="pbl-tutor",
            otlp_endpoint=self.settings.otlp_endpoint or None,
            environment=self.settings.telemetry_environment,
            enable_console=False,
        )
        return OpenTelemetryAdapter(cfg)


def build_container(settings: AppSettings | None = None) -> Container:
    """Build dependency injection container with settings.

    Example:
        container = build_container()
        container.build_index()
        result = container.get_ask_use_case().execute(request)
    """
    return Container(settings)
