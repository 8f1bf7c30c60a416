from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ...domain.errors import DimensionMismatchError, EmbeddingError, ValidationError
from ...domain.models import Card, CardIndex, IndexedCard
from ...domain.services.retrieval import compose_card_text
from ...domain.similarity import norm
from ..index_store import CardIndexStore
from ..ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)


class BuildCardIndex:
    """
    Embeds every card once and publishes the resulting snapshot.

    Any failure leaves the previously published index untouched.
    """

    def __init__(
        self, embedding: EmbeddingPort, store: CardIndexStore, max_workers: int = 1
    ) -> None:
        self.embedding = embedding
        self.store = store
        self.max_workers = max_workers

    def execute(self, cards: Sequence[Card]) -> CardIndex:
        # 1) Validate
        if not cards:
            raise ValidationError("no cards to index")
        seen: set[str] = set()
        for c in cards:
            if c.id in seen:
                raise ValidationError(f"duplicate card id '{c.id}'")
            seen.add(c.id)

        # 2) Embeddings (order of results follows order of cards)
        texts = [compose_card_text(c) for c in cards]
        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                vectors = list(pool.map(self._embed, texts))
        else:
            vectors = [self._embed(t) for t in texts]

        # 3) Snapshot
        dim = len(vectors[0])
        entries: list[IndexedCard] = []
        for card, vec in zip(cards, vectors, strict=True):
            if len(vec) != dim:
                raise DimensionMismatchError(left=dim, right=len(vec))
            entries.append(
                IndexedCard(card_id=card.id, case_id=card.case_id, vector=vec, norm=norm(vec))
            )
        index = CardIndex(entries=tuple(entries), cards={c.id: c for c in cards}, dim=dim)

        # 4) Publish
        self.store.publish(index)
        logger.info("Indexed %d cards.", len(index))
        return index

    def _embed(self, text: str) -> tuple[float, ...]:
        try:
            raw = self.embedding.embed(text)
        except EmbeddingError:
            raise
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"embedding failed: {ex}") from ex
        if not raw:
            raise EmbeddingError("embedding provider returned an empty vector")
        return tuple(float(x) for x in raw)
