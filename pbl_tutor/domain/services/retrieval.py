# pbl_tutor/domain/services/retrieval.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from collections.abc import Collection, Sequence

from pbl_tutor.domain.errors import NotReadyError, ValidationError
from pbl_tutor.domain.models import Card, CardIndex, ScoredHit
from pbl_tutor.domain.similarity import cosine_similarity

DEFAULT_THRESHOLD = 0.40
DEFAULT_TOP_K = 1


def compose_card_text(card: Card) -> str:
    """Text embedded for a card: title, content and synonyms, space-joined."""
    return f"{card.title} {card.content} {' '.join(card.synonyms)}"


def rank_cards(
    index: CardIndex | None,
    case_id: str,
    question_vector: Sequence[float],
    question_norm: float,
    revealed_ids: Collection[str] = (),
    threshold: float = DEFAULT_THRESHOLD,
    top_k: int = DEFAULT_TOP_K,
) -> list[ScoredHit]:
    """
    Score the unrevealed cards of one case against a question vector.

    - Only cards of ``case_id`` whose id is not in ``revealed_ids`` compete.
    - Sorted by score descending; equal scores fall back to card id ascending.
    - Hits below ``threshold`` are never returned, even with top_k budget left.
    - At most ``top_k`` hits. An empty list means "no matching card".

    Raises:
        NotReadyError: index not built
        ValidationError: empty case id / question vector, or top_k <= 0
        DimensionMismatchError: question dimension differs from the index
    """
    if index is None or len(index) == 0:
        raise NotReadyError("card index not built")
    if not case_id:
        raise ValidationError("case_id must not be empty")
    if not question_vector:
        raise ValidationError("question vector must not be empty")
    if top_k <= 0:
        raise ValidationError("top_k must be > 0")

    revealed = set(revealed_ids)
    scored = [
        ScoredHit(
            card_id=e.card_id,
            score=cosine_similarity(question_vector, question_norm, e.vector, e.norm),
        )
        for e in index.entries
        if e.case_id == case_id and e.card_id not in revealed
    ]
    scored.sort(key=lambda h: (-h.score, h.card_id))

    hits: list[ScoredHit] = []
    for hit in scored:
        if len(hits) >= top_k:
            break
        if hit.score >= threshold:
            hits.append(hit)
    return hits
