# pbl_tutor/application/use_cases/ask_case_question.py
from __future__ import annotations

import logging

from pbl_tutor.application.dto.ask_dto import AskAnswer, AskRequest
from pbl_tutor.application.index_store import CardIndexStore
from pbl_tutor.application.ports.embedding_port import EmbeddingPort
from pbl_tutor.application.ports.telemetry_port import NoopTelemetry, TelemetryPort
from pbl_tutor.domain.errors import (
    DomainError,
    EmbeddingError,
    NotReadyError,
    ValidationError,
)
from pbl_tutor.domain.models import RevealedCard
from pbl_tutor.domain.services.retrieval import DEFAULT_THRESHOLD, DEFAULT_TOP_K, rank_cards
from pbl_tutor.domain.similarity import norm
from pbl_tutor.domain.types import Result

logger = logging.getLogger(__name__)


class AskCaseQuestion:
    """
    Application Use-Case answering a learner question with pre-written cards.
    No I/O besides the embedding port; errors are returned via Result[T, E].
    """

    def __init__(
        self,
        embedding: EmbeddingPort,
        store: CardIndexStore,
        threshold: float = DEFAULT_THRESHOLD,
        top_k: int = DEFAULT_TOP_K,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self.embedding = embedding
        self.store = store
        self.threshold = threshold
        self.top_k = top_k
        self.telemetry = telemetry or NoopTelemetry()

    def execute(self, req: AskRequest) -> Result[AskAnswer, DomainError]:
        result = self._execute(req)
        if result.ok and result.value is not None:
            status = "nohit" if result.value.no_hit else "hit"
        else:
            status = type(result.error).__name__
        self.telemetry.incr("pbl.ask.total", {"status": status})
        return result

    def _execute(self, req: AskRequest) -> Result[AskAnswer, DomainError]:
        # 1) Validate
        if not req.case_id or not str(req.case_id).strip():
            return Result.failure(ValidationError("case_id & question required"))
        if not req.question or not req.question.strip():
            return Result.failure(ValidationError("case_id & question required"))
        if not all(isinstance(i, str) for i in req.revealed_ids):
            return Result.failure(ValidationError("revealed_ids must be a list of strings"))

        # 2) Readiness before spending an embedding call
        index = self.store.snapshot()
        if index is None:
            return Result.failure(NotReadyError("card index not built"))

        # 3) Embed question
        try:
            q_vec = self.embedding.embed(req.question)
        except EmbeddingError as ex:
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            return Result.failure(EmbeddingError(f"embedding failed: {ex}"))
        if not q_vec:
            return Result.failure(EmbeddingError("embedding provider returned an empty vector"))

        # 4) Score & rank against the snapshot taken above
        try:
            hits = rank_cards(
                index,
                case_id=str(req.case_id),
                question_vector=q_vec,
                question_norm=norm(q_vec),
                revealed_ids=req.revealed_ids,
                threshold=self.threshold,
                top_k=self.top_k,
            )
        except DomainError as ex:
            return Result.failure(ex)

        if hits:
            self.telemetry.observe("pbl.ask.top_score", hits[0].score, {"case_id": req.case_id})
        logger.debug("case=%s hits=%s", req.case_id, [(h.card_id, h.score) for h in hits])

        # 5) Join hits with card text
        revealed = []
        for h in hits:
            card = index.card(h.card_id)
            revealed.append(
                RevealedCard(id=card.id, title=card.title, content=card.content, score=h.score)
            )
        return Result.success(AskAnswer(hits=revealed))
