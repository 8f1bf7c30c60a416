# pbl_tutor/application/dto/ask_dto.py
from __future__ import annotations

from dataclasses import dataclass, field

from pbl_tutor.domain.models import RevealedCard


@dataclass(frozen=True)
class AskRequest:
    """
    DTO for asking a question within one case.

    - case_id: case study the question is scoped to (non-empty)
    - question: learner's free-text question (non-empty)
    - revealed_ids: card ids already shown; never returned again
    """

    case_id: str
    question: str
    revealed_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class AskAnswer:
    """Cards revealed for a question, best match first."""

    hits: list[RevealedCard] = field(default_factory=list)

    @property
    def no_hit(self) -> bool:
        return len(self.hits) == 0

    @property
    def newly_revealed_ids(self) -> list[str]:
        return [h.id for h in self.hits]
