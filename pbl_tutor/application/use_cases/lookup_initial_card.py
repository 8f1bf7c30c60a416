from __future__ import annotations

from collections.abc import Sequence

from pbl_tutor.domain.errors import CardNotFoundError, DomainError, ValidationError
from pbl_tutor.domain.models import Card
from pbl_tutor.domain.types import Result


class LookupInitialCard:
    """Finds the chief-complaint card a case opens with.

    Reads the loaded card catalog, so it answers before the index is built.
    """

    def __init__(self, cards: Sequence[Card]) -> None:
        self.cards = list(cards)

    def execute(self, case_id: str) -> Result[Card, DomainError]:
        if not case_id or not str(case_id).strip():
            return Result.failure(ValidationError("case_id required"))
        chief = next(
            (c for c in self.cards if c.case_id == str(case_id) and c.initial),
            None,
        )
        if chief is None:
            return Result.failure(CardNotFoundError(f"No initial card for case '{case_id}'"))
        return Result.success(chief)
