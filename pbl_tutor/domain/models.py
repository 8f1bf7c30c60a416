# pbl_tutor/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from pbl_tutor.domain.types import Score, Vector


@dataclass(frozen=True)
class Card:
    """
    Immutable pre-written fact card of a case study.

    - id:        unique across the whole dataset
    - case_id:   groups cards into case studies
    - title:     short heading shown to the learner
    - content:   the revealed fact
    - synonyms:  extra phrasings folded into the embedded text
    - initial:   marks the case's chief-complaint card shown at bootstrap
    """

    id: str
    case_id: str
    title: str
    content: str
    synonyms: tuple[str, ...] = ()
    initial: bool = False


@dataclass(frozen=True)
class IndexedCard:
    """A card's embedding with its precomputed L2 norm."""

    card_id: str
    case_id: str
    vector: Vector
    norm: float


@dataclass(frozen=True)
class CardIndex:
    """Immutable snapshot of all indexed cards.

    One entry per card, uniform vector dimension. Replaced wholesale on rebuild.
    """

    entries: tuple[IndexedCard, ...]
    cards: Mapping[str, Card]
    dim: int

    def __len__(self) -> int:
        return len(self.entries)

    def card(self, card_id: str) -> Card:
        return self.cards[card_id]

    def case_ids(self) -> set[str]:
        return {e.case_id for e in self.entries}


@dataclass(frozen=True)
class ScoredHit:
    card_id: str
    score: Score


@dataclass(frozen=True)
class RevealedCard:
    """A scored hit joined with its card's visible fields."""

    id: str
    title: str
    content: str
    score: Score
