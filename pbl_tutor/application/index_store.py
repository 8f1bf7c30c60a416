"""Holder for the published card index snapshot.

Readers always see one complete snapshot: publishing swaps a single
reference to an immutable CardIndex, so no lock is needed.
"""

from __future__ import annotations

from pbl_tutor.domain.errors import NotReadyError
from pbl_tutor.domain.models import CardIndex


class CardIndexStore:
    def __init__(self, index: CardIndex | None = None) -> None:
        self._index = index

    def publish(self, index: CardIndex) -> None:
        self._index = index

    def snapshot(self) -> CardIndex | None:
        return self._index

    def current(self) -> CardIndex:
        index = self._index
        if index is None:
            raise NotReadyError("card index not built")
        return index

    @property
    def is_ready(self) -> bool:
        return self._index is not None
