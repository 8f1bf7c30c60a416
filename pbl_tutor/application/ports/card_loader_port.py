from __future__ import annotations

from typing import Protocol

from pbl_tutor.domain.models import Card


class CardLoaderPort(Protocol):
    def load(self) -> list[Card]: ...
