from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pbl_tutor.application.ports.card_loader_port import CardLoaderPort
from pbl_tutor.domain.errors import DocumentError
from pbl_tutor.domain.models import Card


def card_from_record(record: Any) -> Card:
    if not isinstance(record, dict):
        raise DocumentError(f"card record must be an object, got {type(record).__name__}")
    try:
        synonyms = record.get("synonyms") or []
        if not isinstance(synonyms, list):
            raise DocumentError(f"synonyms of card '{record.get('id')}' must be a list")
        return Card(
            id=str(record["id"]),
            case_id=str(record["case_id"]),
            title=str(record.get("title", "")),
            content=str(record.get("content", "")),
            synonyms=tuple(str(s) for s in synonyms),
            initial=bool(record.get("initial", False)),
        )
    except KeyError as ex:
        raise DocumentError(f"card record missing field {ex}") from ex


@dataclass
class JsonCardLoader(CardLoaderPort):
    """Reads the case card dataset from a JSON array file."""

    path: str

    def load(self) -> list[Card]:  # type: ignore[override]
        try:
            with open(self.path, encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as ex:
            raise DocumentError(f"Card file load failed: {ex}") from ex
        if not isinstance(records, list):
            raise DocumentError("Card file must contain a JSON array")
        return [card_from_record(r) for r in records]
