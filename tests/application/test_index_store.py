"""Tests for CardIndexStore snapshot publishing."""

import pytest

from pbl_tutor.application.index_store import CardIndexStore
from pbl_tutor.domain.errors import NotReadyError
from pbl_tutor.domain.models import Card, CardIndex, IndexedCard


def make_index(card_id: str) -> CardIndex:
    card = Card(id=card_id, case_id="1", title="t", content="c")
    entry = IndexedCard(card_id=card_id, case_id="1", vector=(1.0,), norm=1.0)
    return CardIndex(entries=(entry,), cards={card_id: card}, dim=1)


def test_new_store_is_not_ready():
    store = CardIndexStore()

    assert store.is_ready is False
    assert store.snapshot() is None
    with pytest.raises(NotReadyError):
        store.current()


def test_publish_swaps_whole_snapshot():
    store = CardIndexStore()
    first = make_index("a")
    second = make_index("b")

    store.publish(first)
    held = store.current()
    store.publish(second)

    assert store.current() is second
    # A reader holding the old snapshot still sees it intact
    assert held is first
    assert held.card("a").id == "a"
