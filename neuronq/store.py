"""
In-memory card collection owned by the caller.

The store only indexes cards; loading and saving them is up to the caller.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional

from neuronq.schemas import Card, migrate_card


class CardStore:
    """
    Ordered collection of cards with lookup by id.

    The list returned by `cards` is the live corpus: queue and quiz functions
    keep references to the same Card objects, so scheduling updates made
    through them are visible here.
    """

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: list[Card] = []
        self._by_id: dict[str, Card] = {}
        for card in cards:
            if card.id in self._by_id:
                raise ValueError(f"Duplicate card id: {card.id}")
            self._cards.append(card)
            self._by_id[card.id] = card

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "CardStore":
        """Build a store from stored records, migrating each one."""
        return cls(migrate_card(record) for record in records)

    @property
    def cards(self) -> list[Card]:
        return self._cards

    def get(self, card_id: str) -> Optional[Card]:
        return self._by_id.get(card_id)

    def folders(self) -> list[str]:
        """Sorted distinct folder names."""
        return sorted({card.folder for card in self._cards if card.folder})

    def to_records(self) -> list[dict]:
        return [card.to_record() for card in self._cards]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._by_id
