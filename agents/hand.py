"""A player's private hand, kept sorted by card value."""

from __future__ import annotations

from bisect import bisect_right, insort
from typing import Iterable, Iterator, List, Optional

from engine.cards import Card, card_value


class HandError(ValueError):
    """Raised when a hand would gain a duplicate or lose a card it lacks."""


class Hand:
    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._values: List[int] = []
        self._cards: dict[int, Card] = {}
        for card in cards:
            self.add(card)

    def add(self, card: Card) -> None:
        value = card_value(card)
        if value in self._cards:
            raise HandError(f"Card {card} is already in hand.")
        insort(self._values, value)
        self._cards[value] = card

    def remove(self, card: Card) -> Card:
        value = card_value(card)
        if value not in self._cards:
            raise HandError(f"Card {card} not present in hand.")
        self._values.remove(value)
        return self._cards.pop(value)

    def lowest(self) -> Optional[Card]:
        if not self._values:
            return None
        return self._cards[self._values[0]]

    def lowest_above(self, reference: Card) -> Optional[Card]:
        """Return the smallest card strictly greater than ``reference``."""
        index = bisect_right(self._values, card_value(reference))
        if index == len(self._values):
            return None
        return self._cards[self._values[index]]

    def is_empty(self) -> bool:
        return not self._values

    def cards(self) -> List[Card]:
        return [self._cards[value] for value in self._values]

    def __contains__(self, card: object) -> bool:
        return isinstance(card, Card) and card_value(card) in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards())

    def __len__(self) -> int:
        return len(self._values)
