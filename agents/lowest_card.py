"""Always make the smallest legal move."""

from __future__ import annotations

from typing import Optional

from engine.cards import OPENING_CARD, Card

from .base import PlayerStrategy
from .hand import Hand


class LowestCardStrategy(PlayerStrategy):
    name = "LowestCard"

    def choose_open(self, hand: Hand) -> Optional[Card]:
        if OPENING_CARD in hand:
            return OPENING_CARD
        return hand.lowest()

    def choose_lead(self, hand: Hand) -> Optional[Card]:
        return hand.lowest()

    def choose_beat(self, hand: Hand, reference: Card) -> Optional[Card]:
        return hand.lowest_above(reference)
