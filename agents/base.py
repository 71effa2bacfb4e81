"""Common player strategy interface."""

from __future__ import annotations

from typing import Optional

from engine.cards import Card

from .hand import Hand


class PlayerStrategy:
    """Base class for play policies.

    Each hook picks the card to play from ``hand`` without removing it, or
    returns None to pass. The agent owning the hand performs the removal.
    """

    name: str = "BaseStrategy"

    def choose_open(self, hand: Hand) -> Optional[Card]:
        """Return the card that opens the game."""
        return hand.lowest()

    def choose_lead(self, hand: Hand) -> Optional[Card]:
        """Return the card that starts a new trick."""
        return hand.lowest()

    def choose_beat(self, hand: Hand, reference: Card) -> Optional[Card]:
        """Return a card beating ``reference``, or None to pass."""
        return None
