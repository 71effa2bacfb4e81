"""Card-related data structures and helpers for the shedding game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Suit(Enum):
    DIAMONDS = "D"
    CLUBS = "C"
    HEARTS = "H"
    SPADES = "S"

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    TWO = "2"

    def __str__(self) -> str:
        return self.name.lower()


# Rank order from lowest to highest; the two is the strongest card.
RANK_ORDER: list[Rank] = list(Rank)

# Suits only break ties between equal ranks.
SUIT_ORDER: list[Suit] = [Suit.DIAMONDS, Suit.CLUBS, Suit.HEARTS, Suit.SPADES]

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}
SUIT_STRENGTH: dict[Suit, int] = {suit: index for index, suit in enumerate(SUIT_ORDER)}

_RANK_BY_LETTER: dict[str, Rank] = {rank.value: rank for rank in Rank}
_SUIT_BY_LETTER: dict[str, Suit] = {suit.value: suit for suit in Suit}


class InvalidCardToken(ValueError):
    """Raised when a token does not name one of the 52 cards."""


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    @property
    def token(self) -> str:
        return f"{self.suit.value}{self.rank.value}"

    def __str__(self) -> str:
        return self.token


OPENING_CARD = Card(Rank.THREE, Suit.DIAMONDS)


def card_value(card: Card) -> int:
    """Return the ordering key of a card: rank first, suit as tiebreak.

    Values run from 0 (3 of Diamonds) to 51 (2 of Spades) and are unique
    per card.
    """
    return RANK_STRENGTH[card.rank] * len(SUIT_ORDER) + SUIT_STRENGTH[card.suit]


def beats(candidate: Card, current: Card) -> bool:
    """Return True if candidate may be played on top of current."""
    return card_value(candidate) > card_value(current)


def parse_card(token: str) -> Card:
    """Parse a two-letter token such as ``D3`` or ``HT``.

    The rank-first spelling (``3D``) is accepted as well, since suit and
    rank letters never overlap.
    """
    text = token.strip().upper()
    if len(text) != 2:
        raise InvalidCardToken(f"Card token must be two characters: {token!r}")
    first, second = text
    if first in _SUIT_BY_LETTER and second in _RANK_BY_LETTER:
        return Card(_RANK_BY_LETTER[second], _SUIT_BY_LETTER[first])
    if first in _RANK_BY_LETTER and second in _SUIT_BY_LETTER:
        return Card(_RANK_BY_LETTER[first], _SUIT_BY_LETTER[second])
    raise InvalidCardToken(f"Unknown card: {token!r}")


def build_deck() -> List[Card]:
    """Return the 52-card deck ordered from weakest to strongest."""
    return [Card(rank, suit) for rank in RANK_ORDER for suit in SUIT_ORDER]


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    return sorted(cards, key=card_value)


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(card.token for card in cards)
