"""Reading card tokens and dealing them into hands."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from .cards import OPENING_CARD, Card, InvalidCardToken, parse_card
from .config import ConfigError, validate_player_count
from .logging_utils import get_logger

DECK_SIZE = 52

_log = get_logger("deck")


class NoOpeningCardError(ConfigError):
    """Raised when no hand holds the opening card, so play cannot begin."""


@dataclass(frozen=True)
class Discard:
    token: str
    reason: str  # "duplicate" | "invalid"


@dataclass
class Deal:
    """Result of dealing: one list of cards per player, in input order."""

    hands: List[List[Card]]
    discarded: List[Discard] = field(default_factory=list)

    def card_count(self) -> int:
        return sum(len(hand) for hand in self.hands)

    def opening_holder(self) -> Optional[int]:
        for index, hand in enumerate(self.hands):
            if OPENING_CARD in hand:
                return index
        return None


def read_tokens(stream: TextIO) -> List[str]:
    """Return the whitespace separated tokens of a file or standard input."""
    return stream.read().split()


def shuffle_tokens(tokens: Sequence[str], rng: Optional[Random] = None) -> List[str]:
    """Shuffle the raw input before dealing; does not change how dealing works."""
    shuffled = list(tokens)
    if rng is None:
        rng = Random()
    rng.shuffle(shuffled)
    return shuffled


def accept_tokens(tokens: Iterable[str]) -> Tuple[List[Card], List[Discard]]:
    """Parse tokens in order, dropping malformed and duplicated cards."""
    accepted: List[Card] = []
    seen: set[Card] = set()
    discarded: List[Discard] = []
    for token in tokens:
        if len(accepted) == DECK_SIZE:
            break
        try:
            card = parse_card(token)
        except InvalidCardToken:
            _log.warning("Invalid card %s is discarded", token)
            discarded.append(Discard(token, "invalid"))
            continue
        if card in seen:
            _log.warning("Duplicated card %s is discarded", token)
            discarded.append(Discard(token, "duplicate"))
            continue
        seen.add(card)
        accepted.append(card)
    return accepted, discarded


def deal_round_robin(cards: Sequence[Card], players: int) -> List[List[Card]]:
    """Deal cards in order: card ``i`` goes to hand ``i % players``."""
    validate_player_count(players)
    hands: List[List[Card]] = [[] for _ in range(players)]
    for index, card in enumerate(cards):
        hands[index % players].append(card)
    return hands


def prepare_deal(
    tokens: Iterable[str],
    players: int,
    *,
    require_full_deck: bool = False,
) -> Deal:
    """Validate the player count, dedupe the tokens and deal them round-robin."""
    validate_player_count(players)
    cards, discarded = accept_tokens(tokens)
    if not cards:
        raise ConfigError("No valid cards were supplied.")
    if require_full_deck and len(cards) != DECK_SIZE:
        raise ConfigError(f"Not enough distinct cards (need {DECK_SIZE}, got {len(cards)}).")
    return Deal(hands=deal_round_robin(cards, players), discarded=discarded)


def ensure_opening_card(deal: Deal) -> int:
    """Return the index of the hand holding the opening card."""
    holder = deal.opening_holder()
    if holder is None:
        raise NoOpeningCardError(f"No player holds the opening card {OPENING_CARD}.")
    return holder
