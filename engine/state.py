"""Turn and trick state owned by the arbiter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

from .cards import Card
from .protocol import Request, beat_request, lead_request, open_request


@dataclass
class GameState:
    """Everything the arbiter knows about the game in progress.

    Agents are identified by their index in the fixed cyclic turn order.
    """

    players: int
    opening_player: int
    current_player: int = field(init=False)
    leader: int = field(init=False)
    highest: Optional[Card] = field(init=False, default=None)
    pass_count: int = field(init=False, default=0)
    completed: List[bool] = field(init=False)
    active_count: int = field(init=False)
    completion_order: List[int] = field(init=False, default_factory=list)
    dropped: List[int] = field(init=False, default_factory=list)
    played_cards: Set[Card] = field(init=False, default_factory=set)
    opened: bool = field(init=False, default=False)
    moves: int = field(init=False, default=0)
    resets: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.players < 1:
            raise ValueError("GameState needs at least one player.")
        if not 0 <= self.opening_player < self.players:
            raise ValueError(f"Opening player {self.opening_player} out of range.")
        self.current_player = self.opening_player
        self.leader = self.opening_player
        self.completed = [False] * self.players
        self.active_count = self.players

    # Turn selection ----------------------------------------------------

    def is_finished(self) -> bool:
        return self.active_count <= 1

    def advance(self) -> None:
        self.current_player = (self.current_player + 1) % self.players

    def next_active(self) -> int:
        """Move the turn forward past completed agents and return it."""
        if self.active_count == 0:
            raise RuntimeError("No active agents left.")
        while self.completed[self.current_player]:
            self.advance()
        return self.current_player

    def passes_to_reset(self) -> int:
        """Passes that end the current trick.

        A leader that finished on its last card is no longer active, so every
        remaining agent must get the chance to beat that card.
        """
        if self.completed[self.leader]:
            return self.active_count
        return self.active_count - 1

    def trick_in_progress(self) -> bool:
        return self.highest is not None and self.pass_count < self.passes_to_reset()

    def next_request(self) -> Request:
        if not self.opened:
            return open_request()
        if self.trick_in_progress():
            assert self.highest is not None
            return beat_request(self.highest)
        return lead_request()

    # Updates -----------------------------------------------------------

    def record_play(self, player: int, card: Card) -> None:
        self.opened = True
        self.moves += 1
        self.played_cards.add(card)
        self.highest = card
        self.leader = player
        self.pass_count = 0

    def record_pass(self, player: int) -> None:
        self.moves += 1
        self.pass_count += 1

    def record_completion(self, player: int) -> bool:
        """Mark ``player`` complete; return True if it is the first to finish."""
        self.opened = True
        first = not self.completion_order
        if player not in self.completion_order:
            self.completion_order.append(player)
        self._retire(player)
        return first

    def record_dropped(self, player: int) -> None:
        self.opened = True
        self.dropped.append(player)
        self._retire(player)

    def _retire(self, player: int) -> None:
        if self.completed[player]:
            return
        self.completed[player] = True
        self.active_count -= 1

    def reset_due(self) -> bool:
        return not self.is_finished() and self.pass_count == self.passes_to_reset()

    def reset_trick(self) -> None:
        """Every other active agent passed: the last leader starts a new trick."""
        self.highest = None
        self.pass_count = 0
        self.current_player = self.leader
        self.resets += 1

    # Queries -----------------------------------------------------------

    @property
    def winner(self) -> Optional[int]:
        return self.completion_order[0] if self.completion_order else None

    def remaining(self) -> List[int]:
        return [player for player, done in enumerate(self.completed) if not done]

    def loser(self) -> Optional[int]:
        if not self.is_finished():
            return None
        remaining = self.remaining()
        return remaining[0] if remaining else None
