"""Game orchestration: deal, start the agents, run the arbiter, clean up."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Iterable, List, Optional, Sequence

from agents.base import PlayerStrategy
from agents.player import run_agent

from .arbiter import Arbiter
from .cards import Card
from .config import GameConfig
from .deck import Deal, ensure_opening_card, prepare_deal, shuffle_tokens
from .events import EventKind, EventLog, GameEvent, Listener
from .logging_utils import get_logger
from .state import GameState
from .transport import AgentHandle, make_transport

JOIN_TIMEOUT = 10.0

_log = get_logger("game")


@dataclass
class GameResult:
    hands: List[List[Card]]
    winner: Optional[int]
    loser: Optional[int]
    completion_order: List[int]
    dropped: List[int]
    moves: int
    resets: int
    events: List[GameEvent] = field(default_factory=list)

    @classmethod
    def from_state(cls, deal: Deal, state: GameState, events: EventLog) -> "GameResult":
        return cls(
            hands=[list(hand) for hand in deal.hands],
            winner=state.winner,
            loser=state.loser(),
            completion_order=list(state.completion_order),
            dropped=list(state.dropped),
            moves=state.moves,
            resets=state.resets,
            events=list(events.events),
        )


def setup_deal(tokens: Iterable[str], config: GameConfig, events: EventLog) -> tuple[Deal, int]:
    """Deal the cards and find the opening player; nothing is started yet."""
    raw = list(tokens)
    if config.shuffle:
        raw = shuffle_tokens(raw, Random(config.seed))
    deal = prepare_deal(raw, config.players, require_full_deck=config.require_full_deck)
    for discard in deal.discarded:
        events.emit(EventKind.DISCARD, token=discard.token, detail=discard.reason)
    opening_player = ensure_opening_card(deal)
    for index, hand in enumerate(deal.hands):
        events.emit(EventKind.DEAL, agent=index, cards=tuple(hand))
    return deal, opening_player


def run_session(
    hands: Sequence[Sequence[Card]],
    opening_player: int,
    *,
    transport: str = "thread",
    events: Optional[EventLog] = None,
    strategies: Optional[Sequence[Optional[PlayerStrategy]]] = None,
) -> GameState:
    """Start one agent per hand, let the arbiter play, then release everything."""
    events = events or EventLog()
    if strategies is not None and len(strategies) != len(hands):
        raise ValueError("Need exactly one strategy per hand.")
    backend = make_transport(transport)
    channels = []
    handles: List[AgentHandle] = []
    try:
        for index, cards in enumerate(hands):
            arbiter_end, agent_end = backend.open_channel()
            channels.append(arbiter_end)
            strategy = strategies[index] if strategies is not None else None
            handles.append(
                backend.start_agent(run_agent, (index, list(cards), strategy), agent_end, name=f"agent-{index}")
            )
        return Arbiter(channels, opening_player, events).run()
    finally:
        for channel in channels:
            channel.close()
        for index, handle in enumerate(handles):
            handle.join(JOIN_TIMEOUT)
            if handle.is_alive():
                _log.error("Agent %d did not exit after the game", index)


def play_game(
    tokens: Iterable[str],
    config: GameConfig,
    *,
    listeners: Iterable[Listener] = (),
    strategies: Optional[Sequence[Optional[PlayerStrategy]]] = None,
) -> GameResult:
    """Play a complete game from raw card tokens.

    Raises:
        ConfigError: bad player count or not enough cards.
        NoOpeningCardError: nobody was dealt the opening card.
        ProtocolViolation: an agent or the arbiter broke the message contract.
    """
    events = EventLog(list(listeners))
    deal, opening_player = setup_deal(tokens, config, events)
    state = run_session(
        deal.hands,
        opening_player,
        transport=config.transport,
        events=events,
        strategies=strategies,
    )
    return GameResult.from_state(deal, state, events)
