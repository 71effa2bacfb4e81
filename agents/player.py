"""Player agent: owns a hand and answers the arbiter's requests."""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, Optional

from engine.cards import Card, format_cards
from engine.logging_utils import get_logger
from engine.protocol import (
    Command,
    ProtocolViolation,
    Request,
    Response,
    completed,
    passed,
    played,
)
from engine.transport import Channel, ChannelClosed

from .base import PlayerStrategy
from .hand import Hand
from .lowest_card import LowestCardStrategy

_log = get_logger("agent")


class AgentState(Enum):
    WAITING = auto()
    RESPONDING = auto()
    DONE = auto()


class PlayerAgent:
    """One participant. Only the agent itself ever touches its hand."""

    def __init__(
        self,
        agent_id: int,
        cards: Iterable[Card],
        strategy: Optional[PlayerStrategy] = None,
    ) -> None:
        self.agent_id = agent_id
        self.hand = Hand(cards)
        self.strategy = strategy or LowestCardStrategy()
        self.state = AgentState.WAITING

    @property
    def done(self) -> bool:
        return self.state is AgentState.DONE

    def handle(self, request: Request) -> Response:
        """Evaluate one request and return the single response to it."""
        if not isinstance(request, Request):
            raise ProtocolViolation(f"Agent {self.agent_id} received {request!r} instead of a request.")
        if self.done:
            _log.warning("Agent %d asked to %s after completing", self.agent_id, request.command.name)
            return completed()

        self.state = AgentState.RESPONDING
        if self.hand.is_empty():
            self.state = AgentState.DONE
            return completed()

        card = self._choose(request)
        if card is None:
            self.state = AgentState.WAITING
            return passed()

        self.hand.remove(card)
        if self.hand.is_empty():
            self.state = AgentState.DONE
            return played(card, complete=True)
        self.state = AgentState.WAITING
        return played(card)

    def _choose(self, request: Request) -> Optional[Card]:
        if request.command is Command.OPEN:
            return self.strategy.choose_open(self.hand)
        if request.command is Command.LEAD:
            return self.strategy.choose_lead(self.hand)
        assert request.reference is not None
        return self.strategy.choose_beat(self.hand, request.reference)

    def serve(self, channel: Channel) -> None:
        """Answer requests until the hand is empty or the arbiter hangs up."""
        try:
            while not self.done:
                try:
                    request = channel.recv()
                except ChannelClosed:
                    _log.debug("Agent %d: channel closed with %d cards left", self.agent_id, len(self.hand))
                    break
                response = self.handle(request)
                _log.debug("Agent %d: %s -> %s", self.agent_id, request.command.name, response.kind.name)
                try:
                    channel.send(response)
                except ChannelClosed:
                    break
        finally:
            channel.close()


def run_agent(
    agent_id: int,
    cards: Iterable[Card],
    strategy: Optional[PlayerStrategy],
    channel: Channel,
) -> None:
    """Entry point of an agent's thread or process; the transport supplies ``channel``."""
    agent = PlayerAgent(agent_id, cards, strategy)
    _log.debug("Agent %d starts with %s", agent_id, format_cards(agent.hand))
    agent.serve(channel)
