"""The arbiter drives turns and decides trick resets and the end of the game."""

from __future__ import annotations

from typing import Optional, Sequence

from .cards import OPENING_CARD, beats
from .events import EventKind, EventLog
from .logging_utils import get_logger
from .protocol import Command, ProtocolViolation, Request, Response, ResponseKind
from .state import GameState
from .transport import Channel, ChannelClosed

_log = get_logger("arbiter")


class Arbiter:
    """Send one request at a time and fold each response into the game state.

    ``channels[i]`` is the arbiter's end of agent ``i``'s channel. The arbiter
    is the only writer of its ``GameState``.
    """

    def __init__(
        self,
        channels: Sequence[Channel],
        opening_player: int,
        events: Optional[EventLog] = None,
    ) -> None:
        self.channels = list(channels)
        self.events = events or EventLog()
        self.state = GameState(players=len(self.channels), opening_player=opening_player)

    def run(self) -> GameState:
        state = self.state
        self.events.emit(EventKind.START, agent=state.opening_player)
        while not state.is_finished():
            self.step()
        loser = state.loser()
        if loser is not None:
            _log.info("Agent %d is loser", loser)
            self.events.emit(EventKind.LOSER, agent=loser)
        self.events.emit(EventKind.GAME_OVER)
        return state

    def step(self) -> None:
        """Run one request/response exchange."""
        state = self.state
        player = state.next_active()
        request = state.next_request()
        channel = self.channels[player]
        try:
            channel.send(request)
            response = channel.recv()
        except ChannelClosed:
            _log.warning("Agent %d left without answering %s", player, request.command.name)
            state.record_dropped(player)
            self.events.emit(EventKind.DROPPED, agent=player)
        else:
            self._apply(player, request, response)
        state.advance()

        if state.reset_due():
            state.reset_trick()
            _log.debug("Trick reset, agent %d leads", state.leader)
            self.events.emit(EventKind.RESET, agent=state.leader)

    def _apply(self, player: int, request: Request, response: Response) -> None:
        if not isinstance(response, Response):
            raise ProtocolViolation(f"Agent {player} answered with {response!r}.")
        state = self.state

        if response.kind is ResponseKind.PASS:
            if request.command is not Command.BEAT:
                raise ProtocolViolation(f"Agent {player} passed on {request.command.name}.")
            state.record_pass(player)
            _log.debug("Agent %d passes", player)
            self.events.emit(EventKind.PASS, agent=player)
            return

        if response.kind is ResponseKind.PLAYED:
            card = response.card
            assert card is not None
            if card in state.played_cards:
                raise ProtocolViolation(f"Agent {player} played {card} twice.")
            if request.command is Command.OPEN and card != OPENING_CARD:
                raise ProtocolViolation(f"Agent {player} opened with {card} instead of {OPENING_CARD}.")
            if request.command is Command.BEAT:
                assert request.reference is not None
                if not beats(card, request.reference):
                    raise ProtocolViolation(f"Agent {player} played {card}, which does not beat {request.reference}.")
            state.record_play(player, card)
            _log.debug("Agent %d plays %s", player, card)
            self.events.emit(EventKind.PLAY, agent=player, card=card)

        if response.is_complete:
            self._complete(player)

    def _complete(self, player: int) -> None:
        first = self.state.record_completion(player)
        if first:
            _log.info("Agent %d is winner", player)
            self.events.emit(EventKind.WINNER, agent=player)
        else:
            _log.debug("Agent %d completes", player)
            self.events.emit(EventKind.COMPLETE, agent=player)
