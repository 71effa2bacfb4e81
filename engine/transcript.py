"""Render game events as human readable transcript lines."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, TextIO

from .cards import format_cards
from .events import EventKind, GameEvent


def player_label(agent: Optional[int]) -> str:
    # Agents are numbered from 1 in the transcript.
    return f"Player {agent + 1}" if agent is not None else "Player ?"


def render_event(event: GameEvent) -> Optional[str]:
    who = player_label(event.agent)
    kind = event.kind
    if kind is EventKind.DEAL:
        return f"{who} has {len(event.cards)} cards: {format_cards(event.cards)}".rstrip()
    if kind is EventKind.DISCARD:
        if event.detail == "duplicate":
            return f"Duplicated card {event.token} is discarded"
        return f"Invalid card {event.token} is discarded"
    if kind is EventKind.START:
        return f"{who} opens the game"
    if kind is EventKind.PLAY:
        return f"{who} plays {event.card}"
    if kind is EventKind.PASS:
        return f"{who} passes"
    if kind is EventKind.RESET:
        return None
    if kind is EventKind.COMPLETE:
        return f"{who} completes"
    if kind is EventKind.WINNER:
        return f"{who} is winner"
    if kind is EventKind.DROPPED:
        return f"{who} left the game"
    if kind is EventKind.LOSER:
        return f"{who} is loser"
    if kind is EventKind.GAME_OVER:
        return "Game completed"
    return None


def render_transcript(events: Iterable[GameEvent]) -> List[str]:
    lines = (render_event(event) for event in events)
    return [line for line in lines if line is not None]


def transcript_printer(stream: TextIO) -> Callable[[GameEvent], None]:
    """Return a listener that writes each event's line to ``stream`` as it happens."""

    def _print(event: GameEvent) -> None:
        line = render_event(event)
        if line is not None:
            print(line, file=stream, flush=True)

    return _print
