"""Events emitted while a game is set up and played.

The engine never prints; collaborators subscribe to these events and render
them (see ``engine.transcript``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from .cards import Card


class EventKind(Enum):
    DEAL = auto()
    DISCARD = auto()
    START = auto()
    PLAY = auto()
    PASS = auto()
    RESET = auto()
    COMPLETE = auto()
    WINNER = auto()
    DROPPED = auto()
    LOSER = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    agent: Optional[int] = None
    card: Optional[Card] = None
    cards: Tuple[Card, ...] = ()
    token: str = ""
    detail: str = ""


Listener = Callable[[GameEvent], None]


@dataclass
class EventLog:
    """Collects events and forwards them to listeners as they happen."""

    listeners: List[Listener] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)

    def emit(self, kind: EventKind, **payload) -> GameEvent:
        event = GameEvent(kind, **payload)
        self.events.append(event)
        for listener in self.listeners:
            listener(event)
        return event

    def of_kind(self, kind: EventKind) -> List[GameEvent]:
        return [event for event in self.events if event.kind is kind]
