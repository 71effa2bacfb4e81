"""Typed messages exchanged between the arbiter and a player agent."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .cards import Card


class ProtocolViolation(RuntimeError):
    """Raised when a message breaks the request/response contract.

    This signals a programming defect and is never recovered from.
    """


class Command(str, Enum):
    OPEN = "open"
    LEAD = "lead"
    BEAT = "beat"


class ResponseKind(str, Enum):
    PLAYED = "played"
    PASS = "pass"
    COMPLETE = "complete"


class Request(BaseModel):
    """Arbiter -> agent."""

    model_config = ConfigDict(frozen=True)

    command: Command
    reference: Optional[Card] = None

    @model_validator(mode="after")
    def check_reference(self) -> "Request":
        if self.command is Command.BEAT and self.reference is None:
            raise ValueError("BEAT requires a reference card.")
        if self.command is not Command.BEAT and self.reference is not None:
            raise ValueError(f"{self.command.name} does not take a reference card.")
        return self


class Response(BaseModel):
    """Agent -> arbiter.

    ``complete`` may accompany a PLAYED response when the play emptied the hand.
    """

    model_config = ConfigDict(frozen=True)

    kind: ResponseKind
    card: Optional[Card] = None
    complete: bool = False

    @model_validator(mode="after")
    def check_shape(self) -> "Response":
        if self.kind is ResponseKind.PLAYED:
            if self.card is None:
                raise ValueError("PLAYED requires a card.")
            return self
        if self.card is not None:
            raise ValueError(f"{self.kind.name} does not carry a card.")
        if self.kind is ResponseKind.PASS and self.complete:
            raise ValueError("PASS cannot complete a hand.")
        return self

    @property
    def is_complete(self) -> bool:
        return self.complete or self.kind is ResponseKind.COMPLETE


def open_request() -> Request:
    return Request(command=Command.OPEN)


def lead_request() -> Request:
    return Request(command=Command.LEAD)


def beat_request(reference: Card) -> Request:
    return Request(command=Command.BEAT, reference=reference)


def played(card: Card, *, complete: bool = False) -> Response:
    return Response(kind=ResponseKind.PLAYED, card=card, complete=complete)


def passed() -> Response:
    return Response(kind=ResponseKind.PASS)


def completed() -> Response:
    return Response(kind=ResponseKind.COMPLETE, complete=True)
