"""Validated configuration for a single game."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

MIN_PLAYERS = 1
MAX_PLAYERS = 52


class ConfigError(ValueError):
    """Raised when the game cannot be set up from the given configuration."""


def validate_player_count(players: int) -> int:
    if not MIN_PLAYERS <= players <= MAX_PLAYERS:
        raise ConfigError(f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {players}.")
    return players


class GameConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    players: int = Field(..., description="Number of player agents taking part.")
    transport: Literal["thread", "process"] = Field(
        "thread",
        description="Execution context used for each player agent.",
    )
    shuffle: bool = Field(False, description="Shuffle the raw card tokens before dealing.")
    seed: Optional[int] = Field(None, description="Seed for the shuffle pre-step.")
    require_full_deck: bool = Field(
        False,
        description="Refuse to start unless all 52 distinct cards were supplied.",
    )

    @field_validator("players")
    @classmethod
    def validate_players(cls, value: int) -> int:
        return validate_player_count(value)


def load_config(**values) -> GameConfig:
    """Build a ``GameConfig``, reporting validation problems as ``ConfigError``."""
    try:
        return GameConfig(**values)
    except ValidationError as exc:
        messages = "; ".join(error["msg"] for error in exc.errors())
        raise ConfigError(messages) from exc

