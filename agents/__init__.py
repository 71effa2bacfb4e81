"""Player agents and their play strategies."""

from .base import PlayerStrategy
from .lowest_card import LowestCardStrategy
from .player import AgentState, PlayerAgent, run_agent

__all__ = ["PlayerStrategy", "LowestCardStrategy", "AgentState", "PlayerAgent", "run_agent"]
