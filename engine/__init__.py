"""Core engine package for the shedding-game arbiter."""

__all__ = [
    "cards",
    "config",
    "deck",
    "protocol",
    "transport",
    "state",
    "events",
    "arbiter",
    "game",
    "transcript",
    "logging_utils",
    "cli",
]
