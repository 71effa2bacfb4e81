"""Logging helpers shared by the arbiter, the agents and the CLI."""

from __future__ import annotations

import logging
import os

# Environment switch:
#   LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Call once at program start (cli.main)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"shedding.{name}")
