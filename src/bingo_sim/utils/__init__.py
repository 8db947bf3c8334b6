"""Shared utilities module."""

from __future__ import annotations

from bingo_sim.utils.logger import (
    DEBUG,
    NORMAL,
    QUIET,
    VERBOSE,
    configure_logging,
    get_logger,
    level_names,
)

__all__ = [
    "DEBUG",
    "NORMAL",
    "QUIET",
    "VERBOSE",
    "configure_logging",
    "get_logger",
    "level_names",
]
