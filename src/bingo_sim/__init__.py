"""Bingo caller session and Monte Carlo draws-to-win simulator."""

from __future__ import annotations

from bingo_sim.evaluation import SummaryStatistics, summarize
from bingo_sim.session import GameSession, SessionSettings
from bingo_sim.simulation import (
    BatchResult,
    CancellationToken,
    GameResult,
    InvalidConfigurationError,
    SimulationConfig,
    WinCondition,
    run_batch,
)

__all__ = [
    "BatchResult",
    "CancellationToken",
    "GameResult",
    "GameSession",
    "InvalidConfigurationError",
    "SessionSettings",
    "SimulationConfig",
    "SummaryStatistics",
    "WinCondition",
    "run_batch",
    "summarize",
]
