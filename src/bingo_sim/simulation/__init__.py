"""Monte Carlo bingo simulation engine: boards, draws, win detection, batches."""

from __future__ import annotations

from bingo_sim.simulation.batch import (
    DEFAULT_BATCH_SIZE,
    BatchProgress,
    BatchResult,
    CancellationToken,
    run_batch,
)
from bingo_sim.simulation.board import Board, Cell, generate_board, has_free_cell, required_numbers
from bingo_sim.simulation.config import (
    MAX_TOTAL_GAMES,
    InvalidConfigurationError,
    SimulationConfig,
    load_config,
)
from bingo_sim.simulation.draws import draw_sequence
from bingo_sim.simulation.runner import GameResult, play_game
from bingo_sim.simulation.win import WinCheck, WinCondition, evaluate_win

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "MAX_TOTAL_GAMES",
    "BatchProgress",
    "BatchResult",
    "Board",
    "CancellationToken",
    "Cell",
    "GameResult",
    "InvalidConfigurationError",
    "SimulationConfig",
    "WinCheck",
    "WinCondition",
    "draw_sequence",
    "evaluate_win",
    "generate_board",
    "has_free_cell",
    "load_config",
    "play_game",
    "required_numbers",
    "run_batch",
]
