"""Shared pytest fixtures for the bingo_sim test suite.

Fixtures defined here are available to all tests without explicit imports.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from bingo_sim.simulation.board import Board, Cell
from bingo_sim.simulation.config import SimulationConfig


def _board_from_pattern(stamps: Sequence[str]) -> Board:
    n = len(stamps)
    cells = [
        [Cell(number=row * n + col + 1, stamped=stamps[row][col] == "x") for col in range(n)] for row in range(n)
    ]
    return Board(cells=cells)


@pytest.fixture
def make_board() -> Callable[[Sequence[str]], Board]:
    """Return a factory building a board from a stamp pattern.

    Each string is one row; ``"x"`` marks a stamped cell, ``"."`` an
    unstamped one.  Cells are numbered 1..n² in row-major order.
    """
    return _board_from_pattern


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded NumPy generator for reproducible tests."""
    return np.random.default_rng(12345)


@pytest.fixture
def small_config() -> SimulationConfig:
    """Cheap configuration: two 3x3 boards over 1..20."""
    return SimulationConfig(board_size=3, board_count=2, min_num=1, max_num=20, total_games=50)
