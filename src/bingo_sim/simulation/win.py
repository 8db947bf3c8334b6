"""Win detection for a single bingo board.

:func:`evaluate_win` checks a board's stamped cells against one
:class:`WinCondition`.  ``ANY`` is a priority-ordered composite: rows first,
then columns, then diagonals.  Blackout is never implied by ``ANY``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from bingo_sim.simulation.board import Board


class WinCondition(StrEnum):
    """Pattern of stamped cells that ends a game."""

    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"
    BLACKOUT = "blackout"
    ANY = "any"


@dataclass(frozen=True)
class WinCheck:
    """Outcome of a win evaluation.

    Attributes:
        won: ``True`` if the requested condition is satisfied.
        matched: The concrete pattern that was satisfied (never ``ANY``);
            ``None`` when not won.
    """

    won: bool
    matched: WinCondition | None = None


_NO_WIN = WinCheck(won=False)


def _check_rows(board: Board) -> WinCheck:
    for row in board.cells:
        if all(cell.stamped for cell in row):
            return WinCheck(won=True, matched=WinCondition.ROW)
    return _NO_WIN


def _check_columns(board: Board) -> WinCheck:
    n = board.size
    for col in range(n):
        if all(board.cells[row][col].stamped for row in range(n)):
            return WinCheck(won=True, matched=WinCondition.COLUMN)
    return _NO_WIN


def _check_diagonals(board: Board) -> WinCheck:
    n = board.size
    main = all(board.cells[i][i].stamped for i in range(n))
    anti = all(board.cells[i][n - 1 - i].stamped for i in range(n))
    if main or anti:
        return WinCheck(won=True, matched=WinCondition.DIAGONAL)
    return _NO_WIN


def _check_blackout(board: Board) -> WinCheck:
    if all(cell.stamped for row in board.cells for cell in row):
        return WinCheck(won=True, matched=WinCondition.BLACKOUT)
    return _NO_WIN


def _check_any(board: Board) -> WinCheck:
    for check in (_check_rows, _check_columns, _check_diagonals):
        result = check(board)
        if result.won:
            return result
    return _NO_WIN


_CHECKS: dict[WinCondition, Callable[[Board], WinCheck]] = {
    WinCondition.ROW: _check_rows,
    WinCondition.COLUMN: _check_columns,
    WinCondition.DIAGONAL: _check_diagonals,
    WinCondition.BLACKOUT: _check_blackout,
    WinCondition.ANY: _check_any,
}


def evaluate_win(board: Board, condition: WinCondition | str) -> WinCheck:
    """Evaluate *board* against *condition* without mutating it.

    Args:
        board: Board whose stamped flags are inspected.
        condition: A :class:`WinCondition` or its string value.

    Returns:
        :class:`WinCheck` with the matched pattern when won.

    Raises:
        ValueError: If *condition* is not a recognised win condition.
    """
    return _CHECKS[WinCondition(condition)](board)
