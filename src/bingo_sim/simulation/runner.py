"""Play a single simulated bingo game to completion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from bingo_sim.simulation.board import Board, generate_board
from bingo_sim.simulation.config import SimulationConfig
from bingo_sim.simulation.draws import draw_sequence
from bingo_sim.simulation.win import WinCondition, evaluate_win


@dataclass(frozen=True)
class GameResult:
    """Outcome of one simulated game.

    Attributes:
        game_index: 1-based position of the game within its batch.
        draw_count: Draws consumed until the first winner, or the full
            range size when nobody won.
        winning_board_index: 1-based number of the first winning board, or
            ``None`` when the sequence ran out without a winner.
        win_condition_matched: Pattern the winner completed (never ``ANY``),
            or ``None`` when there was no winner.
        degraded_boards: Boards in this game that had to accept a duplicate
            number during generation.
    """

    game_index: int
    draw_count: int
    winning_board_index: int | None
    win_condition_matched: WinCondition | None
    degraded_boards: int = 0

    @property
    def has_winner(self) -> bool:
        return self.winning_board_index is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_index": self.game_index,
            "draw_count": self.draw_count,
            "winning_board_index": self.winning_board_index,
            "win_condition_matched": (
                None if self.win_condition_matched is None else self.win_condition_matched.value
            ),
        }


def play_game(
    config: SimulationConfig,
    game_index: int = 1,
    rng: np.random.Generator | None = None,
) -> GameResult:
    """Generate boards, call numbers, and stop at the first winning board.

    All boards share one draw sequence.  After every draw the boards are
    evaluated in index order; the first one satisfying
    ``config.win_condition`` ends the game.

    Args:
        config: Board size, board count, number range and win condition.
        game_index: Index recorded on the result.
        rng: NumPy random generator used for boards and draws.

    Returns:
        The :class:`GameResult`; a no-winner result when the sequence is
        exhausted.
    """
    if rng is None:
        rng = np.random.default_rng()

    boards: list[Board] = [
        generate_board(config.board_size, config.min_num, config.max_num, rng)
        for _ in range(config.board_count)
    ]
    degraded = sum(board.degraded for board in boards)
    sequence = draw_sequence(config.min_num, config.max_num, rng)

    for draw_count, number in enumerate(sequence, start=1):
        for board in boards:
            board.stamp(number)
        for board_index, board in enumerate(boards, start=1):
            check = evaluate_win(board, config.win_condition)
            if check.won:
                return GameResult(
                    game_index=game_index,
                    draw_count=draw_count,
                    winning_board_index=board_index,
                    win_condition_matched=check.matched,
                    degraded_boards=degraded,
                )

    return GameResult(
        game_index=game_index,
        draw_count=len(sequence),
        winning_board_index=None,
        win_condition_matched=None,
        degraded_boards=degraded,
    )
