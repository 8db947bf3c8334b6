"""Live caller game session.

:class:`GameSession` owns the state of the game being called on the live
display: settings, the board set, numbers called so far and the boards that
currently have a line (row, column or diagonal).  A broadcast layer holds a
reference to the session and subscribes to it; every state change notifies
listeners with an event name and a :meth:`GameSession.snapshot` to push to
connected viewers.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable
from typing import Any, SupportsIndex

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from bingo_sim.simulation.board import Board, generate_board
from bingo_sim.simulation.win import WinCondition, evaluate_win

logger = logging.getLogger(__name__)

MIN_DISPLAY_SCALE: int = 50
MAX_DISPLAY_SCALE: int = 200

EVENT_STATE = "gameState"
EVENT_NUMBER_CALLED = "numberCalled"
EVENT_NUMBER_UNDONE = "numberUndone"
EVENT_NEW_GAME = "newGameStarted"

Listener = Callable[[str, dict[str, Any]], None]


class SessionSettings(BaseModel):
    """Board layout for the live game."""

    model_config = ConfigDict(frozen=True)

    board_count: int = Field(default=2, ge=1)
    board_size: int = Field(default=5, ge=1)
    number_range_min: int = 1
    number_range_max: int = 75

    @model_validator(mode="after")
    def _check_range(self) -> SessionSettings:
        if self.number_range_min >= self.number_range_max:
            msg = (
                f"number_range_min ({self.number_range_min}) must be less than "
                f"number_range_max ({self.number_range_max})"
            )
            raise ValueError(msg)
        return self


class GameSession:
    """State of the game being called live."""

    def __init__(
        self,
        settings: SessionSettings | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._listeners: list[Listener] = []
        self.settings = settings or SessionSettings()
        self.display_scale = 100
        self.boards: list[Board] = []
        self.called_numbers: list[int] = []
        self.winners: list[int] = []
        self._deal()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, *events: str) -> None:
        snapshot = self.snapshot()
        for event in events:
            for listener in list(self._listeners):
                listener(event, snapshot)

    # ------------------------------------------------------------------
    # Game operations
    # ------------------------------------------------------------------

    def _deal(self) -> None:
        s = self.settings
        self.boards = [
            generate_board(s.board_size, s.number_range_min, s.number_range_max, self._rng)
            for _ in range(s.board_count)
        ]
        self.called_numbers = []
        self.winners = []

    def _recompute_winners(self) -> None:
        self.winners = [i for i, board in enumerate(self.boards) if evaluate_win(board, WinCondition.ANY).won]

    def new_game(self, settings: SessionSettings | None = None) -> None:
        """Deal fresh boards, optionally with new settings, and clear calls."""
        if settings is not None:
            self.settings = settings
        self._deal()
        logger.info(
            "New game: %d boards %dx%d, range [%d, %d]",
            self.settings.board_count,
            self.settings.board_size,
            self.settings.board_size,
            self.settings.number_range_min,
            self.settings.number_range_max,
        )
        self._emit(EVENT_STATE, EVENT_NEW_GAME)

    def update_settings(self, settings: SessionSettings) -> None:
        """Apply new settings and redeal the boards."""
        self.settings = settings
        self._deal()
        self._emit(EVENT_STATE)

    def call_number(self, number: SupportsIndex) -> bool:
        """Call *number*, stamping it on every board.

        Returns:
            ``False`` if the number had already been called (no change).

        Raises:
            ValueError: If *number* is not an integer (NumPy integers are
                accepted) or is outside the configured range.
        """
        s = self.settings
        msg = f"Called number must be an integer, got {number!r}"
        if isinstance(number, bool):
            raise ValueError(msg)
        try:
            value = operator.index(number)
        except TypeError as exc:
            raise ValueError(msg) from exc
        if not s.number_range_min <= value <= s.number_range_max:
            msg = f"Number {value} outside range [{s.number_range_min}, {s.number_range_max}]"
            raise ValueError(msg)
        if value in self.called_numbers:
            return False

        self.called_numbers.append(value)
        for index, board in enumerate(self.boards):
            board.stamp(value)
            if index not in self.winners and evaluate_win(board, WinCondition.ANY).won:
                self.winners.append(index)
                logger.info("Board %d has a line after %d calls", index + 1, len(self.called_numbers))
        self._emit(EVENT_STATE, EVENT_NUMBER_CALLED)
        return True

    def undo_last(self) -> int | None:
        """Withdraw the most recent call.

        Returns:
            The withdrawn number, or ``None`` if nothing had been called.
        """
        if not self.called_numbers:
            return None
        number = self.called_numbers.pop()
        for board in self.boards:
            board.unstamp(number)
        self._recompute_winners()
        self._emit(EVENT_STATE, EVENT_NUMBER_UNDONE)
        return number

    def set_display_scale(self, scale: int) -> int:
        """Set the display zoom percentage, clamped to 50..200."""
        self.display_scale = max(MIN_DISPLAY_SCALE, min(MAX_DISPLAY_SCALE, int(scale)))
        self._emit(EVENT_STATE)
        return self.display_scale

    @property
    def last_called(self) -> int | None:
        return self.called_numbers[-1] if self.called_numbers else None

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the session for broadcasting."""
        s = self.settings
        return {
            "boardCount": s.board_count,
            "boardSize": s.board_size,
            "numberRangeMin": s.number_range_min,
            "numberRangeMax": s.number_range_max,
            "displayScale": self.display_scale,
            "calledNumbers": list(self.called_numbers),
            "boards": [board.to_rows() for board in self.boards],
            "winners": list(self.winners),
        }
