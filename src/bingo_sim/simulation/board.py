"""Bingo board data structures and random board generation.

A :class:`Board` is a square grid of :class:`Cell` objects.  Odd-sized
boards carry a free cell at the geometric center, stamped by construction.
:func:`generate_board` fills the remaining cells with numbers drawn uniformly
from an inclusive range, resampling collisions up to a bounded budget.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

#: Label used for the free cell when a board is serialised.
FREE_LABEL: str = "FREE"


@dataclass
class Cell:
    """One board position.

    Attributes:
        number: Drawable number, or ``None`` for the free cell.
        stamped: Whether the cell has been marked.
    """

    number: int | None
    stamped: bool = False

    @property
    def is_free(self) -> bool:
        """Return ``True`` for the center free cell."""
        return self.number is None

    def to_dict(self) -> dict[str, Any]:
        return {"number": FREE_LABEL if self.number is None else self.number, "stamped": self.stamped}


@dataclass
class Board:
    """Square grid of cells owned by a single game.

    Attributes:
        cells: Row-major grid, ``cells[row][col]``.
        degraded: ``True`` if generation had to accept a duplicate number
            after exhausting its resample budget.
    """

    cells: list[list[Cell]]
    degraded: bool = field(default=False)

    def __post_init__(self) -> None:
        n = len(self.cells)
        if n == 0 or any(len(row) != n for row in self.cells):
            msg = f"Board must be a non-empty square grid, got row lengths {[len(r) for r in self.cells]}"
            raise ValueError(msg)

    @property
    def size(self) -> int:
        """Side length of the board."""
        return len(self.cells)

    def iter_cells(self) -> list[Cell]:
        """Return all cells in row-major order."""
        return [cell for row in self.cells for cell in row]

    def numbers(self) -> list[int]:
        """Return the numbers of all numbered cells in row-major order."""
        return [cell.number for cell in self.iter_cells() if cell.number is not None]

    def stamp(self, number: int) -> int:
        """Stamp every cell holding *number*; return how many were stamped."""
        hits = 0
        for cell in self.iter_cells():
            if cell.number == number:
                cell.stamped = True
                hits += 1
        return hits

    def unstamp(self, number: int) -> int:
        """Clear the stamp on every cell holding *number*.

        The free cell is never unstamped.
        """
        hits = 0
        for cell in self.iter_cells():
            if cell.number == number:
                cell.stamped = False
                hits += 1
        return hits

    def stamped_count(self) -> int:
        return sum(cell.stamped for cell in self.iter_cells())

    def to_rows(self) -> list[list[dict[str, Any]]]:
        """Serialise to nested lists of ``{"number", "stamped"}`` dicts."""
        return [[cell.to_dict() for cell in row] for row in self.cells]


def has_free_cell(size: int) -> bool:
    """Return ``True`` if a board of side *size* has a center free cell."""
    return size % 2 == 1


def required_numbers(size: int) -> int:
    """Number of distinct values needed to fill a board without duplicates."""
    return size * size - (1 if has_free_cell(size) else 0)


def generate_board(
    size: int,
    min_num: int,
    max_num: int,
    rng: np.random.Generator | None = None,
) -> Board:
    """Generate one randomized board.

    Each numbered cell draws a candidate uniformly from ``[min_num, max_num]``
    and resamples while it collides with a number already on this board.
    Resampling stops after ``2 × range`` attempts, or immediately once every
    number of the range is in use; the colliding number is then accepted and
    the board is flagged ``degraded``.

    Args:
        size: Side length (``>= 1``).
        min_num: Smallest drawable number (inclusive).
        max_num: Largest drawable number (inclusive), ``> min_num``.
        rng: NumPy random generator; a fresh one is created if ``None``.

    Returns:
        A freshly owned :class:`Board`.

    Raises:
        ValueError: If ``size < 1`` or ``max_num <= min_num``.
    """
    if size < 1:
        msg = f"size must be >= 1, got {size}"
        raise ValueError(msg)
    if max_num <= min_num:
        msg = f"max_num ({max_num}) must be greater than min_num ({min_num})"
        raise ValueError(msg)

    if rng is None:
        rng = np.random.default_rng()

    span = max_num - min_num + 1
    max_attempts = span * 2
    center = size // 2 if has_free_cell(size) else -1

    used: set[int] = set()
    degraded = False
    cells: list[list[Cell]] = []

    for row in range(size):
        row_cells: list[Cell] = []
        for col in range(size):
            if row == center and col == center:
                row_cells.append(Cell(number=None, stamped=True))
                continue

            number = int(rng.integers(min_num, max_num, endpoint=True))
            attempts = 1
            while number in used and len(used) < span and attempts < max_attempts:
                number = int(rng.integers(min_num, max_num, endpoint=True))
                attempts += 1
            if number in used:
                degraded = True
            used.add(number)
            row_cells.append(Cell(number=number))
        cells.append(row_cells)

    if degraded:
        logger.debug(
            "Degraded board: %dx%d needs %d numbers, range [%d, %d] has %d",
            size,
            size,
            required_numbers(size),
            min_num,
            max_num,
            span,
        )

    return Board(cells=cells, degraded=degraded)
