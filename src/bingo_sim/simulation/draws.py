"""Call order for one game: a uniform random permutation of the number range."""

from __future__ import annotations

import numpy as np


def draw_sequence(
    min_num: int,
    max_num: int,
    rng: np.random.Generator | None = None,
) -> list[int]:
    """Return every integer in ``[min_num, max_num]`` in shuffled order.

    Uses an in-place Fisher–Yates shuffle: for ``i`` from the last index down
    to 1, swap position ``i`` with a uniform index ``j`` in ``[0, i]``.  Each
    permutation is equally likely.

    Args:
        min_num: First number of the range (inclusive).
        max_num: Last number of the range (inclusive).
        rng: NumPy random generator; a fresh one is created if ``None``.

    Raises:
        ValueError: If ``max_num < min_num``.
    """
    if max_num < min_num:
        msg = f"max_num ({max_num}) must be >= min_num ({min_num})"
        raise ValueError(msg)

    if rng is None:
        rng = np.random.default_rng()

    numbers = list(range(min_num, max_num + 1))
    for i in range(len(numbers) - 1, 0, -1):
        j = int(rng.integers(0, i, endpoint=True))
        numbers[i], numbers[j] = numbers[j], numbers[i]
    return numbers
