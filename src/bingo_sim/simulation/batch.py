"""Batch execution of independent simulated games.

:func:`run_batch` plays ``total_games`` games, sequentially or across a
``joblib.Parallel`` worker pool, reporting progress after every
``batch_size`` games and honouring a :class:`CancellationToken`.

Every game draws from its own NumPy generator, seeded from a
``SeedSequence`` child keyed by the game index.  A given ``seed`` therefore
yields the same results whichever execution mode is used, and results are
always returned sorted by game index.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

import joblib  # type: ignore[import-untyped]
import numpy as np
import numpy.typing as npt

from bingo_sim.simulation.config import MAX_TOTAL_GAMES, InvalidConfigurationError, SimulationConfig
from bingo_sim.simulation.runner import GameResult, play_game
from bingo_sim.utils.logger import VERBOSE

logger = logging.getLogger(__name__)

#: Games between progress reports and cancellation checks in parallel mode.
DEFAULT_BATCH_SIZE: int = 100

ProgressCallback = Callable[[int, int], None]


class CancellationToken:
    """Set-once flag a caller uses to stop a running batch.

    Safe to set from another thread; the batch observes it at the next
    game (sequential mode) or batch boundary (parallel mode).
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BatchProgress:
    """Thread-safe ``(completed, total)`` counter for non-blocking polling."""

    def __init__(self, total: int = 0) -> None:
        self._lock = threading.Lock()
        self._completed = 0
        self._total = total

    def reset(self, total: int) -> None:
        with self._lock:
            self._completed = 0
            self._total = total

    def advance(self, n: int = 1) -> int:
        with self._lock:
            self._completed += n
            return self._completed

    def snapshot(self) -> tuple[int, int]:
        """Return ``(completed, total)`` as of now."""
        with self._lock:
            return self._completed, self._total

    @property
    def fraction(self) -> float:
        completed, total = self.snapshot()
        return completed / total if total else 0.0


@dataclass(frozen=True)
class BatchResult:
    """Results of a batch, complete or cancelled.

    Attributes:
        config: Parameters the games were played with.
        results: Per-game results sorted by ``game_index``.
        total_requested: Number of games the caller asked for.
        completed: Number of games actually played.
        cancelled: ``True`` if the batch stopped early on request.
        degraded_boards: Boards across all games generated with duplicates.
        elapsed_seconds: Wall-clock time of the batch.
    """

    config: SimulationConfig
    results: tuple[GameResult, ...]
    total_requested: int
    completed: int
    cancelled: bool
    degraded_boards: int
    elapsed_seconds: float

    @property
    def draw_counts(self) -> npt.NDArray[np.int64]:
        """Draw counts in game-index order."""
        return np.fromiter((r.draw_count for r in self.results), dtype=np.int64, count=len(self.results))

    @property
    def no_winner_games(self) -> int:
        return sum(not r.has_winner for r in self.results)


def _game_seed(root: np.random.SeedSequence, game_index: int) -> np.random.SeedSequence:
    """Child seed for one game, independent of execution order."""
    return np.random.SeedSequence(root.entropy, spawn_key=(*root.spawn_key, game_index))


def _play_seeded(config: SimulationConfig, game_index: int, seed: np.random.SeedSequence) -> GameResult:
    return play_game(config, game_index=game_index, rng=np.random.default_rng(seed))


def run_batch(  # noqa: PLR0913
    config: SimulationConfig,
    total_games: int | None = None,
    *,
    cancel_token: CancellationToken | None = None,
    progress: ProgressCallback | None = None,
    tracker: BatchProgress | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    n_jobs: int = 1,
    seed: int | None = None,
) -> BatchResult:
    """Play a batch of independent games.

    Args:
        config: Simulation parameters.
        total_games: Games to play; defaults to ``config.total_games``.
        cancel_token: Token checked before each game (``n_jobs=1``) or
            between batches (parallel).  A cancelled batch returns the
            games completed so far.
        progress: Called with ``(completed, total)`` after every batch.
        tracker: Optional :class:`BatchProgress` updated as games finish,
            for polling from another thread.
        batch_size: Games per progress report / parallel dispatch.  Does
            not affect results.
        n_jobs: Number of joblib workers. ``1`` = sequential, ``-1`` = all
            cores.
        seed: Root seed; ``None`` draws fresh OS entropy.

    Returns:
        :class:`BatchResult` with results sorted by game index.

    Raises:
        InvalidConfigurationError: If ``total_games``, ``batch_size`` or
            ``n_jobs`` is out of range.  Raised before any game is played.
    """
    total = config.total_games if total_games is None else total_games
    if not 1 <= total <= MAX_TOTAL_GAMES:
        msg = f"total_games must be between 1 and {MAX_TOTAL_GAMES:,}, got {total}"
        raise InvalidConfigurationError(msg)
    if batch_size < 1:
        msg = f"batch_size must be >= 1, got {batch_size}"
        raise InvalidConfigurationError(msg)
    if n_jobs == 0:
        msg = "n_jobs must be non-zero (1 = sequential, -1 = all cores)"
        raise InvalidConfigurationError(msg)

    token = cancel_token or CancellationToken()
    counter = tracker or BatchProgress()
    counter.reset(total)
    root = np.random.SeedSequence(seed)

    logger.info(
        "Running batch: %d games, %dx%d boards x%d, range [%d, %d], win=%s, n_jobs=%d",
        total,
        config.board_size,
        config.board_size,
        config.board_count,
        config.min_num,
        config.max_num,
        config.win_condition.value,
        n_jobs,
    )

    start = time.perf_counter()
    results: list[GameResult] = []

    with contextlib.ExitStack() as stack:
        parallel = stack.enter_context(joblib.Parallel(n_jobs=n_jobs)) if n_jobs != 1 else None

        for batch_start in range(0, total, batch_size):
            if token.cancelled:
                break
            indices = range(batch_start + 1, min(batch_start + batch_size, total) + 1)

            if parallel is None:
                for game_index in indices:
                    if token.cancelled:
                        break
                    results.append(_play_seeded(config, game_index, _game_seed(root, game_index)))
                    counter.advance()
            else:
                batch: list[GameResult] = parallel(
                    joblib.delayed(_play_seeded)(config, i, _game_seed(root, i)) for i in indices
                )
                results.extend(batch)
                counter.advance(len(batch))

            logger.log(VERBOSE, "Batch done: %d / %d games", len(results), total)
            if progress is not None:
                progress(len(results), total)

    # Parallel workers may return out of order.
    results.sort(key=lambda r: r.game_index)
    elapsed = time.perf_counter() - start
    cancelled = len(results) < total

    if cancelled:
        logger.warning("Batch cancelled after %d of %d games", len(results), total)
    else:
        logger.info("Batch complete: %d games in %.2fs", total, elapsed)

    return BatchResult(
        config=config,
        results=tuple(results),
        total_requested=total,
        completed=len(results),
        cancelled=cancelled,
        degraded_boards=sum(r.degraded_boards for r in results),
        elapsed_seconds=elapsed,
    )
