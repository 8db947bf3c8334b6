"""Summary statistics over simulated draw counts.

* :func:`summarize`: mean, min, max, median, population std dev and
  nearest-rank percentiles (25/50/75/90).
* :func:`percentile`: nearest-rank percentile of an ascending array.
* :func:`draw_distribution`: frequency and cumulative share per draw count.

Only ``draw_count`` is aggregated; no-winner games count as full-range draws.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from bingo_sim.simulation.runner import GameResult

#: Percentile bands reported in :class:`SummaryStatistics`.
PERCENTILES: tuple[int, ...] = (25, 50, 75, 90)


@dataclasses.dataclass(frozen=True)
class SummaryStatistics:
    """Aggregated draws-to-win statistics.

    Attributes
    ----------
    mean
        Arithmetic mean of draw counts.
    min, max
        Smallest and largest draw count.
    median
        Central value; mean of the two central values for even counts.
    std_dev
        Population standard deviation (divides by ``count``).
    count
        Number of games summarised.  ``0`` marks the no-data sentinel.
    p25, p50, p75, p90
        Nearest-rank percentiles.
    """

    mean: float
    min: float
    max: float
    median: float
    std_dev: float
    count: int
    p25: float
    p50: float
    p75: float
    p90: float

    @classmethod
    def empty(cls) -> SummaryStatistics:
        """Sentinel returned for an empty result set."""
        nan = float("nan")
        return cls(
            mean=nan, min=nan, max=nan, median=nan, std_dev=nan, count=0, p25=nan, p50=nan, p75=nan, p90=nan
        )

    @property
    def has_data(self) -> bool:
        return self.count > 0

    def percentiles(self) -> dict[int, float]:
        return {p: getattr(self, f"p{p}") for p in PERCENTILES}

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class DrawDistribution:
    """Histogram of draw counts over the closed interval ``[min, max]``.

    Attributes
    ----------
    draw_counts
        Every integer draw count from the smallest to the largest observed.
    frequencies
        Number of games that finished at each draw count (zeros included).
    cumulative_pct
        Percentage of games finished at or before each draw count.
    """

    draw_counts: npt.NDArray[np.int64]
    frequencies: npt.NDArray[np.int64]
    cumulative_pct: npt.NDArray[np.float64]


def _as_draws(results: Iterable[GameResult] | Sequence[int] | npt.NDArray[np.int64]) -> npt.NDArray[np.int64]:
    values = [r.draw_count if isinstance(r, GameResult) else int(r) for r in results]
    return np.asarray(values, dtype=np.int64)


def percentile(sorted_values: npt.NDArray[np.int64], p: float) -> float:
    """Nearest-rank percentile: ``sorted[max(0, ceil(p/100 * n) - 1)]``.

    Args:
        sorted_values: Non-empty array sorted ascending.
        p: Percentile in ``[0, 100]``.

    Raises:
        ValueError: If the array is empty or *p* is out of range.
    """
    if len(sorted_values) == 0:
        msg = "percentile requires a non-empty array"
        raise ValueError(msg)
    if not 0 <= p <= 100:
        msg = f"p must be in [0, 100], got {p}"
        raise ValueError(msg)
    index = max(0, math.ceil(p / 100 * len(sorted_values)) - 1)
    return float(sorted_values[index])


def summarize(results: Iterable[GameResult] | Sequence[int] | npt.NDArray[np.int64]) -> SummaryStatistics:
    """Reduce draw counts to :class:`SummaryStatistics`.

    Accepts :class:`GameResult` objects or raw draw counts.  Computed from
    scratch on every call.

    Returns:
        The statistics, or :meth:`SummaryStatistics.empty` when there is no
        data.
    """
    draws = _as_draws(results)
    if draws.size == 0:
        return SummaryStatistics.empty()

    ordered = np.sort(draws)
    bands = {p: percentile(ordered, p) for p in PERCENTILES}

    return SummaryStatistics(
        mean=float(np.mean(ordered)),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        median=float(np.median(ordered)),
        std_dev=float(np.std(ordered, ddof=0)),
        count=int(ordered.size),
        p25=bands[25],
        p50=bands[50],
        p75=bands[75],
        p90=bands[90],
    )


def draw_distribution(results: Iterable[GameResult] | Sequence[int] | npt.NDArray[np.int64]) -> DrawDistribution:
    """Frequency and cumulative percentage for each draw count.

    Raises:
        ValueError: If there are no results.
    """
    draws = _as_draws(results)
    if draws.size == 0:
        msg = "draw_distribution requires at least one result"
        raise ValueError(msg)

    low, high = int(draws.min()), int(draws.max())
    frequencies = np.bincount(draws - low, minlength=high - low + 1).astype(np.int64)
    cumulative_pct = np.cumsum(frequencies) / draws.size * 100.0

    return DrawDistribution(
        draw_counts=np.arange(low, high + 1, dtype=np.int64),
        frequencies=frequencies,
        cumulative_pct=cumulative_pct.astype(np.float64),
    )
