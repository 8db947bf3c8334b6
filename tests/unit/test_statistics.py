"""Unit tests for bingo_sim.evaluation.statistics."""

from __future__ import annotations

import math

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bingo_sim.evaluation.statistics import (
    SummaryStatistics,
    draw_distribution,
    percentile,
    summarize,
)
from bingo_sim.simulation.runner import GameResult
from bingo_sim.simulation.win import WinCondition


def _results(draws: list[int]) -> list[GameResult]:
    return [
        GameResult(game_index=i, draw_count=d, winning_board_index=1, win_condition_matched=WinCondition.ROW)
        for i, d in enumerate(draws, start=1)
    ]


@pytest.mark.unit
class TestSummarize:
    def test_known_values(self) -> None:
        stats = summarize([1, 2, 3, 4, 5])
        assert stats.mean == pytest.approx(3.0)
        assert stats.median == pytest.approx(3.0)
        assert stats.std_dev == pytest.approx(math.sqrt(2), rel=1e-12)
        assert stats.p50 == 3.0
        assert (stats.min, stats.max, stats.count) == (1.0, 5.0, 5)

    def test_accepts_game_results(self) -> None:
        assert summarize(_results([1, 2, 3, 4, 5])) == summarize([1, 2, 3, 4, 5])

    def test_even_count_median_averages_centre(self) -> None:
        assert summarize([10, 2, 8, 4]).median == pytest.approx(6.0)

    def test_population_std_dev(self) -> None:
        # Sample std dev would be sqrt(2); population is 1.
        assert summarize([2, 4]).std_dev == pytest.approx(1.0)

    def test_single_value(self) -> None:
        stats = summarize([42])
        assert stats.min == stats.max == stats.mean == stats.median == 42.0
        assert stats.std_dev == 0.0
        assert stats.percentiles() == {25: 42.0, 50: 42.0, 75: 42.0, 90: 42.0}

    def test_percentile_bands(self) -> None:
        stats = summarize(list(range(1, 11)))
        # ceil(p/100 * 10) - 1 -> indices 2, 4, 7, 8
        assert stats.percentiles() == {25: 3.0, 50: 5.0, 75: 8.0, 90: 9.0}

    def test_unordered_input(self) -> None:
        assert summarize([5, 1, 4, 2, 3]) == summarize([1, 2, 3, 4, 5])

    def test_empty_returns_sentinel(self) -> None:
        stats = summarize([])
        assert stats.count == 0
        assert not stats.has_data
        assert math.isnan(stats.mean)
        assert math.isnan(stats.p90)

    def test_sentinel_factory(self) -> None:
        assert SummaryStatistics.empty().count == 0

    def test_to_dict_has_every_field(self) -> None:
        assert set(summarize([1, 2]).to_dict()) == {
            "mean", "min", "max", "median", "std_dev", "count", "p25", "p50", "p75", "p90",
        }

    @given(st.lists(st.integers(min_value=1, max_value=500), min_size=1, max_size=200))
    @settings(max_examples=100, deadline=None)
    def test_order_statistics_bounded(self, draws: list[int]) -> None:
        stats = summarize(draws)
        assert stats.min <= stats.p25 <= stats.p50 <= stats.p75 <= stats.p90 <= stats.max
        assert stats.min <= stats.median <= stats.max
        assert stats.min - 1e-9 <= stats.mean <= stats.max + 1e-9
        assert stats.std_dev >= 0.0
        assert stats.count == len(draws)


@pytest.mark.unit
class TestPercentile:
    def test_nearest_rank_not_interpolated(self) -> None:
        values = np.array([1, 2, 3, 4], dtype=np.int64)
        assert percentile(values, 50) == 2.0
        assert percentile(values, 51) == 3.0

    def test_zero_percentile_clamps_to_first(self) -> None:
        assert percentile(np.array([7, 9], dtype=np.int64), 0) == 7.0

    def test_hundredth_percentile_is_max(self) -> None:
        assert percentile(np.array([7, 9, 11], dtype=np.int64), 100) == 11.0

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            percentile(np.array([], dtype=np.int64), 50)

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError):
            percentile(np.array([1], dtype=np.int64), 101)


@pytest.mark.unit
class TestDrawDistribution:
    def test_fills_gaps_between_min_and_max(self) -> None:
        dist = draw_distribution([3, 5, 5, 6])
        assert dist.draw_counts.tolist() == [3, 4, 5, 6]
        assert dist.frequencies.tolist() == [1, 0, 2, 1]
        assert dist.cumulative_pct.tolist() == pytest.approx([25.0, 25.0, 75.0, 100.0])

    def test_accepts_game_results(self) -> None:
        dist = draw_distribution(_results([4, 4]))
        assert dist.frequencies.tolist() == [2]
        assert dist.cumulative_pct[-1] == pytest.approx(100.0)

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            draw_distribution([])
