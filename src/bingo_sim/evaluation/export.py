"""Tabular CSV report of a simulation run.

The report has one row per game followed by a blank line and a
``Summary Statistics`` block holding the aggregated statistics and the
run's input parameters.
"""

from __future__ import annotations

import datetime
import io
from pathlib import Path

import pandas as pd  # type: ignore[import-untyped]

from bingo_sim.evaluation.statistics import SummaryStatistics, summarize
from bingo_sim.simulation.batch import BatchResult

REPORT_COLUMNS: tuple[str, ...] = ("Game", "Draws to Win", "Winning Board", "Win Type")

#: Placeholder written when a game ended without a winner.
NO_WINNER: str = "none"


def results_frame(result: BatchResult) -> pd.DataFrame:
    """One row per game, columns as in :data:`REPORT_COLUMNS`."""
    rows = [
        {
            "Game": r.game_index,
            "Draws to Win": r.draw_count,
            "Winning Board": NO_WINNER if r.winning_board_index is None else r.winning_board_index,
            "Win Type": NO_WINNER if r.win_condition_matched is None else r.win_condition_matched.value,
        }
        for r in result.results
    ]
    return pd.DataFrame(rows, columns=list(REPORT_COLUMNS))


def _summary_rows(result: BatchResult, summary: SummaryStatistics) -> list[tuple[str, str]]:
    cfg = result.config
    rows: list[tuple[str, str]] = [("Total Games", str(summary.count))]
    if summary.has_data:
        rows += [
            ("Average Draws", f"{summary.mean:.2f}"),
            ("Min Draws", f"{summary.min:g}"),
            ("Max Draws", f"{summary.max:g}"),
            ("Median Draws", f"{summary.median:.1f}"),
            ("Std Dev", f"{summary.std_dev:.2f}"),
        ]
        rows += [(f"P{p}", f"{value:g}") for p, value in summary.percentiles().items()]
    rows += [
        ("Games Requested", str(result.total_requested)),
        ("Cancelled", "yes" if result.cancelled else "no"),
        ("Board Size", f"{cfg.board_size}x{cfg.board_size}"),
        ("Board Count", str(cfg.board_count)),
        ("Number Range", f"{cfg.min_num}-{cfg.max_num}"),
        ("Win Type", cfg.win_condition.value),
    ]
    return rows


def format_report(result: BatchResult, summary: SummaryStatistics | None = None) -> str:
    """Serialise *result* as CSV text with a trailing summary block.

    Args:
        result: Completed or cancelled batch.
        summary: Precomputed statistics; computed from *result* if ``None``.
    """
    stats = summary if summary is not None else summarize(result.results)

    buffer = io.StringIO()
    results_frame(result).to_csv(buffer, index=False, lineterminator="\n")
    buffer.write("\nSummary Statistics\n")
    pd.DataFrame(_summary_rows(result, stats)).to_csv(buffer, index=False, header=False, lineterminator="\n")
    return buffer.getvalue()


def default_report_name(date: datetime.date | None = None) -> str:
    """File name of the form ``bingo_simulation_YYYY-MM-DD.csv``."""
    day = date or datetime.date.today()
    return f"bingo_simulation_{day.isoformat()}.csv"


def write_report(path: Path, result: BatchResult, summary: SummaryStatistics | None = None) -> Path:
    """Write :func:`format_report` output to *path*.

    A directory *path* receives a file named by :func:`default_report_name`.

    Returns:
        The path actually written.
    """
    target = path / default_report_name() if path.is_dir() else path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(format_report(result, summary))
    return target
