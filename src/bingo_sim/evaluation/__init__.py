"""Statistics and reporting over simulation results."""

from __future__ import annotations

from bingo_sim.evaluation.export import (
    REPORT_COLUMNS,
    default_report_name,
    format_report,
    results_frame,
    write_report,
)
from bingo_sim.evaluation.statistics import (
    PERCENTILES,
    DrawDistribution,
    SummaryStatistics,
    draw_distribution,
    percentile,
    summarize,
)

__all__ = [
    "PERCENTILES",
    "REPORT_COLUMNS",
    "DrawDistribution",
    "SummaryStatistics",
    "default_report_name",
    "draw_distribution",
    "format_report",
    "percentile",
    "results_frame",
    "summarize",
    "write_report",
]
