"""Simulation run orchestration for the CLI.

Runs a batch behind a Rich progress bar, turns Ctrl-C into a cooperative
cancellation, and renders the summary (and optional histogram) as tables.
"""

from __future__ import annotations

import math
import threading
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from bingo_sim.evaluation.export import write_report
from bingo_sim.evaluation.statistics import SummaryStatistics, draw_distribution, summarize
from bingo_sim.simulation.batch import BatchResult, CancellationToken, run_batch
from bingo_sim.simulation.board import Board
from bingo_sim.simulation.config import SimulationConfig


def _fmt(value: float, digits: int = 2) -> str:
    return "--" if math.isnan(value) else f"{value:.{digits}f}"


def summary_table(result: BatchResult, summary: SummaryStatistics) -> Table:
    cfg = result.config
    table = Table(title="Simulation Results")
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Games", f"{summary.count:,} / {result.total_requested:,}")
    table.add_row("Average draws", _fmt(summary.mean))
    table.add_row("Min draws", _fmt(summary.min, 0))
    table.add_row("Max draws", _fmt(summary.max, 0))
    table.add_row("Median draws", _fmt(summary.median, 1))
    table.add_row("Std dev", _fmt(summary.std_dev))
    for p, value in summary.percentiles().items():
        table.add_row(f"P{p}", _fmt(value, 0))
    table.add_row("No-winner games", str(result.no_winner_games))
    table.add_row("Degraded boards", str(result.degraded_boards))
    table.add_row("Board size", f"{cfg.board_size}x{cfg.board_size}")
    table.add_row("Board count", str(cfg.board_count))
    table.add_row("Number range", f"{cfg.min_num}-{cfg.max_num}")
    table.add_row("Win type", cfg.win_condition.value)
    table.add_row("Time (s)", f"{result.elapsed_seconds:.2f}")
    return table


def histogram_table(result: BatchResult) -> Table:
    dist = draw_distribution(result.results)
    table = Table(title="Distribution of Draws to Win")
    table.add_column("Draws", style="cyan", justify="right")
    table.add_column("Games", style="green", justify="right")
    table.add_column("Cumulative %", style="yellow", justify="right")
    for draws, freq, cum in zip(dist.draw_counts, dist.frequencies, dist.cumulative_pct, strict=True):
        table.add_row(str(draws), str(freq), f"{cum:.1f}")
    return table


def board_table(board: Board, title: str = "Board") -> Table:
    table = Table(title=title, show_header=False, show_lines=True)
    for _ in range(board.size):
        table.add_column(justify="center")
    for row in board.cells:
        table.add_row(*("[bold magenta]FREE[/bold magenta]" if c.is_free else str(c.number) for c in row))
    return table


def run_simulation(  # noqa: PLR0913
    config: SimulationConfig,
    *,
    seed: int | None = None,
    n_jobs: int = 1,
    batch_size: int = 100,
    export: Path | None = None,
    histogram: bool = False,
    console: Console | None = None,
) -> BatchResult:
    """Run a batch with progress display and print the results.

    The batch runs in a worker thread so that Ctrl-C in the main thread
    can set the cancellation token; the partial results are then reported.

    Args:
        config: Validated simulation parameters.
        seed: Root seed for reproducible runs.
        n_jobs: joblib worker count (``1`` = sequential).
        batch_size: Games between progress updates.
        export: Optional CSV report path (file or directory).
        histogram: Also print the draw-count distribution.
        console: Rich Console for output; pass ``Console(quiet=True)`` to
            suppress it.

    Returns:
        The :class:`BatchResult`, possibly cancelled.
    """
    _console = console or Console()
    token = CancellationToken()
    outcome: dict[str, BatchResult | BaseException] = {}

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=_console,
    ) as progress:
        task = progress.add_task("Simulating games...", total=config.total_games)

        def _on_progress(completed: int, total: int) -> None:
            progress.update(task, completed=completed, total=total)

        def _work() -> None:
            try:
                outcome["result"] = run_batch(
                    config,
                    cancel_token=token,
                    progress=_on_progress,
                    batch_size=batch_size,
                    n_jobs=n_jobs,
                    seed=seed,
                )
            except BaseException as exc:  # noqa: BLE001
                outcome["error"] = exc

        worker = threading.Thread(target=_work, name="bingo-batch")
        worker.start()
        try:
            while worker.is_alive():
                worker.join(timeout=0.1)
        except KeyboardInterrupt:
            token.cancel()
            _console.print("[yellow]Stopping after the current batch...[/yellow]")
            worker.join()

    error = outcome.get("error")
    if isinstance(error, BaseException):
        raise error
    result = outcome.get("result")
    if not isinstance(result, BatchResult):
        msg = "Simulation worker finished without a result"
        raise RuntimeError(msg)

    if result.cancelled:
        _console.print(f"[yellow]Simulation stopped at {result.completed:,} games[/yellow]")
    else:
        _console.print(f"[green]Simulation complete! {result.completed:,} games processed[/green]")

    summary = summarize(result.results)
    _console.print(summary_table(result, summary))
    if histogram and result.results:
        _console.print(histogram_table(result))

    if export is not None:
        if not result.results:
            _console.print("[yellow]No results to export.[/yellow]")
        else:
            written = write_report(export, result, summary)
            _console.print(f"Report written to {written}")

    return result
