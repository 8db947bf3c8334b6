"""Typer CLI application for bingo-sim."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import typer
from rich.console import Console

from bingo_sim.simulation.board import generate_board
from bingo_sim.simulation.config import InvalidConfigurationError, load_config
from bingo_sim.simulation.win import WinCondition
from bingo_sim.utils.logger import configure_logging, level_names

app = typer.Typer(help="Bingo draws-to-win Monte Carlo simulator")
console = Console()


@app.callback()
def _callback() -> None:
    """bingo-sim CLI: simulate bingo games and inspect boards."""


def _setup_logging(log_level: str | None) -> None:
    try:
        configure_logging(log_level)
    except ValueError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def simulate(  # noqa: PLR0913, PLR0917
    board_size: int | None = typer.Option(None, "--board-size", help="Board side length (default 5)"),
    board_count: int | None = typer.Option(None, "--board-count", help="Boards in play per game (default 2)"),
    min_num: int | None = typer.Option(None, "--min", help="Smallest drawable number (default 1)"),
    max_num: int | None = typer.Option(None, "--max", help="Largest drawable number (default 75)"),
    games: int | None = typer.Option(None, "--games", help="Games to simulate, 1-100,000 (default 1000)"),
    win_condition: WinCondition | None = typer.Option(None, "--win-condition", help="Pattern that wins a game"),
    config: Path | None = typer.Option(None, "--config", help="JSON file with simulation parameters"),
    seed: int | None = typer.Option(None, "--seed", help="Root seed for reproducible runs"),
    n_jobs: int = typer.Option(1, "--n-jobs", help="Parallel workers (1 = sequential, -1 = all cores)"),
    batch_size: int = typer.Option(100, "--batch-size", help="Games between progress updates"),
    export: Path | None = typer.Option(None, "--export", help="Write a CSV report to this file or directory"),
    histogram: bool = typer.Option(False, "--histogram", help="Print the draw-count distribution"),
    log_level: str | None = typer.Option(None, "--log-level", help=f"One of {', '.join(level_names())}"),
) -> None:
    """Simulate many games and report the distribution of draws to win."""
    _setup_logging(log_level)

    try:
        cfg = load_config(
            config,
            board_size=board_size,
            board_count=board_count,
            min_num=min_num,
            max_num=max_num,
            total_games=games,
            win_condition=win_condition,
        )
    except InvalidConfigurationError as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    from bingo_sim.cli.simulate import run_simulation

    try:
        run_simulation(
            cfg,
            seed=seed,
            n_jobs=n_jobs,
            batch_size=batch_size,
            export=export,
            histogram=histogram,
            console=console,
        )
    except InvalidConfigurationError as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def board(
    size: int = typer.Option(5, "--size", help="Board side length"),
    min_num: int = typer.Option(1, "--min", help="Smallest number"),
    max_num: int = typer.Option(75, "--max", help="Largest number"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Generate and print one random board."""
    try:
        generated = generate_board(size, min_num, max_num, np.random.default_rng(seed))
    except ValueError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    from bingo_sim.cli.simulate import board_table

    console.print(board_table(generated, title=f"{size}x{size} board ({min_num}-{max_num})"))
    if generated.degraded:
        console.print("[yellow]Warning: range too small for unique numbers; board contains duplicates.[/yellow]")
