"""Integration tests for the CLI (``python -m bingo_sim.cli``)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from bingo_sim.cli.main import app
from bingo_sim.cli.simulate import run_simulation
from bingo_sim.simulation.config import SimulationConfig

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_bingo_sim_logger() -> Iterator[None]:
    yield
    root = logging.getLogger("bingo_sim")
    root.handlers.clear()
    root.setLevel(logging.WARNING)


@pytest.mark.integration
class TestSimulateCommand:
    def test_runs_and_prints_summary(self) -> None:
        result = runner.invoke(
            app,
            ["simulate", "--board-size", "3", "--max", "20", "--games", "40", "--seed", "1", "--log-level", "QUIET"],
        )
        assert result.exit_code == 0, result.output
        assert "Simulation complete! 40 games processed" in result.output
        assert "Simulation Results" in result.output

    def test_export_writes_report(self, tmp_path: Path) -> None:
        out = tmp_path / "report.csv"
        result = runner.invoke(
            app,
            [
                "simulate",
                "--board-size",
                "3",
                "--max",
                "20",
                "--games",
                "25",
                "--export",
                str(out),
                "--log-level",
                "QUIET",
            ],
        )
        assert result.exit_code == 0, result.output
        lines = out.read_text().splitlines()
        assert lines[0] == "Game,Draws to Win,Winning Board,Win Type"
        assert len([line for line in lines[1:] if line and line[0].isdigit()]) == 25
        assert "Summary Statistics" in lines

    def test_histogram_option(self) -> None:
        result = runner.invoke(
            app,
            ["simulate", "--board-size", "3", "--max", "20", "--games", "20", "--histogram", "--log-level", "QUIET"],
        )
        assert result.exit_code == 0, result.output
        assert "Distribution of Draws to Win" in result.output

    def test_config_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "sim.json"
        cfg.write_text(json.dumps({"board_size": 3, "max_num": 15, "total_games": 10, "win_condition": "blackout"}))
        result = runner.invoke(app, ["simulate", "--config", str(cfg), "--log-level", "QUIET"])
        assert result.exit_code == 0, result.output
        assert "10 games processed" in result.output
        assert "blackout" in result.output

    def test_invalid_range_exits_1(self) -> None:
        result = runner.invoke(app, ["simulate", "--min", "50", "--max", "10"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_too_many_games_exits_1(self) -> None:
        result = runner.invoke(app, ["simulate", "--games", "100001"])
        assert result.exit_code == 1

    def test_unknown_win_condition_rejected(self) -> None:
        result = runner.invoke(app, ["simulate", "--win-condition", "corners"])
        assert result.exit_code != 0

    def test_bad_log_level_exits_1(self) -> None:
        result = runner.invoke(app, ["simulate", "--log-level", "LOUD"])
        assert result.exit_code == 1
        assert "Unknown log level" in result.output


@pytest.mark.integration
class TestBoardCommand:
    def test_prints_board(self) -> None:
        result = runner.invoke(app, ["board", "--size", "5", "--seed", "3"])
        assert result.exit_code == 0, result.output
        assert "FREE" in result.output

    def test_degraded_warning(self) -> None:
        result = runner.invoke(app, ["board", "--size", "5", "--max", "10"])
        assert result.exit_code == 0, result.output
        assert "duplicates" in result.output

    def test_invalid_board_exits_1(self) -> None:
        result = runner.invoke(app, ["board", "--size", "0"])
        assert result.exit_code == 1


@pytest.mark.integration
def test_run_simulation_returns_batch(tmp_path: Path) -> None:
    from rich.console import Console

    config = SimulationConfig(board_size=3, board_count=2, min_num=1, max_num=20, total_games=30)
    result = run_simulation(config, seed=2, export=tmp_path, console=Console(quiet=True))
    assert result.completed == 30
    assert len(list(tmp_path.glob("bingo_simulation_*.csv"))) == 1


@pytest.mark.integration
def test_run_simulation_without_result_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    from rich.console import Console

    monkeypatch.setattr("bingo_sim.cli.simulate.run_batch", lambda *args, **kwargs: None)
    config = SimulationConfig(board_size=3, board_count=1, min_num=1, max_num=20, total_games=5)
    with pytest.raises(RuntimeError, match="without a result"):
        run_simulation(config, console=Console(quiet=True))
