"""Unit tests for the structured logging module."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest

from bingo_sim.utils.logger import (
    DEBUG,
    NORMAL,
    QUIET,
    VERBOSE,
    configure_logging,
    get_logger,
    level_names,
)

_ROOT = "bingo_sim"


@pytest.fixture(autouse=True)
def _reset_bingo_sim_logger() -> Iterator[None]:
    """Reset the bingo_sim root logger between every test in this module."""
    yield
    root = logging.getLogger(_ROOT)
    root.handlers.clear()
    root.setLevel(logging.WARNING)


@pytest.mark.smoke
class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("QUIET", QUIET), ("NORMAL", NORMAL), ("VERBOSE", VERBOSE), ("DEBUG", DEBUG), ("verbose", 15)],
    )
    def test_level_mapping(self, name: str, expected: int) -> None:
        configure_logging(name)
        assert logging.getLogger(_ROOT).level == expected

    def test_invalid_level_raises_valueerror(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("TRACE")

    def test_env_var_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BINGO_SIM_LOG_LEVEL", "debug")
        configure_logging()
        assert logging.getLogger(_ROOT).level == logging.DEBUG

    def test_explicit_level_beats_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BINGO_SIM_LOG_LEVEL", "DEBUG")
        configure_logging("QUIET")
        assert logging.getLogger(_ROOT).level == logging.WARNING

    def test_default_is_normal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BINGO_SIM_LOG_LEVEL", raising=False)
        configure_logging()
        assert logging.getLogger(_ROOT).level == logging.INFO

    def test_single_stderr_handler(self) -> None:
        configure_logging("NORMAL")
        configure_logging("DEBUG")
        root = logging.getLogger(_ROOT)
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert root.propagate is False

    def test_log_format_applied(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("DEBUG")
        get_logger("fmtcheck").info("format-test")
        captured = capsys.readouterr()
        assert " | bingo_sim.fmtcheck | " in captured.err
        assert "INFO" in captured.err
        assert "format-test" in captured.err

    def test_module_loggers_inherit(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("VERBOSE")
        logging.getLogger("bingo_sim.simulation.batch").log(VERBOSE, "batch-line")
        assert "VERBOSE" in capsys.readouterr().err


@pytest.mark.smoke
def test_level_names_sorted() -> None:
    assert level_names() == ["DEBUG", "NORMAL", "QUIET", "VERBOSE"]
