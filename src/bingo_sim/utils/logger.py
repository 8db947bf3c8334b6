"""Verbosity control for the ``bingo_sim`` logger tree.

Engine modules log through ``logging.getLogger(__name__)``; this module only
decides how much of that reaches stderr.  The ``--log-level`` option of the
CLI accepts these names:

    ========  =====  ==================================================
    Name      Value  What a simulation run shows
    ========  =====  ==================================================
    QUIET      30    cancelled batches only
    NORMAL     20    batch start/finish, live-session new games and lines
    VERBOSE    15    plus one line per completed batch of games
    DEBUG      10    plus every degraded (duplicate-number) board
    ========  =====  ==================================================

With no explicit level, ``BINGO_SIM_LOG_LEVEL`` is read, then ``NORMAL``.
"""

from __future__ import annotations

import logging
import os
import sys

VERBOSE: int = 15
"""Per-batch progress lines from :func:`bingo_sim.simulation.batch.run_batch`."""

logging.addLevelName(VERBOSE, "VERBOSE")

QUIET: int = logging.WARNING
NORMAL: int = logging.INFO
DEBUG: int = logging.DEBUG

_LEVEL_MAP: dict[str, int] = {
    "QUIET": QUIET,
    "NORMAL": NORMAL,
    "VERBOSE": VERBOSE,
    "DEBUG": DEBUG,
}

_ROOT_LOGGER_NAME: str = "bingo_sim"
_ENV_VAR: str = "BINGO_SIM_LOG_LEVEL"
_LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"


def level_names() -> list[str]:
    """Names accepted by ``--log-level``, sorted."""
    return sorted(_LEVEL_MAP)


def _resolve_level(level: str | None) -> int:
    name = level if level is not None else os.environ.get(_ENV_VAR, "NORMAL")
    try:
        return _LEVEL_MAP[name.upper()]
    except KeyError:
        msg = f"Unknown log level {name!r}. Valid levels: {', '.join(level_names())}"
        raise ValueError(msg) from None


def configure_logging(level: str | None = None) -> None:
    """Send ``bingo_sim`` records at *level* and above to stderr.

    Safe to call once per CLI command: the previous handler is replaced, so
    repeated calls never duplicate output.

    Args:
        level: A name from :func:`level_names` (case-insensitive), or
            ``None`` to use ``BINGO_SIM_LOG_LEVEL`` / ``NORMAL``.

    Raises:
        ValueError: If the level name is not recognised.
    """
    numeric_level = _resolve_level(level)

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(numeric_level)
    for old in root.handlers[:]:
        root.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)

    # bingo_sim records never reach the process root logger.
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for *name* under ``bingo_sim`` (``"cli"`` -> ``bingo_sim.cli``)."""
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
