"""Entry point for ``python -m bingo_sim.cli``."""

from __future__ import annotations

from bingo_sim.cli.main import app

app()
