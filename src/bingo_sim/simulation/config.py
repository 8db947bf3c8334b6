"""Validated simulation parameters.

:class:`SimulationConfig` is the configuration surface consumed by the
engine.  Invalid parameters are rejected before any game is played:
:func:`load_config` converts pydantic's ``ValidationError`` into
:class:`InvalidConfigurationError` so callers deal with one exception type.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from bingo_sim.simulation.win import WinCondition

#: Upper sanity limit on the number of games in one batch.
MAX_TOTAL_GAMES: int = 100_000


class InvalidConfigurationError(ValueError):
    """Raised when simulation parameters are rejected before work begins."""


class SimulationConfig(BaseModel):
    """Parameters of one simulation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    board_size: int = Field(default=5, ge=1)
    board_count: int = Field(default=2, ge=1)
    min_num: int = 1
    max_num: int = 75
    total_games: int = Field(default=1000, ge=1, le=MAX_TOTAL_GAMES)
    win_condition: WinCondition = WinCondition.ANY

    @model_validator(mode="after")
    def _check_range(self) -> SimulationConfig:
        if self.min_num >= self.max_num:
            msg = f"min_num ({self.min_num}) must be less than max_num ({self.max_num})"
            raise ValueError(msg)
        return self

    @property
    def range_size(self) -> int:
        """Count of drawable numbers in ``[min_num, max_num]``."""
        return self.max_num - self.min_num + 1


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def load_config(path: Path | None = None, **overrides: Any) -> SimulationConfig:
    """Build a :class:`SimulationConfig` from a JSON file and/or overrides.

    Keyword overrides whose value is ``None`` are ignored so CLI options can
    be forwarded unconditionally.

    Args:
        path: Optional JSON file with a flat object of config fields.
        **overrides: Field values taking precedence over the file.

    Raises:
        InvalidConfigurationError: If the file is missing or malformed, or
            any value violates the configuration constraints.
    """
    values: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise InvalidConfigurationError(msg)
        try:
            loaded = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            msg = f"Config file {path} is not valid JSON: {exc}"
            raise InvalidConfigurationError(msg) from exc
        if not isinstance(loaded, dict):
            msg = f"Config file {path} must contain a JSON object"
            raise InvalidConfigurationError(msg)
        values.update(loaded)

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return SimulationConfig(**values)
    except ValidationError as exc:
        raise InvalidConfigurationError(_format_errors(exc)) from exc
