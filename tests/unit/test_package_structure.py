"""Smoke tests for package structure and basic contracts."""

from __future__ import annotations

import importlib.metadata
from pathlib import Path

import pytest


@pytest.mark.smoke
def test_package_metadata_accessible() -> None:
    """Distribution name ``bingo-sim`` maps to import package ``bingo_sim``."""
    version = importlib.metadata.version("bingo-sim")
    assert version is not None
    assert len(version) > 0


@pytest.mark.smoke
def test_src_directory_structure() -> None:
    project_root = Path(__file__).parent.parent.parent

    src_dir = project_root / "src" / "bingo_sim"
    assert src_dir.is_dir(), f"Package directory not found: {src_dir}"
    for sub in ("simulation", "evaluation", "cli", "utils"):
        assert (src_dir / sub / "__init__.py").exists(), f"Missing subpackage: {sub}"
