"""Command-line interface for bingo-sim."""
