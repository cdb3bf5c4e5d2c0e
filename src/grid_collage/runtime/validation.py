"""Input validation helpers for runtime configuration."""

from __future__ import annotations

from pathlib import Path

from grid_collage.constants import GRID_SIZE_MAX, GRID_SIZE_MIN


def validate_grid_size(grid_size: int) -> None:
    """Ensure the grid dimension is within the supported range."""
    if not GRID_SIZE_MIN <= grid_size <= GRID_SIZE_MAX:
        msg = (f"Grid size must be between {GRID_SIZE_MIN} and "
               f"{GRID_SIZE_MAX}, got {grid_size}")
        raise ValueError(msg)


def validate_destination(destination: str | Path) -> Path:
    """Ensure the output path names a file, not a directory."""
    path = Path(destination)
    if not path.name or path.is_dir():
        msg = f"Output path must name a file: {destination}"
        raise ValueError(msg)
    return path

