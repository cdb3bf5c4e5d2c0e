"""
Defines shared type aliases for the grid collage engine.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal, NamedTuple

Language = Literal["en", "ru"]
ResampleName = Literal["bilinear", "bicubic", "lanczos", "box"]
RGB = tuple[int, int, int]


class GridCoordinate(NamedTuple):
    """Zero-based (row, column) key of one grid cell."""

    row: int
    column: int

    def within(self, grid_size: int) -> bool:
        """Return True when the cell lies inside an N x N grid."""
        return 0 <= self.row < grid_size and 0 <= self.column < grid_size

    @classmethod
    def parse(cls, text: str) -> GridCoordinate:
        """Parse ``"row,col"`` into a coordinate."""
        parts = text.replace(" ", "").split(",")
        if len(parts) != 2:  # noqa: PLR2004
            msg = f"coordinate must look like ROW,COL, got {text!r}"
            raise ValueError(msg)
        try:
            row, column = int(parts[0]), int(parts[1])
        except ValueError as exc:
            msg = f"coordinate parts must be integers, got {text!r}"
            raise ValueError(msg) from exc
        if row < 0 or column < 0:
            msg = f"coordinate must be non-negative, got {text!r}"
            raise ValueError(msg)
        return cls(row, column)
