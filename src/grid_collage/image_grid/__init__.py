"""
Collage rendering split into per-image primitives and canvas layout.

The package exposes the most commonly used entry points directly so
callers do not need to know which submodule holds them.
"""

from __future__ import annotations

from . import core, layouts
from .core import (
    RESAMPLE_FILTERS,
    Rect,
    crop_to_center_square,
    make_thumbnail,
    resize_square,
    to_rgb,
)
from .layouts import (
    AssemblyCallbacks,
    CellPlan,
    assemble,
    enumerate_slots,
    plan_cell_size,
)

__all__ = [
    "RESAMPLE_FILTERS",
    "AssemblyCallbacks",
    "CellPlan",
    "Rect",
    "assemble",
    "core",
    "crop_to_center_square",
    "enumerate_slots",
    "layouts",
    "make_thumbnail",
    "plan_cell_size",
    "resize_square",
    "to_rgb",
]
