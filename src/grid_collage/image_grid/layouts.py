"""Canvas composition: slot enumeration, cell sizing, and painting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from grid_collage.constants import (
    BACKGROUND_COLOR,
    PROGRESS_NORMALIZED,
    PROGRESS_PAINT_SPAN,
    PROGRESS_SIZED,
    PROGRESS_SLOTS_ENUMERATED,
)
from grid_collage.errors import AssemblyCancelledError, NoImagesError
from grid_collage.image_grid.core import (
    blank_canvas,
    cell_box,
    crop_to_center_square,
    resize_square,
    to_rgb,
)
from grid_collage.logging_utils import logger
from grid_collage.models import CanvasResult
from grid_collage.type_defs import GridCoordinate

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable

    from PIL import Image

    from grid_collage.models import AssemblyRequest, SourceImage

Slot = tuple[GridCoordinate, "SourceImage | None"]


@dataclass(slots=True)
class AssemblyCallbacks:
    """Optional hooks the compositor calls while it works."""

    on_progress: Callable[[int], None] | None = None
    should_cancel: Callable[[], bool] | None = None

    def progress(self, percent: int) -> None:
        """Forward a milestone if anyone listens."""
        if self.on_progress is not None:
            self.on_progress(percent)

    def check_cancelled(self) -> None:
        """Raise AssemblyCancelledError once cancellation was requested."""
        if self.should_cancel is not None and self.should_cancel():
            msg = "Assembly cancelled"
            raise AssemblyCancelledError(msg)


@dataclass(frozen=True, slots=True)
class CellPlan:
    """Uniform cell size and resulting canvas side for one assembly."""

    cell_side: int
    collage_side: int
    capped: bool


def enumerate_slots(request: AssemblyRequest) -> list[Slot]:
    """Return all N x N slots in row-major order, None for empty ones."""
    n = request.spec.grid_size
    return [
        (coord, request.images.get(coord))
        for coord in (GridCoordinate(r, c) for r in range(n) for c in range(n))
    ]


def plan_cell_size(
    sides: Iterable[int],
    grid_size: int,
    max_collage_size: int,
) -> CellPlan:
    """
    Pick the shared cell side and the canvas side.

    The cell side is the smallest normalized side. When N cells of that
    size would exceed ``max_collage_size`` the cell shrinks to
    ``max_collage_size // N`` so the canvas is the largest multiple of
    N under the cap.
    """
    sides = list(sides)
    if not sides:
        msg = "No images in the grid"
        raise NoImagesError(msg)

    cell_side = min(sides)
    collage_side = grid_size * cell_side
    capped = collage_side > max_collage_size
    if capped:
        cell_side = max_collage_size // grid_size
        collage_side = grid_size * cell_side
    return CellPlan(cell_side=cell_side, collage_side=collage_side,
                    capped=capped)


def _paint_progress(painted: int, total: int) -> int:
    return PROGRESS_SIZED + (painted * PROGRESS_PAINT_SPAN) // total


def assemble(
    request: AssemblyRequest,
    *,
    callbacks: AssemblyCallbacks | None = None,
) -> CanvasResult:
    """
    Build the square collage canvas for ``request``.

    Every filled slot is center-cropped, stretched to the shared cell
    side, and pasted at ``(column * side, row * side)``. Empty slots
    keep the background color. Raises NoImagesError for an empty grid
    and AssemblyCancelledError when cancelled between slots.
    """
    hooks = callbacks or AssemblyCallbacks()
    spec = request.spec

    slots = enumerate_slots(request)
    hooks.progress(PROGRESS_SLOTS_ENUMERATED)

    normalized: list[tuple[GridCoordinate, Image.Image | None]] = []
    for coord, entry in slots:
        hooks.check_cancelled()
        if entry is None:
            normalized.append((coord, None))
            continue
        square = crop_to_center_square(to_rgb(entry.image))
        normalized.append((coord, square))

    sides = [im.width for _, im in normalized if im is not None]
    if not sides:
        msg = "No images in the grid"
        raise NoImagesError(msg)
    hooks.progress(PROGRESS_NORMALIZED)

    plan = plan_cell_size(sides, spec.grid_size, spec.max_collage_size)
    if plan.capped:
        logger.info(
            "Collage would be %dpx; capped at %dpx with %dpx cells",
            spec.grid_size * min(sides), plan.collage_side, plan.cell_side,
        )
    else:
        logger.info("Collage %dx%d with %dpx cells",
                    plan.collage_side, plan.collage_side, plan.cell_side)
    hooks.progress(PROGRESS_SIZED)

    canvas = blank_canvas(plan.collage_side, BACKGROUND_COLOR)
    total = len(normalized)
    for painted, (coord, square) in enumerate(normalized, start=1):
        hooks.check_cancelled()
        if square is not None:
            cell = resize_square(square, plan.cell_side, spec.resample)
            canvas.paste(cell, cell_box(coord, plan.cell_side).origin)
        hooks.progress(_paint_progress(painted, total))

    return CanvasResult(
        image=canvas,
        side=plan.collage_side,
        cell_side=plan.cell_side,
        filled=len(sides),
        capped=plan.capped,
    )
