"""
Owner of the editable grid state.

A :class:`CollageSession` is what a front end talks to: it keeps the
image store and the current grid size, answers fill-status and
thumbnail queries, and hands immutable snapshots to background
assembly tasks.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import grid_collage.image_io as gc_image_io
from grid_collage.config import CollageConfig
from grid_collage.image_grid.core import make_thumbnail
from grid_collage.image_store import ImageStore
from grid_collage.logging_utils import logger
from grid_collage.messages import format_fill_status
from grid_collage.models import AssemblyRequest, FillStatus, SourceImage
from grid_collage.runtime.assembly import AssemblyHandle, AssemblyTask
from grid_collage.runtime.validation import (
    validate_destination,
    validate_grid_size,
)
from grid_collage.type_defs import GridCoordinate

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image


class CollageSession:
    """Grid state plus the operations a front end calls on it."""

    def __init__(
        self,
        config: CollageConfig | None = None,
        store: ImageStore | None = None,
    ) -> None:
        self.config = config or CollageConfig()
        self.store = store if store is not None else ImageStore()
        self._grid_size = self.config.grid.size

    @property
    def grid_size(self) -> int:
        """Current grid dimension N."""
        return self._grid_size

    def set_grid_size(self, grid_size: int, *, prune: bool = False) -> None:
        """
        Change the grid dimension.

        Entries that end up outside the grid are kept but ignored, so
        growing the grid again restores them. Pass ``prune=True`` to
        drop them instead.
        """
        validate_grid_size(grid_size)
        if grid_size != self._grid_size:
            logger.info("Grid size %d -> %d", self._grid_size, grid_size)
        self._grid_size = grid_size
        if prune:
            self.store.prune(grid_size)

    def put_image(
        self,
        coordinate: tuple[int, int],
        image: Image.Image | SourceImage,
        source_id: str | None = None,
    ) -> SourceImage:
        """Place an already decoded image on a cell."""
        return self.store.put(coordinate, image, source_id)

    def load_image(
        self,
        coordinate: tuple[int, int],
        path: str | Path,
    ) -> SourceImage:
        """
        Decode ``path`` and place it on a cell.

        Raises DecodeRejectedError without touching the store when the
        file is not a usable image.
        """
        entry = gc_image_io.load_image(
            path, auto_orient=self.config.input.auto_orient,
        )
        return self.store.put(coordinate, entry)

    def remove_image(self, coordinate: tuple[int, int]) -> None:
        """Empty one cell."""
        self.store.remove(coordinate)

    def clear(self) -> None:
        """Empty every cell."""
        self.store.clear()

    def fill_status(self) -> FillStatus:
        """Count filled cells inside the current grid."""
        snapshot = self.store.snapshot_valid(self._grid_size)
        return FillStatus(
            filled=len(snapshot),
            total=self._grid_size * self._grid_size,
            coordinates=tuple(sorted(snapshot)),
        )

    def status_text(self) -> str:
        """Localized "filled X of Y" line."""
        return format_fill_status(self.fill_status(),
                                  self.config.output.language)

    def thumbnail(
        self,
        coordinate: tuple[int, int],
        cell_px: int,
    ) -> Image.Image | None:
        """Square preview for a cell, or None for an empty or stale one."""
        coord = GridCoordinate(*coordinate)
        entry = self.store.get(coord)
        if entry is None or not coord.within(self._grid_size):
            return None
        return make_thumbnail(entry.image, cell_px,
                              self.config.grid.resample)

    def snapshot(self, destination: str | Path | None = None) -> AssemblyRequest:
        """Freeze the current grid into an assembly request."""
        spec = self.config.grid.model_copy(
            update={"size": self._grid_size},
        ).to_spec()
        return AssemblyRequest(
            images=self.store.snapshot_valid(self._grid_size),
            spec=spec,
            destination=Path(destination) if destination is not None else None,
        )

    def request_assembly(
        self,
        destination: str | Path | None = None,
    ) -> AssemblyHandle:
        """
        Snapshot the grid and start assembling it in the background.

        Without ``destination`` the configured output path is used.
        """
        target = validate_destination(
            destination if destination is not None
            else self.config.output.output,
        )
        task = AssemblyTask(
            self.snapshot(target),
            save_options=self.config.output.to_save_options(),
            language=self.config.output.language,
        )
        return task.start()
