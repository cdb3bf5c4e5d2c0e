"""Sparse grid-indexed store of decoded source images."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from PIL import Image

from grid_collage.logging_utils import logger
from grid_collage.models import SourceImage
from grid_collage.type_defs import GridCoordinate


class ImageStore:
    """
    Mapping from grid coordinate to the image dropped on that cell.

    The store knows nothing about the current grid size. Entries that
    fall outside it stay in place and are filtered out by
    :meth:`snapshot_valid` and :meth:`count_valid`, so growing the grid
    again brings them back.
    """

    def __init__(self) -> None:
        self._entries: dict[GridCoordinate, SourceImage] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._entries

    def __iter__(self) -> Iterator[GridCoordinate]:
        return iter(self.coordinates())

    @staticmethod
    def _key(coordinate: tuple[int, int]) -> GridCoordinate:
        key = GridCoordinate(*coordinate)
        if key.row < 0 or key.column < 0:
            msg = f"Grid coordinate must be non-negative, got {tuple(key)}"
            raise ValueError(msg)
        return key

    def put(
        self,
        coordinate: tuple[int, int],
        image: Image.Image | SourceImage,
        source_id: str | None = None,
    ) -> SourceImage:
        """Insert or overwrite the image at ``coordinate``."""
        key = self._key(coordinate)
        if isinstance(image, SourceImage):
            entry = image
            if source_id is not None:
                entry = SourceImage(image=image.image, source_id=source_id)
        else:
            entry = SourceImage(image=image, source_id=source_id or "")
        replaced = key in self._entries
        self._entries[key] = entry
        logger.debug(
            "%s cell %d,%d with %s (%dx%d)",
            "Replaced" if replaced else "Filled",
            key.row, key.column, entry.display_name,
            entry.width, entry.height,
        )
        return entry

    def get(self, coordinate: tuple[int, int]) -> SourceImage | None:
        """Return the entry at ``coordinate`` or None for an empty cell."""
        return self._entries.get(GridCoordinate(*coordinate))

    def remove(self, coordinate: tuple[int, int]) -> None:
        """Delete the entry at ``coordinate``; no-op when empty."""
        if self._entries.pop(GridCoordinate(*coordinate), None) is not None:
            logger.debug("Cleared cell %d,%d", *coordinate)

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()
        logger.debug("Cleared all cells")

    def coordinates(self) -> list[GridCoordinate]:
        """Return stored coordinates in row-major order."""
        return sorted(self._entries)

    def snapshot_valid(
        self,
        grid_size: int,
    ) -> Mapping[GridCoordinate, SourceImage]:
        """
        Return a read-only copy restricted to the ``grid_size`` grid.

        The copy is detached from the store: later puts and removes do
        not show up in it.
        """
        return MappingProxyType({
            coord: entry
            for coord, entry in self._entries.items()
            if coord.within(grid_size)
        })

    def count(self) -> int:
        """Return the number of stored entries, stale ones included."""
        return len(self._entries)

    def count_valid(self, grid_size: int) -> int:
        """Return the number of entries inside the ``grid_size`` grid."""
        return sum(1 for coord in self._entries if coord.within(grid_size))

    def prune(self, grid_size: int) -> int:
        """Drop entries outside the grid and return how many went."""
        stale = [c for c in self._entries if not c.within(grid_size)]
        for coord in stale:
            del self._entries[coord]
        if stale:
            logger.debug("Pruned %d cells outside %dx%d grid",
                         len(stale), grid_size, grid_size)
        return len(stale)
