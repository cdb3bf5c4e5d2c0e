"""Core data structures passed between the store, compositor and worker."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from PIL import Image

from grid_collage.config_defaults import (
    DEFAULT_MAX_COLLAGE_SIZE,
    DEFAULT_QUALITY,
    DEFAULT_RESAMPLE,
)
from grid_collage.constants import GRID_SIZE_MAX, GRID_SIZE_MIN
from grid_collage.type_defs import GridCoordinate, ResampleName


@dataclass(frozen=True, slots=True)
class SourceImage:
    """
    A decoded image together with the identifier it came from.

    The pixel buffer is treated as read-only once stored; every
    transformation in the pipeline returns a new image.
    """

    image: Image.Image
    source_id: str

    @property
    def width(self) -> int:
        """Width in pixels."""
        return self.image.width

    @property
    def height(self) -> int:
        """Height in pixels."""
        return self.image.height

    @property
    def display_name(self) -> str:
        """Short name for tooltips and log lines."""
        return Path(self.source_id).name or self.source_id


@dataclass(frozen=True, slots=True)
class GridSpec:
    """Grid dimension, canvas cap, and resize filter for one assembly."""

    grid_size: int
    max_collage_size: int = DEFAULT_MAX_COLLAGE_SIZE
    resample: ResampleName = DEFAULT_RESAMPLE

    def __post_init__(self) -> None:
        if not GRID_SIZE_MIN <= self.grid_size <= GRID_SIZE_MAX:
            msg = (f"Grid size must be between {GRID_SIZE_MIN} and "
                   f"{GRID_SIZE_MAX}, got {self.grid_size}")
            raise ValueError(msg)
        if self.max_collage_size < self.grid_size:
            msg = (f"max_collage_size ({self.max_collage_size}) must be at "
                   f"least the grid size ({self.grid_size})")
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SaveOptions:
    """Encoder settings for the persistence step."""

    image_format: str | None = None
    quality: int = DEFAULT_QUALITY


@dataclass(frozen=True, slots=True)
class AssemblyRequest:
    """
    Immutable snapshot of everything one assembly needs.

    Entries outside the grid are dropped on construction, so a request
    can never carry a stale cell into the compositor.
    """

    images: Mapping[GridCoordinate, SourceImage]
    spec: GridSpec
    destination: Path | None = None

    def __post_init__(self) -> None:
        n = self.spec.grid_size
        valid = {
            GridCoordinate(*coord): img
            for coord, img in self.images.items()
            if GridCoordinate(*coord).within(n)
        }
        object.__setattr__(self, "images", MappingProxyType(valid))

    @property
    def filled(self) -> int:
        """Number of non-empty slots."""
        return len(self.images)


@dataclass(frozen=True, slots=True)
class CanvasResult:
    """The finished square canvas and the sizing decisions behind it."""

    image: Image.Image
    side: int
    cell_side: int
    filled: int
    capped: bool = False


@dataclass(frozen=True, slots=True)
class FillStatus:
    """How many of the grid's cells currently hold an image."""

    filled: int
    total: int
    coordinates: tuple[GridCoordinate, ...] = field(default_factory=tuple)

    @property
    def complete(self) -> bool:
        """Return True when every cell is filled."""
        return self.filled == self.total
