"""Per-image primitives: color conversion, square crop, and resizing."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from grid_collage.constants import (
    BACKGROUND_COLOR,
    HIGH_BIT_DEPTH_SCALE,
    THUMBNAIL_MIN_PX,
)
from grid_collage.type_defs import RGB, GridCoordinate, ResampleName

RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
    "box": Image.Resampling.BOX,
}


def to_rgb(img: Image.Image, *, bg_color: RGB = BACKGROUND_COLOR) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing if needed."""
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA") or (
        img.mode == "P" and "transparency" in img.info
    ):
        bg = Image.new("RGBA", img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert("RGBA"))
        return comp.convert("RGB")
    if img.mode.startswith("I"):
        # I;16 and I would clip at 255 in a direct RGB conversion
        img = img.convert("I").point(lambda v: v * HIGH_BIT_DEPTH_SCALE)
        return img.convert("L").convert("RGB")
    return img.convert("RGB")


def resample_filter(name: ResampleName | str) -> Image.Resampling:
    """Map a config filter name to a Pillow resampling constant."""
    try:
        return RESAMPLE_FILTERS[name]
    except KeyError as exc:
        msg = (f"Unknown resample filter {name!r}; expected one of "
               f"{', '.join(RESAMPLE_FILTERS)}")
        raise ValueError(msg) from exc


def crop_to_center_square(img: Image.Image) -> Image.Image:
    """
    Crop to the largest centered square.

    The offset is floored, so an odd leftover pixel is dropped from the
    right or bottom edge. A square input is returned as is.
    """
    width, height = img.size
    if width <= 0 or height <= 0:
        msg = f"Cannot crop an empty image ({width}x{height})"
        raise ValueError(msg)
    if width == height:
        return img
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    return img.crop((left, top, left + side, top + side))


def resize_square(
    img: Image.Image,
    side: int,
    resample: ResampleName | str = "bilinear",
) -> Image.Image:
    """Stretch to exactly ``side`` x ``side`` without keeping aspect."""
    if side <= 0:
        msg = f"Target side must be positive, got {side}"
        raise ValueError(msg)
    if img.size == (side, side):
        return img
    return img.resize((side, side), resample_filter(resample))


def make_thumbnail(
    img: Image.Image,
    cell_px: int,
    resample: ResampleName | str = "bilinear",
) -> Image.Image:
    """Return the square preview shown inside a grid cell."""
    side = max(cell_px, THUMBNAIL_MIN_PX)
    return resize_square(crop_to_center_square(img), side, resample)


@dataclass(frozen=True)
class Rect:
    """Canvas rectangle covered by one cell."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def origin(self) -> tuple[int, int]:
        """Top left corner as a paste offset."""
        return self.x0, self.y0


def cell_box(coordinate: GridCoordinate, cell_side: int) -> Rect:
    """Return the canvas rectangle covered by one grid cell."""
    x0 = coordinate.column * cell_side
    y0 = coordinate.row * cell_side
    return Rect(x0, y0, x0 + cell_side, y0 + cell_side)


def blank_canvas(side: int, color: RGB = BACKGROUND_COLOR) -> Image.Image:
    """Allocate an opaque square canvas filled with ``color``."""
    if side <= 0:
        msg = "Canvas side must be positive"
        raise ValueError(msg)
    return Image.new("RGB", (side, side), color)
