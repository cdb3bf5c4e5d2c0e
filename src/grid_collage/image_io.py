"""Image decoding and encoding collaborators built on Pillow."""
from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from grid_collage.config_defaults import DEFAULT_QUALITY
from grid_collage.constants import (
    BACKGROUND_COLOR,
    SUPPORTED_EXTENSIONS,
)
from grid_collage.errors import DecodeRejectedError, SaveFailedError
from grid_collage.image_grid.core import to_rgb
from grid_collage.logging_utils import logger
from grid_collage.models import SourceImage


def is_supported_path(path: str | Path) -> bool:
    """Return True when the file extension is one the decoder accepts."""
    return Path(path).suffix.lower().lstrip(".") in SUPPORTED_EXTENSIONS


def load_image(path: str | Path, *, auto_orient: bool = True) -> SourceImage:
    """
    Load an image file and convert it to RGB.

    Args:
        path: Path to the image file
        auto_orient: Apply the EXIF orientation tag before converting

    Returns:
        SourceImage holding the decoded pixels and the path as source id

    Raises:
        DecodeRejectedError: If the extension is not supported, the file
            is missing, cannot be decoded, or has a zero dimension

    """
    path = Path(path)
    if not is_supported_path(path):
        msg = f"Unsupported image type: '{path.suffix or path.name}'"
        raise DecodeRejectedError(msg)

    try:
        with Image.open(path) as handle:
            img = ImageOps.exif_transpose(handle) if auto_orient else handle
            img.load()
            rgb = to_rgb(img, bg_color=BACKGROUND_COLOR)
            if rgb is handle:
                rgb = handle.copy()
    except FileNotFoundError as e:
        msg = f"Image file not found: '{path}'"
        raise DecodeRejectedError(msg) from e
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        msg = f"Error loading image '{path}': {e!s}"
        raise DecodeRejectedError(msg) from e

    validate_image_dimensions(rgb, path)
    return SourceImage(image=rgb, source_id=str(path))


def validate_image_dimensions(img: Image.Image, path: str | Path) -> None:
    """Reject images with a zero dimension before they reach the store."""
    if img.width <= 0 or img.height <= 0:
        msg = f"Image has no pixels: '{path}' is {img.width}x{img.height}"
        raise DecodeRejectedError(msg)


def resolve_save_format(
    path: str | Path,
    explicit: str | None = None,
) -> str:
    """
    Return the Pillow format name used to encode ``path``.

    An explicit format wins over the extension. Raises SaveFailedError
    when neither names a format Pillow can write.
    """
    if explicit:
        fmt = explicit.upper()
        if fmt == "JPG":
            fmt = "JPEG"
        if fmt not in Image.SAVE:
            Image.init()
        if fmt not in Image.SAVE:
            msg = f"Unsupported output format: {explicit}"
            raise SaveFailedError(msg)
        return fmt

    suffix = Path(path).suffix.lower()
    fmt = Image.registered_extensions().get(suffix)
    if fmt is None or fmt not in Image.SAVE:
        msg = f"Cannot infer an output format from '{Path(path).name}'"
        raise SaveFailedError(msg)
    return fmt


def save_image(
    img: Image.Image,
    path: str | Path,
    *,
    image_format: str | None = None,
    quality: int = DEFAULT_QUALITY,
) -> Path:
    """
    Encode ``img`` to ``path``.

    The format is taken from ``image_format`` or, when absent, from the
    extension of ``path``. Any encoder or filesystem error is reported
    as SaveFailedError.
    """
    path = Path(path)
    fmt = resolve_save_format(path, image_format)
    params: dict[str, object] = {}
    if fmt in ("JPEG", "WEBP"):
        params["quality"] = quality
    elif fmt == "PNG":
        params["optimize"] = True

    try:
        img.save(path, format=fmt, **params)
    except (OSError, ValueError) as e:
        msg = f"Could not write '{path}': {e!s}"
        raise SaveFailedError(msg) from e

    logger.debug("Encoded %s as %s", path, fmt)
    return path
