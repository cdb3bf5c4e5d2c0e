"""Helpers for managing output locations and persisting the canvas."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import grid_collage.image_io as gc_image_io
from grid_collage.constants import TEMP_SUFFIX
from grid_collage.errors import SaveFailedError
from grid_collage.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from PIL import Image

    from grid_collage.models import SaveOptions


def temporary_sibling(path: Path) -> Path:
    """Return the scratch path written before the final rename."""
    return path.with_name(f".{path.name}{TEMP_SUFFIX}")


def ensure_parent_directory(path: Path) -> Path:
    """Create the destination's parent directory if it is missing."""
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory '{parent}': {exc}"
        raise SaveFailedError(msg) from exc
    return parent


def persist_canvas(
    image: Image.Image,
    destination: Path,
    options: SaveOptions,
    *,
    before_commit: Callable[[], None] | None = None,
) -> Path:
    """
    Write ``image`` to ``destination`` without exposing partial files.

    The encoder writes to a hidden sibling first; only after
    ``before_commit`` returns is that file moved over the destination.
    If anything raises, the scratch file is removed and the destination
    is left as it was.
    """
    destination = Path(destination)
    fmt = gc_image_io.resolve_save_format(destination, options.image_format)
    ensure_parent_directory(destination)
    scratch = temporary_sibling(destination)

    try:
        gc_image_io.save_image(
            image, scratch, image_format=fmt, quality=options.quality,
        )
        if before_commit is not None:
            before_commit()
        try:
            os.replace(scratch, destination)
        except OSError as exc:
            msg = f"Could not move collage into place at '{destination}': {exc}"
            raise SaveFailedError(msg) from exc
    except BaseException:
        _discard(scratch)
        raise

    logger.info("Collage saved to: %s", destination)
    return destination


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove scratch file %s: %s", path, exc)
