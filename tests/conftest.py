"""
Test configuration and shared fixtures for grid_collage.

This module defines reusable pytest fixtures for building in-memory
and on-disk images, configs, and stores. These fixtures support all
test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from grid_collage.config import CollageConfig
from grid_collage.constants import COLOR_MODE_RGB
from grid_collage.image_store import ImageStore
from grid_collage.logging_utils import logger
from grid_collage.models import AssemblyRequest, GridSpec


@pytest.fixture
def make_image() -> Callable[..., Image.Image]:
    """Factory for solid RGB images of any size and color."""

    def _make(
        width: int,
        height: int,
        color: str | tuple[int, int, int] = "red",
        mode: str = COLOR_MODE_RGB,
    ) -> Image.Image:
        return Image.new(mode, (width, height), color=color)

    return _make


@pytest.fixture
def write_image(
    tmp_path: Path,
    make_image: Callable[..., Image.Image],
) -> Callable[..., Path]:
    """Factory that saves a solid image under tmp_path and returns its path."""

    def _write(
        name: str,
        width: int = 64,
        height: int = 64,
        color: str | tuple[int, int, int] = "green",
    ) -> Path:
        path = tmp_path / name
        make_image(width, height, color).save(path)
        return path

    return _write


@pytest.fixture
def sample_image(make_image: Callable[..., Image.Image]) -> Image.Image:
    """Create a sample 100x100 red RGB PIL image."""
    return make_image(100, 100, "red")


@pytest.fixture
def store() -> ImageStore:
    """Empty image store."""
    return ImageStore()


@pytest.fixture
def make_request() -> Callable[..., AssemblyRequest]:
    """Build an AssemblyRequest straight from a coordinate->image dict."""

    def _build(
        images: dict[tuple[int, int], Image.Image],
        grid_size: int,
        max_collage_size: int = 4000,
        destination: Path | None = None,
    ) -> AssemblyRequest:
        populated = ImageStore()
        for coord, img in images.items():
            populated.put(coord, img, f"img_{coord[0]}_{coord[1]}.png")
        return AssemblyRequest(
            images=populated.snapshot_valid(grid_size),
            spec=GridSpec(grid_size=grid_size,
                          max_collage_size=max_collage_size),
            destination=destination,
        )

    return _build


@pytest.fixture
def make_collage_config(tmp_path: Path) -> Callable[..., CollageConfig]:
    """
    Build CollageConfig instances with optional section overrides.

    Each config writes into an isolated output path under tmp_path.
    """

    def _build(
        *,
        grid: dict[str, Any] | None = None,
        output: dict[str, Any] | None = None,
        input_section: dict[str, Any] | None = None,
    ) -> CollageConfig:
        effective_output = {"output": str(tmp_path / "collage.png")}
        effective_output.update(output or {})
        data: dict[str, Any] = {"output": effective_output}
        if grid:
            data["grid"] = dict(grid)
        if input_section:
            data["input"] = dict(input_section)
        return CollageConfig.model_validate(data)

    return _build


@pytest.fixture(autouse=True)
def enable_logger_propagation(
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[None]:
    """
    Enable propagation for the collage logger to allow caplog to work.

    The logger level is restored afterwards because CLI runs change it
    through the verbosity flags.
    """
    monkeypatch.setattr(logger, "propagate", True)
    level = logger.level
    yield
    logger.setLevel(level)
