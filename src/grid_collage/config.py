"""
Configuration schema and loader for the grid collage engine.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field

from grid_collage.config_defaults import (
    DEFAULT_AUTO_ORIENT,
    DEFAULT_GRID_SIZE,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_COLLAGE_SIZE,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_QUALITY,
    DEFAULT_RESAMPLE,
)
from grid_collage.constants import (
    GRID_SIZE_MAX,
    GRID_SIZE_MIN,
    JPEG_QUALITY_MAX,
    JPEG_QUALITY_MIN,
)
from grid_collage.models import GridSpec, SaveOptions
from grid_collage.type_defs import Language, ResampleName


class GridConfig(BaseModel):
    """Grid dimension, canvas cap, and cell resize filter."""

    size: int = Field(DEFAULT_GRID_SIZE, ge=GRID_SIZE_MIN, le=GRID_SIZE_MAX)
    max_collage_size: int = Field(DEFAULT_MAX_COLLAGE_SIZE, ge=GRID_SIZE_MAX)
    resample: ResampleName = Field(DEFAULT_RESAMPLE)

    def to_spec(self) -> GridSpec:
        """Return the immutable GridSpec for an assembly snapshot."""
        return GridSpec(
            grid_size=self.size,
            max_collage_size=self.max_collage_size,
            resample=self.resample,
        )


class InputConfig(BaseModel):
    """Control how source files are decoded."""

    auto_orient: bool = DEFAULT_AUTO_ORIENT


class OutputConfig(BaseModel):
    """Configure the destination file, encoder, and message language."""

    output: str = Field(DEFAULT_OUTPUT_PATH)
    format: str | None = None
    quality: int = Field(
        DEFAULT_QUALITY,
        ge=JPEG_QUALITY_MIN,
        le=JPEG_QUALITY_MAX,
    )
    language: Language = Field(DEFAULT_LANGUAGE)

    def to_save_options(self) -> SaveOptions:
        """Return encoder settings for the persistence step."""
        return SaveOptions(image_format=self.format, quality=self.quality)


class CollageConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    grid: GridConfig = Field(
        default_factory=lambda: GridConfig.model_validate({}),
    )
    input: InputConfig = Field(
        default_factory=lambda: InputConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str | Path) -> CollageConfig:
        """
        Load a collage configuration from a TOML file.

        Returns a validated CollageConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return CollageConfig.model_validate(doc.unwrap())


# CLI destination -> (section, field)
_CLI_FIELDS: dict[str, tuple[str, str]] = {
    "grid_size": ("grid", "size"),
    "max_size": ("grid", "max_collage_size"),
    "resample": ("grid", "resample"),
    "output": ("output", "output"),
    "format": ("output", "format"),
    "quality": ("output", "quality"),
    "lang": ("output", "language"),
}


def build_config_from_cli(
    args: dict[str, Any],
    base_config: CollageConfig | None = None,
) -> CollageConfig:
    """
    Overlay explicitly given CLI values on a base configuration.

    Arguments that are absent or None leave the base value in place, so
    a config file is only overridden by flags the user actually passed.
    """
    base = base_config or CollageConfig()
    data = base.model_dump()
    for arg_name, (section, key) in _CLI_FIELDS.items():
        value = args.get(arg_name)
        if value is not None:
            data[section][key] = value
    if args.get("no_auto_orient"):
        data["input"]["auto_orient"] = False
    return CollageConfig.model_validate(data)
