"""Version lookup used by ``grid-collage --version``."""

from __future__ import annotations

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path

from grid_collage.logging_utils import logger

DISTRIBUTION_NAMES = ("grid-collage", "grid_collage")
FALLBACK_VERSION = "0.0.0"


def _installed_version() -> str | None:
    for name in DISTRIBUTION_NAMES:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            continue
    return None


def _source_tree_version(start: Path) -> str | None:
    """Read project.version from the nearest pyproject.toml above start."""
    pyproject_path = next(
        (p / "pyproject.toml" for p in start.parents
         if (p / "pyproject.toml").is_file()),
        None,
    )
    if pyproject_path is None:
        return None
    try:
        with pyproject_path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        logger.warning("Error reading %s: %s", pyproject_path, exc)
        return None
    version = data.get("project", {}).get("version")
    if isinstance(version, str) and version.strip():
        return version.strip()
    return None


def resolve_project_version() -> str:
    """
    Return the installed version, else the source tree's, else 0.0.0.

    The source tree lookup lets ``run_collage.py`` report a version when
    the package is used from a checkout without installing it.
    """
    return (
        _installed_version()
        or _source_tree_version(Path(__file__).resolve())
        or FALLBACK_VERSION
    )
