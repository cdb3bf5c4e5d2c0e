"""Public package exports for the grid collage engine."""

from __future__ import annotations

from .config import CollageConfig, ConfigLoader
from .errors import (
    AssemblyCancelledError,
    CollageError,
    DecodeRejectedError,
    FailureKind,
    NoImagesError,
    SaveFailedError,
)
from .image_store import ImageStore
from .models import AssemblyRequest, CanvasResult, GridSpec, SourceImage
from .runtime.assembly import (
    AssemblyFailed,
    AssemblyHandle,
    AssemblyProgress,
    AssemblySucceeded,
    AssemblyTask,
)
from .session import CollageSession
from .type_defs import GridCoordinate

__all__ = [
    "AssemblyCancelledError",
    "AssemblyFailed",
    "AssemblyHandle",
    "AssemblyProgress",
    "AssemblyRequest",
    "AssemblySucceeded",
    "AssemblyTask",
    "CanvasResult",
    "CollageConfig",
    "CollageError",
    "CollageSession",
    "ConfigLoader",
    "DecodeRejectedError",
    "FailureKind",
    "GridCoordinate",
    "GridSpec",
    "ImageStore",
    "NoImagesError",
    "SaveFailedError",
    "SourceImage",
]
