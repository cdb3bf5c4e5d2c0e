"""Runtime utilities for background assembly, output, validation, version."""

from .assembly import (
    AssemblyEvent,
    AssemblyFailed,
    AssemblyHandle,
    AssemblyProgress,
    AssemblySucceeded,
    AssemblyTask,
    TerminalEvent,
)
from .output import (
    ensure_parent_directory,
    persist_canvas,
    temporary_sibling,
)
from .validation import (
    validate_destination,
    validate_grid_size,
)
from .version import resolve_project_version

__all__ = [
    "AssemblyEvent",
    "AssemblyFailed",
    "AssemblyHandle",
    "AssemblyProgress",
    "AssemblySucceeded",
    "AssemblyTask",
    "TerminalEvent",
    "ensure_parent_directory",
    "persist_canvas",
    "resolve_project_version",
    "temporary_sibling",
    "validate_destination",
    "validate_grid_size",
]
