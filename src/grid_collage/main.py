"""Top-level orchestration: load files into a grid and assemble them."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from tqdm import tqdm

from grid_collage.config import CollageConfig
from grid_collage.constants import PROGRESS_DONE
from grid_collage.errors import DecodeRejectedError, FailureKind
from grid_collage.logging_utils import logger
from grid_collage.messages import format_failure
from grid_collage.runtime.assembly import (
    AssemblyHandle,
    AssemblyProgress,
    TerminalEvent,
)
from grid_collage.session import CollageSession
from grid_collage.type_defs import GridCoordinate


class ProgressReporter(Protocol):
    """Protocol capturing the subset of tqdm's interface we rely on."""

    def update(self, n: float | None = 1) -> bool | None:
        """Advance the progress display by ``n`` units."""

    def close(self) -> None:
        """Release any resources associated with the display."""


def populate_session(
    session: CollageSession,
    placements: Mapping[GridCoordinate, Path],
) -> list[GridCoordinate]:
    """
    Decode each file onto its cell; return the cells that were rejected.

    A rejected file is logged and skipped, leaving its cell empty, the
    same way a bad drop is refused without touching the grid.
    """
    rejected: list[GridCoordinate] = []
    lang = session.config.output.language
    for coord, path in sorted(placements.items()):
        if not coord.within(session.grid_size):
            logger.warning(
                "Cell %d,%d is outside the %dx%d grid; %s ignored",
                coord.row, coord.column,
                session.grid_size, session.grid_size, path,
            )
            rejected.append(coord)
            continue
        try:
            entry = session.load_image(coord, path)
        except DecodeRejectedError as exc:
            logger.warning(
                "%s", format_failure(FailureKind.DECODE_REJECTED, lang, str(exc)),
            )
            rejected.append(coord)
            continue
        logger.info("Cell %d,%d: %s (%dx%d)", coord.row, coord.column,
                    entry.display_name, entry.width, entry.height)
    logger.info("%s", session.status_text())
    return rejected


def follow_progress(
    handle: AssemblyHandle,
    progress_bar: ProgressReporter | None = None,
) -> TerminalEvent:
    """
    Drive a progress bar from the handle's events until it finishes.

    Ctrl-C cancels the assembly and keeps waiting for the worker to
    acknowledge, so the terminal event is always returned.
    """
    bar = progress_bar or tqdm(total=PROGRESS_DONE, desc="Collage", unit="%")
    shown = 0
    try:
        while True:
            try:
                for event in handle.events():
                    if isinstance(event, AssemblyProgress):
                        bar.update(event.percent - shown)
                        shown = event.percent
                break
            except KeyboardInterrupt:
                handle.cancel()
    finally:
        bar.close()

    outcome = handle.outcome
    if outcome is None:  # pragma: no cover
        msg = "Assembly finished without a terminal event"
        raise RuntimeError(msg)
    return outcome


def create_collage(
    placements: Mapping[GridCoordinate, Path],
    config: CollageConfig,
    *,
    destination: str | Path | None = None,
    progress_bar: ProgressReporter | None = None,
) -> TerminalEvent:
    """
    Build one collage from files and report the terminal outcome.

    Files are decoded into a fresh session, the grid is snapshotted,
    and the assembly runs on its worker thread while this call follows
    its progress.
    """
    session = CollageSession(config)
    populate_session(session, placements)
    handle = session.request_assembly(destination)
    return follow_progress(handle, progress_bar)
