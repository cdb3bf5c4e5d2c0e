"""
Background execution of one collage assembly.

An :class:`AssemblyTask` runs the compositor and the encoder on a single
dedicated thread and reports through a queue: progress milestones in
non-decreasing order, then exactly one terminal event. Consumers read
that queue through the :class:`AssemblyHandle` returned by ``start()``.
"""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from grid_collage.config_defaults import DEFAULT_LANGUAGE
from grid_collage.constants import PROGRESS_BEFORE_SAVE, PROGRESS_DONE
from grid_collage.errors import (
    AssemblyCancelledError,
    CollageError,
    FailureKind,
)
from grid_collage.image_grid.layouts import AssemblyCallbacks, assemble
from grid_collage.logging_utils import logger
from grid_collage.messages import format_failure, format_success
from grid_collage.models import AssemblyRequest, SaveOptions
from grid_collage.runtime.output import persist_canvas

Encoder = Callable[..., Path]


@dataclass(frozen=True, slots=True)
class AssemblyProgress:
    """Advisory completion percentage (0-100)."""

    percent: int
    terminal: bool = field(default=False, init=False)


@dataclass(frozen=True, slots=True)
class AssemblySucceeded:
    """The collage was written to ``path`` as a ``side`` x ``side`` image."""

    path: Path
    side: int
    cell_side: int
    message: str
    terminal: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class AssemblyFailed:
    """The assembly ended without a usable output file."""

    kind: FailureKind
    reason: str
    detail: str | None = None
    terminal: bool = field(default=True, init=False)


AssemblyEvent = AssemblyProgress | AssemblySucceeded | AssemblyFailed
TerminalEvent = AssemblySucceeded | AssemblyFailed


class AssemblyHandle:
    """
    Observer-side view of a running assembly.

    The handle is meant for a single consumer. Events read by one of
    :meth:`events`, :meth:`poll` or :meth:`wait` are not seen by the
    others; the terminal event is always remembered in :attr:`outcome`.
    """

    def __init__(
        self,
        events: queue.Queue[AssemblyEvent],
        cancel_event: threading.Event,
        thread: threading.Thread | None = None,
    ) -> None:
        self._events = events
        self._cancel_event = cancel_event
        self._thread = thread
        self._outcome: TerminalEvent | None = None
        self.last_progress = 0

    @property
    def outcome(self) -> TerminalEvent | None:
        """Terminal event once it has been received, else None."""
        return self._outcome

    @property
    def done(self) -> bool:
        """True once the terminal event has been received."""
        return self._outcome is not None

    @property
    def cancel_requested(self) -> bool:
        """True after :meth:`cancel` was called."""
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Ask the worker to stop at the next slot boundary."""
        if not self._cancel_event.is_set():
            logger.info("Cancellation requested")
        self._cancel_event.set()

    def _record(self, event: AssemblyEvent) -> AssemblyEvent:
        if isinstance(event, AssemblyProgress):
            self.last_progress = event.percent
        else:
            self._outcome = event
        return event

    def events(self, timeout: float | None = None) -> Iterator[AssemblyEvent]:
        """
        Yield events as they arrive, ending with the terminal event.

        ``timeout`` bounds the wait for each single event; on expiry the
        iterator raises ``queue.Empty``.
        """
        while self._outcome is None:
            yield self._record(self._events.get(timeout=timeout))

    def poll(self) -> list[AssemblyEvent]:
        """Return every event that is ready without blocking."""
        ready: list[AssemblyEvent] = []
        while self._outcome is None:
            try:
                ready.append(self._record(self._events.get_nowait()))
            except queue.Empty:
                break
        return ready

    def wait(self, timeout: float | None = None) -> TerminalEvent | None:
        """
        Block until the terminal event arrives, then join the worker.

        ``timeout`` bounds the whole call, not each event. Returns None
        when it runs out before the terminal event arrives.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while self._outcome is None:
            try:
                self._record(self._events.get(timeout=_remaining(deadline)))
            except queue.Empty:
                return None
        if self._thread is not None:
            self._thread.join(_remaining(deadline))
        return self._outcome


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


class AssemblyTask:
    """
    One collage assembly, executed on its own worker thread.

    The request is an immutable snapshot, so nothing the caller does to
    its store after construction reaches the worker. All failures are
    turned into an :class:`AssemblyFailed` event; nothing escapes the
    thread.
    """

    def __init__(
        self,
        request: AssemblyRequest,
        destination: str | Path | None = None,
        *,
        save_options: SaveOptions | None = None,
        language: str = DEFAULT_LANGUAGE,
        encoder: Encoder = persist_canvas,
    ) -> None:
        target = destination if destination is not None else request.destination
        if target is None:
            msg = "An output destination is required"
            raise ValueError(msg)
        self.request = request
        self.destination = Path(target)
        self.save_options = save_options or SaveOptions()
        self.language = language
        self._encoder = encoder

        self._events: queue.Queue[AssemblyEvent] = queue.Queue()
        self._cancel_event = threading.Event()
        self._last_percent = 0
        self._started = False
        self._thread: threading.Thread | None = None

    def start(self) -> AssemblyHandle:
        """Run the assembly on a new daemon thread and return its handle."""
        if self._started:
            msg = "AssemblyTask can only be started once"
            raise RuntimeError(msg)
        self._started = True
        self._thread = threading.Thread(
            target=self._run,
            name=f"collage-assembly-{self.destination.name}",
            daemon=True,
        )
        handle = AssemblyHandle(self._events, self._cancel_event, self._thread)
        logger.info(
            "Starting %dx%d collage with %d images -> %s",
            self.request.spec.grid_size, self.request.spec.grid_size,
            self.request.filled, self.destination,
        )
        self._thread.start()
        return handle

    def cancel(self) -> None:
        """Request cancellation; effective even before the task starts."""
        self._cancel_event.set()

    def run(self) -> AssemblyHandle:
        """Run the assembly on the calling thread and return its handle."""
        if self._started:
            msg = "AssemblyTask can only be started once"
            raise RuntimeError(msg)
        self._started = True
        handle = AssemblyHandle(self._events, self._cancel_event)
        self._run()
        return handle

    def _emit_progress(self, percent: int) -> None:
        if self._cancel_event.is_set() or percent <= self._last_percent:
            return
        self._last_percent = percent
        self._events.put(AssemblyProgress(percent))

    def _check_cancelled(self) -> None:
        if self._cancel_event.is_set():
            msg = "Assembly cancelled"
            raise AssemblyCancelledError(msg)

    def _failure(self, kind: FailureKind, detail: str | None) -> AssemblyFailed:
        return AssemblyFailed(
            kind=kind,
            reason=format_failure(kind, self.language),
            detail=detail,
        )

    def _execute(self) -> AssemblySucceeded:
        callbacks = AssemblyCallbacks(
            on_progress=self._emit_progress,
            should_cancel=self._cancel_event.is_set,
        )
        result = assemble(self.request, callbacks=callbacks)

        self._check_cancelled()
        self._emit_progress(PROGRESS_BEFORE_SAVE)
        path = self._encoder(
            result.image,
            self.destination,
            self.save_options,
            before_commit=self._check_cancelled,
        )
        self._emit_progress(PROGRESS_DONE)
        return AssemblySucceeded(
            path=Path(path),
            side=result.side,
            cell_side=result.cell_side,
            message=format_success(path, result.side, self.language),
        )

    def _run(self) -> None:
        terminal: TerminalEvent
        try:
            terminal = self._execute()
        except AssemblyCancelledError:
            logger.info("Collage assembly cancelled; nothing was written")
            terminal = self._failure(FailureKind.CANCELLED, None)
        except CollageError as exc:
            logger.error("Collage assembly failed: %s", exc)
            terminal = self._failure(exc.kind, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error during collage assembly")
            terminal = self._failure(FailureKind.INTERNAL, str(exc))
        self._events.put(terminal)
