"""
Failure taxonomy shared by the decoder, compositor, and assembly task.

Each error carries a :class:`FailureKind` so the assembly worker and the
CLI can turn it into a localized message without inspecting types.
"""
from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Kinds of failure surfaced to the caller."""

    DECODE_REJECTED = "decode_rejected"
    NO_IMAGES = "no_images"
    SAVE_FAILED = "save_failed"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


class CollageError(Exception):
    """Base class for all collage failures."""

    kind: FailureKind = FailureKind.INTERNAL


class DecodeRejectedError(CollageError):
    """Input file has an unknown extension or could not be decoded."""

    kind = FailureKind.DECODE_REJECTED


class NoImagesError(CollageError):
    """Assembly was requested with no filled cell inside the grid."""

    kind = FailureKind.NO_IMAGES


class SaveFailedError(CollageError):
    """The finished canvas could not be written to its destination."""

    kind = FailureKind.SAVE_FAILED


class AssemblyCancelledError(CollageError):
    """A cancellation request was observed at a slot boundary."""

    kind = FailureKind.CANCELLED
