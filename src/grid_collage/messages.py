"""
Localized user-facing texts.

Every failure kind gets its own sentence so the caller can tell a
rejected file from an empty grid, a failed save, or a user abort.
Unknown languages fall back to English.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from grid_collage.config_defaults import DEFAULT_LANGUAGE
from grid_collage.errors import FailureKind

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

    from grid_collage.models import FillStatus

_T = TypeVar("_T")

_FAILURES: dict[str, dict[FailureKind, str]] = {
    "en": {
        FailureKind.DECODE_REJECTED: "The selected file is not a usable image",
        FailureKind.NO_IMAGES: "No images to build a collage from!",
        FailureKind.SAVE_FAILED: "Failed to save the collage file!",
        FailureKind.CANCELLED: "Collage creation was cancelled",
        FailureKind.INTERNAL: "Error while building the collage",
    },
    "ru": {
        FailureKind.DECODE_REJECTED: (
            "Выбранный файл не является изображением"
        ),
        FailureKind.NO_IMAGES: "Нет изображений для создания коллажа!",
        FailureKind.SAVE_FAILED: "Ошибка сохранения файла!",
        FailureKind.CANCELLED: "Создание коллажа отменено",
        FailureKind.INTERNAL: "Ошибка при создании коллажа",
    },
}

_SUCCESS = {
    "en": "Collage {side}x{side} saved as:\n{path}",
    "ru": "Коллаж {side}x{side} сохранен как:\n{path}",
}

_FILL_STATUS = {
    "en": "Filled {filled} of {total} cells",
    "ru": "Заполнено {filled} из {total} ячеек",
}


def _catalogue(table: dict[str, _T], lang: str) -> _T:
    return table.get(lang, table[DEFAULT_LANGUAGE])


def format_failure(
    kind: FailureKind,
    lang: str = DEFAULT_LANGUAGE,
    detail: str | None = None,
) -> str:
    """Return the message for a failure kind, with optional detail."""
    text = _catalogue(_FAILURES, lang)[kind]
    if detail:
        return f"{text}: {detail}"
    return text


def format_success(path: Path | str, side: int,
                   lang: str = DEFAULT_LANGUAGE) -> str:
    """Return the confirmation text naming output path and pixel size."""
    return _catalogue(_SUCCESS, lang).format(side=side, path=path)


def format_fill_status(status: FillStatus,
                       lang: str = DEFAULT_LANGUAGE) -> str:
    """Return the "filled X of Y" line shown next to the grid."""
    return _catalogue(_FILL_STATUS, lang).format(
        filled=status.filled, total=status.total,
    )
