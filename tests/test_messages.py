"""Tests for localized user-facing texts."""

from __future__ import annotations

from pathlib import Path

import pytest

from grid_collage.errors import FailureKind
from grid_collage.messages import (
    format_failure,
    format_fill_status,
    format_success,
)
from grid_collage.models import FillStatus


@pytest.mark.parametrize("lang", ["en", "ru"])
def test_every_failure_kind_has_distinct_text(lang: str) -> None:
    texts = {format_failure(kind, lang) for kind in FailureKind}
    assert len(texts) == len(FailureKind)


def test_failure_texts() -> None:
    assert format_failure(FailureKind.NO_IMAGES) == (
        "No images to build a collage from!"
    )
    assert format_failure(FailureKind.SAVE_FAILED, "ru") == (
        "Ошибка сохранения файла!"
    )


def test_failure_with_detail() -> None:
    text = format_failure(FailureKind.SAVE_FAILED, "en", "disk full")
    assert text == "Failed to save the collage file!: disk full"


def test_unknown_language_falls_back_to_english() -> None:
    assert format_failure(FailureKind.CANCELLED, "de") == (
        format_failure(FailureKind.CANCELLED, "en")
    )


def test_success_names_path_and_side() -> None:
    text = format_success(Path("out/c.png"), 600)
    assert text.startswith("Collage 600x600 saved as:")
    assert text.endswith(str(Path("out/c.png")))
    assert "600x600" in format_success("c.png", 600, "ru")


def test_fill_status_text() -> None:
    status = FillStatus(filled=2, total=9)
    assert format_fill_status(status) == "Filled 2 of 9 cells"
    assert not status.complete
