"""Tests for the sparse grid-indexed image store."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from PIL import Image

from grid_collage.image_store import ImageStore
from grid_collage.models import SourceImage
from grid_collage.type_defs import GridCoordinate


def test_put_get_and_overwrite(
    store: ImageStore,
    make_image: Callable[..., Image.Image],
) -> None:
    first = make_image(10, 10, "red")
    second = make_image(20, 20, "blue")

    store.put((0, 1), first, "first.png")
    assert store.get((0, 1)).image is first
    assert store.get((0, 1)).source_id == "first.png"

    store.put((0, 1), second, "second.png")
    assert store.count() == 1
    assert store.get((0, 1)).image is second
    assert store.get((5, 5)) is None


def test_put_accepts_source_image_and_renames(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    entry = SourceImage(image=sample_image, source_id="/tmp/a.png")
    assert store.put((1, 1), entry) is entry

    renamed = store.put((1, 2), entry, "b.png")
    assert renamed.image is sample_image
    assert renamed.source_id == "b.png"


def test_negative_coordinate_rejected(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    with pytest.raises(ValueError, match="non-negative"):
        store.put((-1, 0), sample_image, "x.png")
    assert len(store) == 0


def test_remove_and_clear(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    store.put((0, 0), sample_image, "a")
    store.put((1, 0), sample_image, "b")

    store.remove((0, 0))
    store.remove((9, 9))  # empty cell is a no-op
    assert (0, 0) not in store
    assert GridCoordinate(1, 0) in store

    store.clear()
    assert store.count() == 0


def test_snapshot_and_counts_exclude_stale_entries(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    store.put((0, 0), sample_image, "a")
    store.put((1, 1), sample_image, "b")
    store.put((2, 0), sample_image, "row out")
    store.put((0, 3), sample_image, "col out")

    snap = store.snapshot_valid(2)
    assert set(snap) == {GridCoordinate(0, 0), GridCoordinate(1, 1)}
    assert store.count_valid(2) == 2  # noqa: PLR2004
    assert store.count_valid(4) == 4  # noqa: PLR2004
    assert store.count() == 4  # noqa: PLR2004


def test_snapshot_is_detached_and_read_only(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    store.put((0, 0), sample_image, "a")
    snap = store.snapshot_valid(3)

    store.put((1, 1), sample_image, "b")
    store.remove((0, 0))

    assert list(snap) == [GridCoordinate(0, 0)]
    with pytest.raises(TypeError):
        snap[GridCoordinate(2, 2)] = SourceImage(sample_image, "c")  # type: ignore[index]


def test_prune_drops_only_out_of_range(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    store.put((0, 0), sample_image, "a")
    store.put((3, 1), sample_image, "b")
    store.put((1, 4), sample_image, "c")

    assert store.prune(2) == 2  # noqa: PLR2004
    assert store.coordinates() == [GridCoordinate(0, 0)]
    assert store.prune(2) == 0


def test_coordinates_are_row_major(
    store: ImageStore,
    sample_image: Image.Image,
) -> None:
    for coord in [(1, 0), (0, 2), (0, 1), (2, 2)]:
        store.put(coord, sample_image, str(coord))
    assert list(store) == [(0, 1), (0, 2), (1, 0), (2, 2)]
