from __future__ import annotations

from PIL import Image
import pytest

from src.data.models import Arrival, RouteSnapshot
from src.logic.formatter import DEFAULT_ROUTE_COLOR, ROUTE_COLORS
from src.logic.transformer import COMPACT, SPACIOUS
from src.rendering.composer import (
    COLOR_BACKGROUND,
    DIVIDER_COLOR,
    FOOTER_HEIGHT,
    compose_column,
    compose_frame,
    row_height,
)
from src.rendering.emulator import save_frame
from src.rendering.layout import Column, SignLayout, build_column


def _routes(*names: str) -> tuple[RouteSnapshot, ...]:
    return tuple(
        RouteSnapshot(name, "Downtown", (Arrival(str(idx), "FULL", 120 + idx * 60),))
        for idx, name in enumerate(names)
    )


def _layout(left: Column, right: Column) -> SignLayout:
    return SignLayout(columns=(left, right), updated_text="Updated 12:00:00 PM")


def test_compose_frame_size_and_mode() -> None:
    layout = _layout(build_column("A", (), SPACIOUS), build_column("B", (), SPACIOUS))

    image = compose_frame(layout)

    assert isinstance(image, Image.Image)
    assert image.size == (256, 128)
    assert image.mode == "RGB"


def test_route_badges_use_route_colors() -> None:
    left = build_column("A", _routes("61A", "67"), SPACIOUS)
    right = build_column("B", _routes("999"), SPACIOUS)

    image = compose_frame(_layout(left, right))
    pixels = image.load()

    first_top = SPACIOUS.padding_y
    second_top = row_height(left.entries[0]) + SPACIOUS.padding_y
    assert pixels[SPACIOUS.padding_x, first_top] == ROUTE_COLORS["61A"]
    assert pixels[SPACIOUS.padding_x, second_top] == ROUTE_COLORS["67"]
    assert pixels[128 + SPACIOUS.padding_x, first_top] == DEFAULT_ROUTE_COLOR


def test_compact_rows_start_closer_to_edge() -> None:
    left = build_column("A", _routes("61C"), COMPACT)
    image = compose_frame(_layout(left, build_column("B", (), SPACIOUS)))
    pixels = image.load()

    assert pixels[COMPACT.padding_x, COMPACT.padding_y] == ROUTE_COLORS["61C"]


def test_placeholder_column_has_no_badge() -> None:
    image = compose_frame(_layout(build_column("A", (), SPACIOUS), build_column("B", (), SPACIOUS)))
    pixels = image.load()

    badge_pixels = [
        (x, y) for x in range(128) for y in range(128 - FOOTER_HEIGHT) if pixels[x, y] == DEFAULT_ROUTE_COLOR
    ]
    assert badge_pixels == []


def test_divider_between_columns() -> None:
    image = compose_frame(_layout(build_column("A", (), SPACIOUS), build_column("B", (), SPACIOUS)))
    pixels = image.load()

    assert pixels[128, 60] == DIVIDER_COLOR
    assert pixels[10, 128 - FOOTER_HEIGHT] == DIVIDER_COLOR


def test_rows_that_do_not_fit_are_dropped() -> None:
    column = build_column("A", _routes(*[str(n) for n in range(10)]), COMPACT)
    height = 2 * row_height(column.entries[0])

    image = compose_column(column, 128, height + 5)
    pixels = image.load()

    assert pixels[COMPACT.padding_x, row_height(column.entries[0]) + COMPACT.padding_y] == DEFAULT_ROUTE_COLOR
    assert pixels[COMPACT.padding_x, height + COMPACT.padding_y] == COLOR_BACKGROUND
    assert image.size == (128, height + 5)


def test_odd_width_rejected() -> None:
    layout = _layout(build_column("A", (), SPACIOUS), build_column("B", (), SPACIOUS))

    with pytest.raises(ValueError):
        compose_frame(layout, width=255)


def test_save_frame_writes_png(tmp_path) -> None:
    layout = _layout(build_column("A", _routes("61A"), SPACIOUS), build_column("B", (), SPACIOUS))
    target = tmp_path / "out" / "sign.png"

    written = save_frame(compose_frame(layout), str(target))

    assert written == target
    assert target.exists()
    assert not (tmp_path / "out" / ".sign.png.tmp").exists()
    with Image.open(target) as reloaded:
        assert reloaded.size == (256, 128)
