"""Frame composer for the two-sided bus sign."""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFont

from src.rendering.layout import Column, ColumnEntry, SignLayout

DISPLAY_WIDTH = 256
DISPLAY_HEIGHT = 128

FOOTER_HEIGHT = 12
LINE_HEIGHT = 10
LINE_GAP = 2
BADGE_WIDTH = 26
TEXT_INSET = 2
CAPACITY_DOT_SIZE = 6

COLOR_BACKGROUND = (0, 0, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_DIM_TEXT = (110, 110, 110)
COLOR_SECONDARY = (136, 136, 136)
COLOR_APPROACHING = (255, 160, 0)
COLOR_PLACEHOLDER = (72, 72, 72)
COLOR_FOOTER = (88, 88, 88)
DIVIDER_COLOR = (42, 42, 42)

FONT = ImageFont.load_default()


def row_height(entry: ColumnEntry) -> int:
    """Two text lines plus the entry's vertical padding on both sides."""
    return 2 * entry.padding.padding_y + 2 * LINE_HEIGHT + LINE_GAP


def _text_width(draw: ImageDraw.ImageDraw, text: str) -> int:
    bbox = draw.textbbox((0, 0), text, font=FONT)
    return bbox[2] - bbox[0]


def _draw_placeholder(draw: ImageDraw.ImageDraw, entry: ColumnEntry, top: int) -> None:
    left = entry.padding.padding_x
    draw.text((left, top + entry.padding.padding_y), entry.route, font=FONT, fill=COLOR_PLACEHOLDER)


def _draw_entry(draw: ImageDraw.ImageDraw, entry: ColumnEntry, top: int, width: int) -> None:
    pad_x = entry.padding.padding_x
    line_top = top + entry.padding.padding_y
    second_top = line_top + LINE_HEIGHT + LINE_GAP
    right = width - pad_x

    draw.rectangle(
        (pad_x, line_top, pad_x + BADGE_WIDTH - 1, line_top + LINE_HEIGHT - 1),
        fill=entry.route_color,
    )
    draw.text((pad_x + TEXT_INSET, line_top), entry.route, font=FONT, fill=COLOR_TEXT)
    draw.text(
        (pad_x + BADGE_WIDTH + TEXT_INSET * 2, line_top),
        entry.destination,
        font=FONT,
        fill=COLOR_DIM_TEXT,
    )

    countdown = entry.countdown
    countdown_color = COLOR_APPROACHING if countdown.is_approaching else COLOR_TEXT
    countdown_width = _text_width(draw, countdown.text)
    draw.text((right - countdown_width, line_top), countdown.text, font=FONT, fill=countdown_color)

    if entry.secondary_text:
        draw.text((pad_x, second_top), entry.secondary_text, font=FONT, fill=COLOR_SECONDARY)

    if entry.capacity is not None:
        label_width = _text_width(draw, entry.capacity.label)
        label_left = right - label_width
        draw.text((label_left, second_top), entry.capacity.label, font=FONT, fill=entry.capacity.color)
        dot_right = label_left - TEXT_INSET
        dot_top = second_top + (LINE_HEIGHT - CAPACITY_DOT_SIZE) // 2
        draw.rectangle(
            (dot_right - CAPACITY_DOT_SIZE, dot_top, dot_right - 1, dot_top + CAPACITY_DOT_SIZE - 1),
            fill=entry.capacity.color,
        )


def compose_column(column: Column, width: int, height: int) -> Image.Image:
    """Draw one sign side; rows that do not fit are left off."""
    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)
    top = 0
    for entry in column.entries:
        bottom = top + row_height(entry)
        if bottom > height:
            break
        if entry.placeholder:
            _draw_placeholder(draw, entry, top)
        else:
            _draw_entry(draw, entry, top, width)
        top = bottom
    return image


def compose_frame(layout: SignLayout, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> Image.Image:
    """Compose an RGB frame with both columns side by side and a footer."""
    if width % 2 != 0:
        raise ValueError(f"Width must be even to split into two columns, got {width}.")
    if height <= FOOTER_HEIGHT:
        raise ValueError(f"Height must exceed the footer height ({FOOTER_HEIGHT}), got {height}.")

    column_width = width // 2
    column_height = height - FOOTER_HEIGHT
    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)

    for idx, column in enumerate(layout.columns):
        image.paste(compose_column(column, column_width, column_height), (idx * column_width, 0))

    draw = ImageDraw.Draw(image)
    draw.line((column_width, 0, column_width, column_height - 1), fill=DIVIDER_COLOR)
    draw.line((0, column_height, width - 1, column_height), fill=DIVIDER_COLOR)
    draw.text((TEXT_INSET, column_height + 1), layout.updated_text, font=FONT, fill=COLOR_FOOTER)
    return image


__all__ = ["compose_frame", "compose_column", "row_height"]
