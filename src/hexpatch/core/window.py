"""Virtualized row window: which slice of the buffer must be rendered.

Only the rows around the viewport are materialized, so the cost of a redraw
does not depend on file size. Units are whatever the host scrolls in
(terminal lines for the TUI, where a row is one line tall).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

BYTES_PER_ROW = 16
ROW_HEIGHT = 1
OVERSCAN_ROWS = 10


@dataclass(frozen=True)
class Window:
    start_row: int
    end_row: int
    start_byte: int
    end_byte: int
    translate_y: float
    total_content_height: float
    first_visible_row: int
    visible_row_count: int

    @property
    def row_count(self) -> int:
        return max(0, self.end_row - self.start_row)

    def is_empty(self) -> bool:
        return self.start_byte >= self.end_byte


def total_rows(total_length: int, row_width: int = BYTES_PER_ROW) -> int:
    return math.ceil(total_length / row_width)


def compute_window(
    scroll_offset: float,
    viewport_height: float,
    total_length: int,
    *,
    row_height: float = ROW_HEIGHT,
    overscan: int = OVERSCAN_ROWS,
    row_width: int = BYTES_PER_ROW,
) -> Window:
    """Map a scroll position onto the row and byte range to render."""
    rows = total_rows(total_length, row_width)
    content_height = rows * row_height
    first_visible = math.floor(scroll_offset / row_height)
    visible_count = math.ceil(viewport_height / row_height)
    half = overscan // 2
    start_row = max(0, first_visible - half)
    end_row = min(rows, first_visible + visible_count + half)

    if total_length == 0 or start_row >= end_row:
        start_byte = end_byte = 0
    else:
        start_byte = start_row * row_width
        end_byte = min(total_length, end_row * row_width)

    return Window(
        start_row=start_row,
        end_row=end_row,
        start_byte=start_byte,
        end_byte=end_byte,
        translate_y=start_row * row_height,
        total_content_height=content_height,
        first_visible_row=first_visible,
        visible_row_count=visible_count,
    )


def scroll_offset_for_byte(
    byte_offset: int,
    viewport_height: float,
    *,
    row_height: float = ROW_HEIGHT,
    row_width: int = BYTES_PER_ROW,
) -> float:
    """Scroll position that centers the row holding `byte_offset`."""
    target_row = byte_offset // row_width
    return max(0, target_row * row_height - viewport_height / 2)


def max_scroll_offset(
    total_length: int,
    viewport_height: float,
    *,
    row_height: float = ROW_HEIGHT,
    row_width: int = BYTES_PER_ROW,
) -> float:
    content = total_rows(total_length, row_width) * row_height
    return max(0, content - viewport_height)
