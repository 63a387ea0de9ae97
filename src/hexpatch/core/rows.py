from __future__ import annotations

from collections.abc import Iterator

from hexpatch.core.window import BYTES_PER_ROW


def hex_cell(b: int) -> str:
    return f"{b:02X}"


def ascii_char(b: int) -> str:
    return chr(b) if 0x20 <= b <= 0x7E else "."


def format_offset(offset: int) -> str:
    return f"{offset:08X}"


def row_count(length: int, row_width: int = BYTES_PER_ROW) -> int:
    return -(-length // row_width)


def last_row_length(length: int, row_width: int = BYTES_PER_ROW) -> int:
    """Bytes on the final row; 0 when there are no rows at all."""
    if length == 0:
        return 0
    rem = length % row_width
    return rem or row_width


def iter_rows(
    data: bytes, start_byte: int, row_width: int = BYTES_PER_ROW
) -> Iterator[tuple[int, bytes]]:
    """Yield `(offset, chunk)` per row of `data`, which begins at `start_byte`."""
    for i in range(0, len(data), row_width):
        yield start_byte + i, data[i : i + row_width]
