from __future__ import annotations

import pytest

from hexpatch.core.rows import (
    ascii_char,
    format_offset,
    hex_cell,
    iter_rows,
    last_row_length,
    row_count,
)


def test_hex_cell_is_two_digit_uppercase() -> None:
    assert hex_cell(0) == "00"
    assert hex_cell(0x0A) == "0A"
    assert hex_cell(0xFF) == "FF"


def test_ascii_mapping() -> None:
    data = bytes([0x41, 0x00, 0x20, 0x7E, 0x7F, 0x1F, 0x80, 0x2E])
    assert "".join(ascii_char(b) for b in data) == "A. ~...."


def test_format_offset() -> None:
    assert format_offset(0) == "00000000"
    assert format_offset(0x1A2B) == "00001A2B"


@pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 31, 32, 1000])
def test_row_width_properties(length: int) -> None:
    rows = row_count(length)
    assert rows * 16 >= length
    last = last_row_length(length)
    if length == 0:
        assert rows == 0 and last == 0
    else:
        assert last == (length % 16 or 16)
        assert (rows - 1) * 16 + last == length


def test_iter_rows_offsets_and_short_tail() -> None:
    data = bytes(range(40))
    rows = list(iter_rows(data, 0x100))
    assert [off for off, _ in rows] == [0x100, 0x110, 0x120]
    assert rows[0][1] == bytes(range(16))
    assert rows[-1][1] == bytes(range(32, 40))
