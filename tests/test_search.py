from __future__ import annotations

import pytest

from hexpatch.core.search import (
    InvalidHexLiteral,
    SearchEngine,
    SearchMode,
    SearchStatus,
    encode_pattern,
    find_all,
)

ABAB = bytes([0x41, 0x42, 0x41, 0x42])


def run(query: str, data: bytes, mode: SearchMode = SearchMode.ASCII) -> SearchEngine:
    engine = SearchEngine()
    engine.set_mode(mode)
    engine.set_query(query)
    engine.execute(data)
    return engine


def test_engine_starts_idle() -> None:
    engine = SearchEngine()
    assert engine.state is SearchStatus.IDLE
    assert engine.mode is SearchMode.ASCII
    assert engine.matches == []
    assert engine.cursor is None
    assert engine.current_match_range() is None


def test_setters_do_not_scan() -> None:
    engine = SearchEngine()
    engine.set_query("AB")
    engine.set_mode(SearchMode.HEX)
    assert engine.matches == []
    assert engine.state is SearchStatus.IDLE


def test_encode_pattern_ascii_and_hex() -> None:
    assert encode_pattern("AB", SearchMode.ASCII) == b"AB"
    assert encode_pattern("de ad\tBE\nef", SearchMode.HEX) == b"\xde\xad\xbe\xef"
    assert encode_pattern("", SearchMode.HEX) == b""


@pytest.mark.parametrize("query", ["4", "41 4", "zz", "0x41", "41-42"])
def test_encode_pattern_rejects_bad_hex(query: str) -> None:
    with pytest.raises(InvalidHexLiteral):
        encode_pattern(query, SearchMode.HEX)


def test_find_all_includes_overlaps() -> None:
    assert find_all(b"aaa", b"aa") == [0, 1]
    assert find_all(b"abcabc", b"abc") == [0, 3]
    assert find_all(b"abc", b"") == []
    assert find_all(b"ab", b"abc") == []


def test_ascii_search() -> None:
    engine = run("AB", ABAB)
    assert engine.matches == [0, 2]
    assert engine.cursor == 0
    assert engine.state is SearchStatus.HAS_RESULTS
    assert engine.message == "Found 2 match(es)."
    assert engine.current_match_range() == (0, 2)


def test_hex_search_strips_whitespace() -> None:
    engine = run("41 42", ABAB, SearchMode.HEX)
    assert engine.matches == [0, 2]
    assert engine.pattern == b"AB"


def test_odd_hex_is_invalid_and_clears_matches() -> None:
    data = bytearray(ABAB)
    engine = run("AB", data)
    assert engine.matches
    engine.set_mode(SearchMode.HEX)
    engine.set_query("4")
    assert engine.execute(data) is SearchStatus.INVALID_PATTERN
    assert engine.matches == []
    assert engine.cursor is None
    assert engine.message == "Invalid Hex sequence."
    assert bytes(data) == ABAB


def test_empty_query_clears_search() -> None:
    engine = run("AB", ABAB)
    engine.set_query("")
    assert engine.execute(ABAB) is SearchStatus.IDLE
    assert engine.matches == []
    assert engine.message == ""


def test_not_found() -> None:
    engine = run("XYZ", ABAB)
    assert engine.state is SearchStatus.NO_RESULTS
    assert engine.cursor is None
    assert engine.message == "Not found."
    assert engine.next() is None
    assert engine.previous() is None
    assert engine.cursor is None


def test_execute_is_idempotent() -> None:
    engine = run("AB", ABAB)
    engine.next()
    first = list(engine.matches)
    engine.execute(ABAB)
    assert engine.matches == first
    assert engine.cursor == 0


def test_next_wraps_around() -> None:
    engine = run("A", b"A.A.A")
    assert engine.matches == [0, 2, 4]
    assert engine.current_offset() == 0
    assert engine.next() == 2
    assert engine.next() == 4
    assert engine.cursor == 2
    assert engine.next() == 0
    assert engine.cursor == 0


def test_previous_wraps_around() -> None:
    engine = run("A", b"A.A.A")
    assert engine.previous() == 4
    assert engine.cursor == 2
    assert engine.previous() == 2
    assert engine.previous() == 0


def test_navigation_without_cursor() -> None:
    engine = run("A", b"A.A.A")
    engine.cursor = None
    assert engine.previous() == 4
    assert engine.cursor == 2
    engine.cursor = None
    assert engine.next() == 0
    assert engine.cursor == 0


def test_matches_are_not_refreshed_after_edits() -> None:
    data = bytearray(b"xxABxx")
    engine = run("AB", data)
    data[2] = 0x00
    assert engine.matches == [2]
    engine.execute(data)
    assert engine.matches == []


def test_reset_keeps_query_and_mode() -> None:
    engine = run("41", ABAB, SearchMode.HEX)
    engine.reset()
    assert engine.matches == []
    assert engine.cursor is None
    assert engine.pattern == b""
    assert engine.state is SearchStatus.IDLE
    assert engine.query == "41"
    assert engine.mode is SearchMode.HEX
