"""Byte-pattern search with a wrapping match cursor."""

from __future__ import annotations

import logging
from enum import Enum

log = logging.getLogger(__name__)


class SearchMode(Enum):
    """How the query text becomes a byte pattern."""

    ASCII = "ascii"
    HEX = "hex"


class SearchStatus(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    HAS_RESULTS = "has_results"
    NO_RESULTS = "no_results"
    INVALID_PATTERN = "invalid_pattern"


class InvalidHexLiteral(ValueError):
    """Raised when a hex query has odd length or non-hex characters."""


def encode_pattern(query: str, mode: SearchMode) -> bytes:
    if mode is SearchMode.ASCII:
        return query.encode("utf-8")
    cleaned = "".join(query.split())
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise InvalidHexLiteral(f"invalid hex sequence: {query!r}") from None


def find_all(data: bytes | bytearray, pattern: bytes) -> list[int]:
    """Every offset where `pattern` starts, ascending, overlaps included."""
    if not pattern:
        return []
    hits: list[int] = []
    idx = data.find(pattern)
    while idx != -1:
        hits.append(idx)
        idx = data.find(pattern, idx + 1)
    return hits


class SearchEngine:
    """Search state for the loaded buffer.

    Setters never scan; only `execute` does. Matches are not refreshed when
    the buffer is edited afterwards: run `execute` again to resynchronize.
    """

    def __init__(self) -> None:
        self.mode: SearchMode = SearchMode.ASCII
        self.query: str = ""
        self.pattern: bytes = b""
        self.matches: list[int] = []
        self.cursor: int | None = None
        self.state: SearchStatus = SearchStatus.IDLE
        self.message: str = ""

    def set_mode(self, mode: SearchMode) -> None:
        self.mode = mode

    def set_query(self, text: str) -> None:
        self.query = text

    def reset(self) -> None:
        self.pattern = b""
        self.matches = []
        self.cursor = None
        self.state = SearchStatus.IDLE
        self.message = ""

    def has_results(self) -> bool:
        return bool(self.matches)

    def execute(self, data: bytes | bytearray) -> SearchStatus:
        self.matches = []
        self.cursor = None
        try:
            pattern = encode_pattern(self.query, self.mode)
        except InvalidHexLiteral:
            self.pattern = b""
            self.state = SearchStatus.INVALID_PATTERN
            self.message = "Invalid Hex sequence."
            log.debug("rejected hex query %r", self.query)
            return self.state

        if not pattern:
            self.pattern = b""
            self.state = SearchStatus.IDLE
            self.message = ""
            return self.state

        self.pattern = pattern
        self.state = SearchStatus.SEARCHING
        self.matches = find_all(data, pattern)
        if not self.matches:
            self.state = SearchStatus.NO_RESULTS
            self.message = "Not found."
        else:
            self.state = SearchStatus.HAS_RESULTS
            self.message = f"Found {len(self.matches)} match(es)."
            self.cursor = 0
        log.debug("%s search %r over %d bytes: %d match(es)",
                  self.mode.value, self.query, len(data), len(self.matches))
        return self.state

    def current_offset(self) -> int | None:
        if self.cursor is None or not (0 <= self.cursor < len(self.matches)):
            return None
        return self.matches[self.cursor]

    def next(self) -> int | None:
        if not self.matches:
            return None
        self.cursor = 0 if self.cursor is None else (self.cursor + 1) % len(self.matches)
        return self.matches[self.cursor]

    def previous(self) -> int | None:
        if not self.matches:
            return None
        total = len(self.matches)
        self.cursor = total - 1 if self.cursor is None else (self.cursor - 1) % total
        return self.matches[self.cursor]

    def current_match_range(self) -> tuple[int, int] | None:
        start = self.current_offset()
        if start is None:
            return None
        return (start, start + len(self.pattern))
